"""Unit tests for the geometry model and the OCR line adapter."""
import pytest
from pydantic import ValidationError

from event_ocr.domain.schemas.geometry import BoundingBox, TextBlock
from event_ocr.domain.schemas.ocr_data import OCRData, OCRLine, OCRPage
from event_ocr.service.layout_service import LayoutService


class TestBoundingBox:
    def test_derived_values(self):
        bbox = BoundingBox(left=10, top=20, right=110, bottom=70)
        assert bbox.width == 100
        assert bbox.height == 50
        assert bbox.center_x == 60

    def test_from_bbox_list(self):
        assert BoundingBox.from_bbox([1, 2, 3, 4]) == BoundingBox(left=1, top=2, right=3, bottom=4)

    @pytest.mark.parametrize(
        "coords",
        [
            {"left": -1, "top": 0, "right": 10, "bottom": 10},
            {"left": 20, "top": 0, "right": 10, "bottom": 10},
            {"left": 0, "top": 20, "right": 10, "bottom": 10},
        ],
    )
    def test_invalid_extents_rejected(self, coords):
        with pytest.raises(ValidationError):
            BoundingBox(**coords)

    def test_block_from_json(self):
        block = TextBlock.model_validate(
            {"text": "Hello", "bounding_box": {"left": 0, "top": 0, "right": 5, "bottom": 5}}
        )
        assert block.lines == []
        assert block.bounding_box.width == 5


class TestLayoutService:
    """Test cases for adapting line-level OCR output into blocks."""

    def _ocr(self):
        return OCRData(
            pages=[
                OCRPage(
                    num=1,
                    lines=[
                        OCRLine(text=" Book Swap ", bbox=[-3, 10, 200, 40], conf=0.9),
                        OCRLine(text="   ", bbox=[0, 50, 10, 60], conf=0.5),
                        OCRLine(text="Sat 10:00 AM", bbox=[0, 70, 150, 90]),
                    ],
                ),
                OCRPage(num=2, lines=[OCRLine(text="Back page", bbox=[0, 0, 10, 10])]),
            ]
        )

    def test_one_block_per_non_blank_line(self):
        blocks = LayoutService().blocks_from_ocr(self._ocr())
        assert [b.text for b in blocks] == ["Book Swap", "Sat 10:00 AM"]
        assert [ln.text for ln in blocks[0].lines] == ["Book Swap"]

    def test_negative_coordinates_clamped(self):
        blocks = LayoutService().blocks_from_ocr(self._ocr())
        assert blocks[0].bounding_box == BoundingBox(left=0, top=10, right=200, bottom=40)

    def test_page_selection(self):
        service = LayoutService()
        assert [b.text for b in service.blocks_from_ocr(self._ocr(), page=2)] == ["Back page"]
        assert service.blocks_from_ocr(self._ocr(), page=3) == []

    def test_inverted_extents_collapse(self):
        data = OCRData(pages=[OCRPage(num=1, lines=[OCRLine(text="Flipped", bbox=[50, 10, 20, 5])])])
        (block,) = LayoutService().blocks_from_ocr(data)
        assert block.bounding_box == BoundingBox(left=50, top=10, right=50, bottom=10)
