"""Shared fixtures for the event extraction tests."""
from datetime import datetime, timezone
from typing import Optional

import pytest

from event_ocr.domain.schemas.geometry import BoundingBox, TextBlock, TextLine
from event_ocr.lib.settings import EnvSettings
from event_ocr.service.datetime_normalizer_service import DateTimeNormalizerService
from event_ocr.service.pipeline_service import PipelineService


def make_block(text: str, box: Optional[tuple] = None, lines: Optional[list] = None) -> TextBlock:
    """Build a TextBlock from text and an optional (left, top, right, bottom) tuple."""
    bbox = None
    if box is not None:
        left, top, right, bottom = box
        bbox = BoundingBox(left=left, top=top, right=right, bottom=bottom)
    line_texts = lines if lines is not None else text.split("\n")
    return TextBlock(text=text, bounding_box=bbox, lines=[TextLine(text=t) for t in line_texts])


@pytest.fixture
def block():
    return make_block


@pytest.fixture
def reference_now():
    return datetime(2025, 3, 10, 8, 0, tzinfo=timezone.utc)


@pytest.fixture
def utc_normalizer():
    return DateTimeNormalizerService(tz=timezone.utc)


@pytest.fixture
def poster_blocks():
    """A concert flyer as an OCR engine would hand it over."""
    return [
        make_block("SUMMER JAZZ NIGHT", (200, 50, 800, 130)),
        make_block("Sunday 21st June", (200, 150, 800, 190)),
        make_block("7:00 PM - 10:30 PM", (300, 200, 700, 240)),
        make_block("Venue: Riverside Park", (250, 250, 750, 290)),
        make_block("Live music from local bands", (100, 400, 900, 430)),
        make_block("food trucks and drinks.", (100, 435, 900, 465)),
        make_block("Free entry for everyone", (100, 600, 900, 630)),
    ]


@pytest.fixture
def pipeline(utc_normalizer):
    return PipelineService(settings=EnvSettings(use_dotenv=False), normalizer=utc_normalizer)
