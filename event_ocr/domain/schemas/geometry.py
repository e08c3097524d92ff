from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator


class BoundingBox(BaseModel):
    """Axis-aligned rectangle in image pixel units."""

    model_config = ConfigDict(frozen=True)

    left: int = Field(..., ge=0)
    top: int = Field(..., ge=0)
    right: int = Field(..., ge=0)
    bottom: int = Field(..., ge=0)

    @model_validator(mode="after")
    def validate_extents(self) -> "BoundingBox":
        if self.right < self.left:
            raise ValueError("bounding box right edge is left of its left edge")
        if self.bottom < self.top:
            raise ValueError("bounding box bottom edge is above its top edge")
        return self

    @property
    def width(self) -> int:
        return self.right - self.left

    @property
    def height(self) -> int:
        return self.bottom - self.top

    @property
    def center_x(self) -> float:
        return (self.left + self.right) / 2

    @classmethod
    def from_bbox(cls, bbox: List[int]) -> "BoundingBox":
        """Build from a `[x0, y0, x1, y1]` list as emitted by OCR engines."""
        x0, y0, x1, y1 = bbox
        return cls(left=x0, top=y0, right=x1, bottom=y1)


class TextLine(BaseModel):
    model_config = ConfigDict(frozen=True)

    text: str


class TextBlock(BaseModel):
    """A geometrically grouped unit of recognized text.

    Blocks carry no identifier: within one extraction pass they are told apart
    by object identity, so two blocks with equal content remain distinct.
    """

    model_config = ConfigDict(frozen=True)

    text: str
    bounding_box: Optional[BoundingBox] = None
    lines: List[TextLine] = Field(default_factory=list)
