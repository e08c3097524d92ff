from __future__ import annotations

from typing import Iterable, List, Optional, Sequence

from event_ocr.domain.schemas.geometry import TextBlock
from event_ocr.lib.logger import get_logger


DEFAULT_PARAGRAPH_GAP = 20


class DescriptionService:
    """Assemble leftover blocks into paragraphs in reading order."""

    def __init__(self, paragraph_gap: int = DEFAULT_PARAGRAPH_GAP) -> None:
        self.logger = get_logger("extract.description")
        self.paragraph_gap = paragraph_gap

    def assemble(
        self, blocks: Sequence[TextBlock], exclude: Iterable[TextBlock]
    ) -> Optional[str]:
        excluded = {id(b) for b in exclude}
        remaining = [b for b in blocks if id(b) not in excluded]
        if not remaining:
            return None

        ordered = sorted(
            remaining,
            key=lambda b: (
                b.bounding_box.top if b.bounding_box else 0,
                b.bounding_box.left if b.bounding_box else 0,
            ),
        )

        paragraphs: List[List[TextBlock]] = []
        current: List[TextBlock] = []
        last_bottom = 0
        for block in ordered:
            top = block.bounding_box.top if block.bounding_box else 0
            bottom = block.bounding_box.bottom if block.bounding_box else 0
            if current and top > last_bottom + self.paragraph_gap:
                paragraphs.append(current)
                current = []
            current.append(block)
            last_bottom = bottom
        if current:
            paragraphs.append(current)

        description = "\n".join(
            " ".join(b.text.strip() for b in paragraph) for paragraph in paragraphs
        ).strip()
        self.logger.debug(
            "description: %d block(s) in %d paragraph(s)", len(remaining), len(paragraphs)
        )
        return description or None


def blocks_containing(blocks: Sequence[TextBlock], needle: Optional[str]) -> List[TextBlock]:
    """Blocks whose text contains `needle`, case-insensitively.

    Containment is by text, so a block that merely repeats the needle is
    matched too.
    """
    if not needle:
        return []
    low = needle.lower()
    return [b for b in blocks if low in b.text.lower()]
