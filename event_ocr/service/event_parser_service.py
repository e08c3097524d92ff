from __future__ import annotations

from typing import List, Optional, Sequence

from event_ocr.domain.ports.Event_parser_provider import Event_parser_provider
from event_ocr.domain.schemas.event_data import RawEventData
from event_ocr.domain.schemas.geometry import TextBlock
from event_ocr.lib.logger import get_logger
from .description_service import DescriptionService, blocks_containing
from .pattern_extractor_service import PatternExtractorService
from .title_scorer_service import TitleScorerService


class EventParserService(Event_parser_provider):
    """Rule-based extractor for event posters and flyers.

    Key points:
    - Title is chosen on geometry (height, centering, position) and text shape,
      independently of the other fields.
    - Date and location are searched in the joined page text; time is searched
      block by block.
    - Whatever is not claimed by title/date/time/location becomes the
      description, grouped into paragraphs by vertical spacing.
    """

    def __init__(
        self,
        patterns: Optional[PatternExtractorService] = None,
        title_scorer: Optional[TitleScorerService] = None,
        description: Optional[DescriptionService] = None,
    ) -> None:
        self.logger = get_logger("extract")
        self.patterns = patterns or PatternExtractorService()
        self.title_scorer = title_scorer or TitleScorerService(self.patterns)
        self.description = description or DescriptionService()

    def parse(self, blocks: Sequence[TextBlock]) -> RawEventData:
        lines = self._collect_lines(blocks)
        text = "\n".join(b.text for b in blocks)

        title_block = self.title_scorer.select(blocks)
        date = self.patterns.extract_date(text)
        time, time_blocks = self.patterns.extract_time_from_blocks(blocks)
        location = self.patterns.extract_location(text, lines)

        exclude: List[TextBlock] = []
        if title_block is not None:
            exclude.append(title_block)
        exclude.extend(blocks_containing(blocks, date))
        exclude.extend(time_blocks)
        exclude.extend(blocks_containing(blocks, location))

        description = self.description.assemble(blocks, exclude)

        result = RawEventData(
            title=title_block.text if title_block is not None else None,
            date=date,
            time=time,
            location=location,
            description=description,
            raw_text=text,
        )
        self.logger.info(
            "parsed event: title=%s; date=%s; time=%s; location=%s; description=%s",
            result.title,
            result.date,
            result.time,
            result.location,
            result.description,
        )
        return result

    # ------------------------------------------------------------------
    # Parsing helpers

    def _collect_lines(self, blocks: Sequence[TextBlock]) -> List[str]:
        """Non-blank line texts of every block, in block order.

        A block without line detail counts as a single line.
        """
        lines: List[str] = []
        for block in blocks:
            texts = [ln.text for ln in block.lines] if block.lines else [block.text]
            lines.extend(t for t in texts if t.strip())
        return lines
