from __future__ import annotations

import time
from typing import Optional

from event_ocr.domain.ports.Pipeline_interface import Pipeline_interface
from event_ocr.domain.schemas.input_data import ExtractionInput
from event_ocr.domain.schemas.result_data import EventResultData, MetaInfo
from event_ocr.lib.logger import get_logger
from event_ocr.lib.settings import EnvSettings
from .datetime_normalizer_service import DateTimeNormalizerService
from .description_service import DEFAULT_PARAGRAPH_GAP, DescriptionService
from .event_parser_service import EventParserService
from .pattern_extractor_service import PatternExtractorService
from .title_scorer_service import DEFAULT_TOP_N, TitleScorerService


class PipelineService(Pipeline_interface):
    def __init__(
        self,
        settings: Optional[EnvSettings] = None,
        normalizer: Optional[DateTimeNormalizerService] = None,
    ) -> None:
        self.logger = get_logger("pipeline")
        settings = settings or EnvSettings()
        patterns = PatternExtractorService()
        self.parser = EventParserService(
            patterns=patterns,
            title_scorer=TitleScorerService(patterns, top_n=settings.get_int("TITLE_TOP_N", DEFAULT_TOP_N)),
            description=DescriptionService(settings.get_int("PARAGRAPH_GAP", DEFAULT_PARAGRAPH_GAP)),
        )
        self.normalizer = normalizer or DateTimeNormalizerService()

    def run(self, input_data: ExtractionInput) -> EventResultData:
        t0 = time.perf_counter()
        meta = MetaInfo(
            request_id=input_data.context.request_id or None,
            block_count=len(input_data.blocks),
            timings_ms={},
        )
        self.logger.info("start pipeline: blocks=%d", meta.block_count)

        # 1) Field extraction
        raw = self.parser.parse(input_data.blocks)
        meta.timings_ms["extract"] = int((time.perf_counter() - t0) * 1000)

        # 2) Date/time normalization
        t1 = time.perf_counter()
        structured = self.normalizer.normalize(raw.date, raw.time, now=input_data.context.reference_time)
        meta.timings_ms["normalize"] = int((time.perf_counter() - t1) * 1000)
        if structured is None and raw.date is not None:
            self.logger.warning("date %r found but could not be normalized", raw.date)

        total_ms = int((time.perf_counter() - t0) * 1000)
        self.logger.info("done: total=%d ms", total_ms)
        meta.timings_ms["total"] = total_ms

        return EventResultData(meta=meta, raw=raw, structured=structured)
