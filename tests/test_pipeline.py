"""Integration tests for EventParserService and PipelineService."""
from datetime import datetime, timezone

from event_ocr.domain.schemas.input_data import ExtractionInput, RequestContext
from event_ocr.lib.settings import EnvSettings
from event_ocr.service.event_parser_service import EventParserService
from event_ocr.service.pipeline_service import PipelineService


class TestEventParser:
    """Test cases for the full extraction pass."""

    def test_poster(self, poster_blocks):
        raw = EventParserService().parse(poster_blocks)
        assert raw.title == "SUMMER JAZZ NIGHT"
        assert raw.date == "21st June"
        assert raw.time == "7:00 PM - 10:30 PM"
        assert raw.location == "Riverside Park"
        assert raw.description == (
            "Live music from local bands food trucks and drinks.\nFree entry for everyone"
        )
        assert raw.raw_text == "\n".join(b.text for b in poster_blocks)

    def test_empty_blocks(self):
        raw = EventParserService().parse([])
        assert raw.title is None
        assert raw.date is None
        assert raw.time is None
        assert raw.location is None
        assert raw.description is None

    def test_location_comes_from_block_lines(self, block):
        blocks = [
            block("BOARD GAMES CLUB", (100, 0, 900, 80)),
            block("Weekly meetup\nLocation: Library Hall", (100, 200, 900, 260)),
            block("All welcome", (100, 400, 900, 420)),
        ]
        raw = EventParserService().parse(blocks)
        assert raw.location == "Library Hall"
        # the location block is excluded wholesale, including its first line
        assert raw.description == "All welcome"

    def test_block_without_lines_counts_as_one_line(self, block):
        blocks = [block("Venue: Old Mill", (0, 0, 500, 40), lines=[])]
        assert EventParserService().parse(blocks).location == "Old Mill"

    def test_containment_over_excludes(self, block):
        """Test that a block repeating the date text is dropped from the description."""
        blocks = [
            block("CRAFT MARKET", (100, 0, 900, 80)),
            block("Jan 21", (100, 100, 300, 130)),
            block("Last year on Jan 21 we sold out", (100, 300, 900, 320)),
            block("Bring cash", (100, 400, 900, 420)),
        ]
        raw = EventParserService().parse(blocks)
        assert raw.date == "Jan 21"
        assert raw.description == "Bring cash"


class TestPipeline:
    """Test cases for PipelineService."""

    def test_run_poster(self, pipeline, poster_blocks, reference_now):
        result = pipeline.run(
            ExtractionInput(
                blocks=poster_blocks,
                context=RequestContext(request_id="req-1", reference_time=reference_now),
            )
        )
        assert result.meta.request_id == "req-1"
        assert result.meta.block_count == len(poster_blocks)
        assert set(result.meta.timings_ms) == {"extract", "normalize", "total"}
        assert result.raw.title == "SUMMER JAZZ NIGHT"
        structured = result.structured
        assert not structured.all_day
        assert (structured.year, structured.month, structured.day) == (2025, 6, 21)
        assert (structured.hour, structured.minute) == (19, 0)
        assert structured.start_date_time == int(datetime(2025, 6, 21, 19, tzinfo=timezone.utc).timestamp()) * 1000
        assert structured.end_date_time == int(datetime(2025, 6, 21, 22, 30, tzinfo=timezone.utc).timestamp()) * 1000

    def test_run_is_deterministic(self, pipeline, poster_blocks, reference_now):
        payload = ExtractionInput(blocks=poster_blocks, context=RequestContext(reference_time=reference_now))
        first = pipeline.run(payload)
        second = pipeline.run(payload)
        assert first.raw == second.raw
        assert first.structured == second.structured
        assert first.raw.model_dump_json() == second.raw.model_dump_json()
        assert first.structured.model_dump_json() == second.structured.model_dump_json()

    def test_run_without_date(self, pipeline, block):
        result = pipeline.run(ExtractionInput(blocks=[block("Annual Conference", (0, 0, 400, 60))]))
        assert result.raw.title == "Annual Conference"
        assert result.structured is None

    def test_run_empty(self, pipeline):
        result = pipeline.run(ExtractionInput())
        assert result.raw.title is None
        assert result.raw.description is None
        assert result.structured is None

    def test_paragraph_gap_from_settings(self, monkeypatch, utc_normalizer, block):
        monkeypatch.setenv("PARAGRAPH_GAP", "500")
        pipeline = PipelineService(settings=EnvSettings(use_dotenv=False), normalizer=utc_normalizer)
        blocks = [
            block("GARDEN PARTY", (100, 0, 900, 80)),
            block("Lemonade", (100, 200, 300, 220)),
            block("Cake", (100, 600, 300, 620)),
        ]
        assert pipeline.run(ExtractionInput(blocks=blocks)).raw.description == "Lemonade Cake"

    def test_request_context_carries_only_pipeline_inputs(self):
        assert set(RequestContext.model_fields) == {"request_id", "reference_time"}
        context = RequestContext.model_validate({"request_id": "r", "client_tags": ["a"]})
        assert context.model_dump() == {"request_id": "r", "reference_time": None}
