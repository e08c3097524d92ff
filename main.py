from __future__ import annotations

import json
import sys
from pathlib import Path

from event_ocr.domain.schemas.input_data import ExtractionInput
from event_ocr.lib.settings import EnvSettings
from event_ocr.service.pipeline_service import PipelineService


def build_input_from_file(path: Path) -> ExtractionInput:
    """Accept either `{"blocks": [...], "context": {...}}` or a bare block list."""
    data = json.loads(path.read_text(encoding="utf-8"))
    if isinstance(data, list):
        data = {"blocks": data}
    return ExtractionInput.model_validate(data)


def main() -> None:
    settings = EnvSettings()
    serve = settings.get_bool("SERVE")
    if serve and len(sys.argv) <= 1:
        # Run HTTP server; host/port from env
        import uvicorn
        host = settings.get("DOMAIN", "0.0.0.0")
        port = settings.get_int("PORT", 8080)
        uvicorn.run("event_ocr.transport.http.server:app", host=host, port=port, reload=False)
        return

    # CLI mode: first arg is a JSON file of text blocks
    if len(sys.argv) <= 1:
        print("Usage: python main.py <blocks.json>  # or set SERVE=1 to start HTTP server", flush=True)
        sys.exit(2)

    input_data = build_input_from_file(Path(sys.argv[1]))
    pipeline = PipelineService(settings=settings)
    result = pipeline.run(input_data)
    print(result.model_dump_json(indent=2), flush=True)


if __name__ == "__main__":
    main()
