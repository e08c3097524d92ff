from __future__ import annotations

from typing import Dict

from fastapi import APIRouter

from event_ocr.lib.settings import EnvSettings


router = APIRouter()


@router.get("/settings", summary="Current server settings")
def get_settings() -> Dict[str, str]:
    return EnvSettings(use_dotenv=False).snapshot()
