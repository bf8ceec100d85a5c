import json
from functools import lru_cache
from pathlib import Path

from fastapi import APIRouter

ENDPOINTS_FILE = Path(__file__).resolve().parent.parent / "endpoints.json"

router = APIRouter(prefix="/api", tags=["api"])


@lru_cache()
def load_endpoints() -> dict:
    """Read the static route description shipped next to the package."""
    return json.loads(ENDPOINTS_FILE.read_text(encoding="utf-8"))


@router.get("")
async def describe_endpoints():
    return load_endpoints()
