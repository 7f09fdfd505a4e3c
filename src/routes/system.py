from __future__ import annotations

from typing import List

from fastapi import APIRouter, Depends
from starlette.concurrency import run_in_threadpool

from src.assessment.router import get_execution_client
from src.assessment.schemas import RuntimeInfo
from src.services.execution_client import PistonClient

router = APIRouter()


def _aliases(item: dict) -> List[str]:
    aliases = item.get("aliases")
    if not isinstance(aliases, list):
        return []
    return [str(alias) for alias in aliases]


@router.get("/health")
def health():
    return {"status": "ok"}


@router.get("/runtimes", response_model=List[RuntimeInfo])
async def runtimes(client: PistonClient = Depends(get_execution_client)) -> List[RuntimeInfo]:
    """Runtimes offered by the execution provider; empty when it is unreachable."""
    listed = await run_in_threadpool(client.list_runtimes)
    return [
        RuntimeInfo(
            language=str(item["language"]),
            version=str(item["version"]),
            aliases=_aliases(item),
        )
        for item in listed
        if item.get("language") and item.get("version")
    ]
