from __future__ import annotations

import logging
from typing import Optional, Tuple

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from src import config
from src.assessment import router as assessment_router
from src.assessment.store import RecruiterNoteStore, SubmissionStore
from src.middleware.rate_limit import SubmissionRateLimitMiddleware
from src.routes.system import router as system_router
from src.services.execution_client import PistonClient

logger = logging.getLogger(__name__)


def _configure_logging() -> None:
    level = getattr(logging, config.LOG_LEVEL, None)
    if not isinstance(level, int):
        level = logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )


def create_app(
    execution_client: Optional[PistonClient] = None,
    submit_rate_limit: Optional[Tuple[int, int]] = None,
) -> FastAPI:
    """
    Build the API with fresh, empty stores.

    Args:
        execution_client: Client used for grading runs. Defaults to a
            ``PistonClient`` pointed at ``PISTON_BASE_URL``.
        submit_rate_limit: ``(requests, window_seconds)`` cap per client on
            ``/submit``. No limit when omitted.
    """
    _configure_logging()

    app = FastAPI(title="Candidate Assessment Service", version="1.0.0")
    app.state.submissions = SubmissionStore()
    app.state.recruiter_notes = RecruiterNoteStore()
    app.state.execution_client = execution_client or PistonClient()

    if submit_rate_limit is not None:
        requests, window_seconds = submit_rate_limit
        app.add_middleware(
            SubmissionRateLimitMiddleware,
            requests=requests,
            window_seconds=window_seconds,
        )

    # Outermost, so rate-limit responses carry CORS headers too
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(system_router)
    app.include_router(assessment_router)

    logger.info(f"Assessment service ready (execution provider: {app.state.execution_client.base_url})")
    return app


app = create_app()
