from __future__ import annotations

import logging

from fastapi import FastAPI

from src import config

from .index import create_app

logger = logging.getLogger(__name__)


def build_app() -> FastAPI:
    """Production app: the API plus submission rate limiting unless disabled."""
    if config.env_flag("DISABLE_RATE_LIMIT"):
        logger.warning("Submission rate limiting is DISABLED. Only use this in trusted environments.")
        return create_app()

    submit_requests = config.env_int("SUBMIT_RATE_LIMIT_REQUESTS", 30, maximum=10000)
    submit_window = config.env_int("SUBMIT_RATE_LIMIT_WINDOW_SECONDS", 60, maximum=3600)
    logger.info(
        f"Submission rate limiting enabled: {submit_requests} requests per {submit_window} seconds"
    )
    return create_app(submit_rate_limit=(submit_requests, submit_window))


app = build_app()


def main() -> None:
    import uvicorn

    uvicorn.run(app, host=config.HOST, port=config.PORT)


if __name__ == "__main__":
    main()
