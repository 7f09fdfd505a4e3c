"""
Client for the Piston remote code-execution API.

Each call is a single best-effort request: no retries and no authentication.
Problems are reported as an ``ExecutionFailure`` value instead of being raised,
so callers decide how to score a run that never produced output.

Usage:
    client = PistonClient()
    outcome = client.execute("rust", "1.68.2", "main.rs", source)
    if isinstance(outcome, ExecutionResult):
        print(outcome.output, outcome.elapsed_ms)
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Union

import requests

from src import config

logger = logging.getLogger(__name__)

DEFAULT_COMPILE_TIMEOUT_MS = 10000
DEFAULT_RUN_TIMEOUT_MS = 3000


@dataclass(frozen=True)
class ExecutionResult:
    output: str
    elapsed_ms: float
    compile_output: Optional[str] = None


@dataclass(frozen=True)
class ExecutionFailure:
    reason: str


ExecutionOutcome = Union[ExecutionResult, ExecutionFailure]


class PistonClient:
    """Thin wrapper over ``POST /execute`` and ``GET /runtimes``."""

    def __init__(
        self,
        base_url: Optional[str] = None,
        http_slack_seconds: Optional[float] = None,
    ) -> None:
        self.base_url = (base_url or config.PISTON_BASE_URL).rstrip("/")
        self.http_slack_seconds = (
            config.PISTON_HTTP_SLACK_SECONDS if http_slack_seconds is None else http_slack_seconds
        )

    def execute(
        self,
        language: str,
        version: str,
        filename: str,
        source: str,
        compile_timeout_ms: int = DEFAULT_COMPILE_TIMEOUT_MS,
        run_timeout_ms: int = DEFAULT_RUN_TIMEOUT_MS,
    ) -> ExecutionOutcome:
        """
        Run ``source`` remotely and return the run stage's combined output.

        Args:
            language: Provider language key, e.g. ``"rust"``.
            version: Runtime version understood by the provider.
            filename: Name of the single virtual file holding ``source``.
            source: Full program text, harness included.
            compile_timeout_ms: Provider-side compile limit.
            run_timeout_ms: Provider-side run limit.

        Returns:
            ExecutionResult with trimmed output and wall-clock duration, or
            ExecutionFailure on any transport, status or parse problem.
        """
        payload = {
            "language": language,
            "version": version,
            "files": [{"name": filename, "content": source}],
            "stdin": "",
            "args": [],
            "compile_timeout": compile_timeout_ms,
            "run_timeout": run_timeout_ms,
        }
        http_timeout = (compile_timeout_ms + run_timeout_ms) / 1000.0 + self.http_slack_seconds

        started = time.perf_counter()
        try:
            response = requests.post(
                f"{self.base_url}/execute",
                json=payload,
                timeout=http_timeout,
            )
            response.raise_for_status()
            body = response.json()
        except requests.exceptions.RequestException as e:
            logger.warning(f"Piston execute failed for {language} {version}: {e}")
            return ExecutionFailure(reason=str(e))
        except ValueError as e:
            logger.warning(f"Piston returned a non-JSON body for {language}: {e}")
            return ExecutionFailure(reason=f"malformed response: {e}")
        elapsed_ms = (time.perf_counter() - started) * 1000.0

        return _parse_execute_body(body, elapsed_ms)

    def list_runtimes(self) -> List[Dict[str, Any]]:
        """Return the provider's runtime list, or an empty list if it is unavailable."""
        try:
            response = requests.get(f"{self.base_url}/runtimes", timeout=10)
            response.raise_for_status()
            runtimes = response.json()
        except (requests.exceptions.RequestException, ValueError) as e:
            logger.warning(f"Failed to list Piston runtimes: {e}")
            return []
        if not isinstance(runtimes, list):
            logger.warning(f"Unexpected Piston runtimes format: {type(runtimes).__name__}")
            return []
        return [runtime for runtime in runtimes if isinstance(runtime, dict)]


def _stage_output(stage: Dict[str, Any]) -> Optional[str]:
    output = stage.get("output")
    if output is None:
        output = stage.get("stdout")
    return output if isinstance(output, str) else None


def _parse_execute_body(body: Any, elapsed_ms: float) -> ExecutionOutcome:
    if not isinstance(body, dict):
        return ExecutionFailure(reason="malformed response: body is not an object")

    run = body.get("run")
    if not isinstance(run, dict):
        # Piston answers 200 with {"message": ...} for unknown runtimes
        message = body.get("message", "missing run stage")
        return ExecutionFailure(reason=f"malformed response: {message}")

    output = _stage_output(run)
    if output is None:
        return ExecutionFailure(reason="malformed response: run stage has no output")

    compile_output = None
    compile_stage = body.get("compile")
    if isinstance(compile_stage, dict):
        compile_output = _stage_output(compile_stage)
        if compile_stage.get("code"):
            logger.debug(f"Compile stage exited with {compile_stage.get('code')}: {compile_output}")

    return ExecutionResult(
        output=output.strip(),
        elapsed_ms=elapsed_ms,
        compile_output=compile_output.strip() if compile_output else None,
    )
