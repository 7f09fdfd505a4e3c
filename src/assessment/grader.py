from __future__ import annotations

import logging
from dataclasses import dataclass

from src import config
from src.services.execution_client import (
    DEFAULT_COMPILE_TIMEOUT_MS,
    DEFAULT_RUN_TIMEOUT_MS,
    ExecutionFailure,
    PistonClient,
)

logger = logging.getLogger(__name__)

EXPECTED_OUTPUT = "6"
INCORRECT_SCORE = 50.0

KNOWLEDGE_CORRECT_ANSWER = "b"
KNOWLEDGE_CORRECT_SCORE = 92.0


@dataclass(frozen=True)
class Track:
    """One coding challenge: a provider runtime plus the harness that calls ``sum``."""

    name: str
    language: str
    version: str
    filename: str
    harness: str
    correct_score: float

    def wrap(self, snippet: str) -> str:
        return self.harness.format(snippet=snippet)


@dataclass(frozen=True)
class GradeResult:
    score: float
    elapsed_ms: float
    wrong: int


# Substituted whenever the execution provider could not be reached or understood
EXECUTION_FAILURE_GRADE = GradeResult(score=INCORRECT_SCORE, elapsed_ms=0.0, wrong=1)

RUST_TRACK = Track(
    name="rust",
    language="rust",
    version=config.PISTON_RUST_VERSION,
    filename="main.rs",
    harness=(
        "{snippet}\n"
        "\n"
        "fn main() {{\n"
        "    let result = sum(vec![1, 2, 3]);\n"
        '    println!("{{}}", result);\n'
        "}}\n"
    ),
    correct_score=92.0,
)

TYPESCRIPT_TRACK = Track(
    name="typescript",
    language="typescript",
    version=config.PISTON_TYPESCRIPT_VERSION,
    filename="main.ts",
    harness="{snippet}\n\nconsole.log(sum([1, 2, 3]));\n",
    correct_score=88.0,
)


def score_output(track: Track, output: str, elapsed_ms: float) -> GradeResult:
    """Map captured output to a grade; only the exact text ``6`` is correct."""
    if output.strip() == EXPECTED_OUTPUT:
        return GradeResult(score=track.correct_score, elapsed_ms=elapsed_ms, wrong=0)
    return GradeResult(score=INCORRECT_SCORE, elapsed_ms=elapsed_ms, wrong=1)


def grade(client: PistonClient, track: Track, snippet: str) -> GradeResult:
    """
    Run ``snippet`` inside the track's harness and grade the printed result.

    Never raises for provider problems: a failed execution grades as
    ``EXECUTION_FAILURE_GRADE``.
    """
    outcome = client.execute(
        track.language,
        track.version,
        track.filename,
        track.wrap(snippet),
        compile_timeout_ms=DEFAULT_COMPILE_TIMEOUT_MS,
        run_timeout_ms=DEFAULT_RUN_TIMEOUT_MS,
    )

    if isinstance(outcome, ExecutionFailure):
        logger.warning(f"{track.name} execution failed, using fallback grade: {outcome.reason}")
        return EXECUTION_FAILURE_GRADE

    result = score_output(track, outcome.output, outcome.elapsed_ms)
    logger.info(
        f"Graded {track.name}: score={result.score} elapsed_ms={result.elapsed_ms:.1f} "
        f"wrong={result.wrong}"
    )
    if result.wrong:
        logger.debug(f"{track.name} output was {outcome.output!r}")
    return result


def validate_knowledge(answer: str) -> float:
    """Score the multiple-choice answer; case and surrounding whitespace are ignored."""
    if answer.strip().casefold() == KNOWLEDGE_CORRECT_ANSWER:
        return KNOWLEDGE_CORRECT_SCORE
    return INCORRECT_SCORE
