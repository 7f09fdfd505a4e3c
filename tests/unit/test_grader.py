"""
Tests for snippet grading and knowledge-answer scoring
"""
import logging

import pytest

from src.assessment.grader import (
    EXECUTION_FAILURE_GRADE,
    RUST_TRACK,
    TYPESCRIPT_TRACK,
    GradeResult,
    grade,
    score_output,
    validate_knowledge,
)
from src.services.execution_client import ExecutionFailure, ExecutionResult
from tests.unit.test_index_shared import SUM_RUST, SUM_TS, StubExecutionClient


class TestHarness:
    def test_rust_harness_calls_sum_and_prints(self):
        source = RUST_TRACK.wrap(SUM_RUST)

        assert source.startswith(SUM_RUST)
        assert "fn main() {" in source
        assert "let result = sum(vec![1, 2, 3]);" in source
        assert 'println!("{}", result);' in source

    def test_typescript_harness_calls_sum_and_prints(self):
        source = TYPESCRIPT_TRACK.wrap(SUM_TS)

        assert source.startswith(SUM_TS)
        assert source.rstrip().endswith("console.log(sum([1, 2, 3]));")

    def test_snippet_braces_are_kept_verbatim(self):
        snippet = "fn sum(v: Vec<i32>) -> i32 { let x = {1}; v.iter().sum() }"
        assert RUST_TRACK.wrap(snippet).startswith(snippet)


class TestGrade:
    def test_correct_rust(self):
        client = StubExecutionClient({"rust": ExecutionResult(output="6", elapsed_ms=140.5)})
        assert grade(client, RUST_TRACK, SUM_RUST) == GradeResult(score=92.0, elapsed_ms=140.5, wrong=0)

    def test_correct_typescript(self):
        client = StubExecutionClient({"typescript": ExecutionResult(output="6", elapsed_ms=75.0)})
        assert grade(client, TYPESCRIPT_TRACK, SUM_TS) == GradeResult(score=88.0, elapsed_ms=75.0, wrong=0)

    @pytest.mark.parametrize("output", ["7", "", "6 6", "six", "error[E0425]: cannot find function `sum`"])
    def test_wrong_output_scores_incorrect(self, output):
        client = StubExecutionClient({"rust": ExecutionResult(output=output, elapsed_ms=200.0)})
        assert grade(client, RUST_TRACK, SUM_RUST) == GradeResult(score=50.0, elapsed_ms=200.0, wrong=1)

    def test_execution_failure_uses_fallback(self, caplog):
        client = StubExecutionClient({"typescript": ExecutionFailure(reason="read timed out")})

        with caplog.at_level(logging.WARNING, logger="src.assessment.grader"):
            result = grade(client, TYPESCRIPT_TRACK, SUM_TS)

        assert result == EXECUTION_FAILURE_GRADE
        assert result == GradeResult(score=50.0, elapsed_ms=0.0, wrong=1)
        assert "read timed out" in caplog.text

    def test_sends_track_runtime_and_fixed_timeouts(self):
        client = StubExecutionClient({"rust": ExecutionResult(output="6", elapsed_ms=1.0)})
        grade(client, RUST_TRACK, SUM_RUST)

        call = client.calls[0]
        assert call["language"] == "rust"
        assert call["version"] == RUST_TRACK.version
        assert call["filename"] == "main.rs"
        assert call["source"] == RUST_TRACK.wrap(SUM_RUST)
        assert call["compile_timeout_ms"] == 10000
        assert call["run_timeout_ms"] == 3000


def test_score_output_trims_before_comparing():
    assert score_output(RUST_TRACK, "\n6  ", 3.0).score == 92.0


@pytest.mark.parametrize("answer", ["B", " b ", "b", "\tB\n"])
def test_validate_knowledge_correct(answer):
    assert validate_knowledge(answer) == 92.0


@pytest.mark.parametrize("answer", ["a", "", "bb", "option b", "C"])
def test_validate_knowledge_incorrect(answer):
    assert validate_knowledge(answer) == 50.0
