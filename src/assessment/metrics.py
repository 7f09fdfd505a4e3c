from __future__ import annotations

from typing import Callable, List, Sequence

from .schemas import ResultsResponse, Submission

RUST_SUCCESS_THRESHOLD = 90.0
TS_SUCCESS_THRESHOLD = 85.0
AI_SUCCESS_THRESHOLD = 90.0


def _success_rate(submissions: Sequence[Submission], passed: Callable[[Submission], bool]) -> float:
    if not submissions:
        return 0.0
    hits = sum(1 for submission in submissions if passed(submission))
    return round(hits / len(submissions) * 100.0, 2)


def _average(values: List[float]) -> float:
    if not values:
        return 0.0
    return round(sum(values) / len(values), 2)


def compute_metrics(submissions: Sequence[Submission]) -> ResultsResponse:
    """
    Summarise a store snapshot for the recruiter dashboard.

    Rates are percentages in [0, 100] rounded to two decimals. Averages cover
    every submission, including failed executions recorded with 0 ms.
    """
    return ResultsResponse(
        total_submissions=len(submissions),
        rust_success_rate=_success_rate(submissions, lambda s: s.rust_score > RUST_SUCCESS_THRESHOLD),
        ts_success_rate=_success_rate(submissions, lambda s: s.ts_score > TS_SUCCESS_THRESHOLD),
        ai_success_rate=_success_rate(submissions, lambda s: s.ai_score > AI_SUCCESS_THRESHOLD),
        avg_rust_time=_average([s.rust_time for s in submissions]),
        avg_ts_time=_average([s.ts_time for s in submissions]),
        total_rust_wrong=sum(s.rust_wrong for s in submissions),
        total_ts_wrong=sum(s.ts_wrong for s in submissions),
        submissions=list(submissions),
    )
