from __future__ import annotations

import asyncio
import logging
import uuid
from datetime import datetime, timezone

from fastapi import APIRouter, Body, Depends, Request
from starlette.concurrency import run_in_threadpool

from src.services.execution_client import PistonClient

from .grader import RUST_TRACK, TYPESCRIPT_TRACK, grade, validate_knowledge
from .metrics import compute_metrics
from .schemas import (
    RecruiterNote,
    RecruiterRequest,
    RecruiterStatus,
    ResultsResponse,
    Submission,
    SubmissionRequest,
)
from .store import RecruiterNoteStore, SubmissionStore

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Assessment"])


def get_submission_store(request: Request) -> SubmissionStore:
    return request.app.state.submissions


def get_recruiter_store(request: Request) -> RecruiterNoteStore:
    return request.app.state.recruiter_notes


def get_execution_client(request: Request) -> PistonClient:
    return request.app.state.execution_client


@router.post("/submit", response_model=Submission, summary="Grade and record a candidate submission")
async def submit(
    payload: SubmissionRequest = Body(...),
    submissions: SubmissionStore = Depends(get_submission_store),
    client: PistonClient = Depends(get_execution_client),
) -> Submission:
    # Both executions block on HTTP; run them side by side off the event loop
    rust_grade, ts_grade = await asyncio.gather(
        run_in_threadpool(grade, client, RUST_TRACK, payload.rust_code),
        run_in_threadpool(grade, client, TYPESCRIPT_TRACK, payload.ts_code),
    )

    submission = Submission(
        id=str(uuid.uuid4()),
        rust_code=payload.rust_code,
        ts_code=payload.ts_code,
        ai_answer=payload.ai_answer,
        rust_score=rust_grade.score,
        ts_score=ts_grade.score,
        ai_score=validate_knowledge(payload.ai_answer),
        rust_time=rust_grade.elapsed_ms,
        ts_time=ts_grade.elapsed_ms,
        rust_wrong=rust_grade.wrong,
        ts_wrong=ts_grade.wrong,
        created_at=datetime.now(timezone.utc),
    )
    await submissions.append(submission)
    logger.info(
        f"Recorded submission {submission.id}: rust={submission.rust_score} "
        f"ts={submission.ts_score} ai={submission.ai_score}"
    )
    return submission


@router.get("/results", response_model=ResultsResponse, summary="Dashboard metrics over all submissions")
async def results(submissions: SubmissionStore = Depends(get_submission_store)) -> ResultsResponse:
    return compute_metrics(await submissions.snapshot())


@router.post("/recruiter", response_model=RecruiterNote, summary="Replace the current custom questions")
async def set_recruiter_note(
    payload: RecruiterRequest = Body(...),
    notes: RecruiterNoteStore = Depends(get_recruiter_store),
) -> RecruiterNote:
    note = await notes.set(payload)
    logger.info(f"Recruiter note replaced with {note.id} ({len(note.mcq_options)} options)")
    return note


@router.get("/recruiter", response_model=RecruiterStatus, summary="Current custom questions, if any")
async def get_recruiter_note(notes: RecruiterNoteStore = Depends(get_recruiter_store)) -> RecruiterStatus:
    note = await notes.get()
    return RecruiterStatus(has_custom=note is not None, input=note)
