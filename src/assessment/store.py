from __future__ import annotations

import asyncio
import uuid
from datetime import datetime, timezone
from typing import List, Optional

from .schemas import RecruiterNote, RecruiterRequest, Submission


class SubmissionStore:
    """Append-only in-memory log of graded submissions, kept for the process lifetime."""

    def __init__(self) -> None:
        self._lock = asyncio.Lock()
        self._submissions: List[Submission] = []

    async def append(self, submission: Submission) -> Submission:
        async with self._lock:
            self._submissions.append(submission)
            return submission

    async def snapshot(self) -> List[Submission]:
        async with self._lock:
            return list(self._submissions)


class RecruiterNoteStore:
    """Holds at most one recruiter note; each write replaces the previous one."""

    def __init__(self) -> None:
        self._lock = asyncio.Lock()
        self._notes: List[RecruiterNote] = []

    async def set(self, payload: RecruiterRequest) -> RecruiterNote:
        note = RecruiterNote(
            id=str(uuid.uuid4()),
            custom_question=payload.custom_question,
            mcq_question=payload.mcq_question,
            mcq_options=list(payload.mcq_options),
            mcq_correct=payload.mcq_correct,
            created_at=datetime.now(timezone.utc),
        )
        async with self._lock:
            self._notes.clear()
            self._notes.append(note)
            return note

    async def get(self) -> Optional[RecruiterNote]:
        async with self._lock:
            return self._notes[0] if self._notes else None
