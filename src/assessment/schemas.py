from __future__ import annotations

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field


class SubmissionRequest(BaseModel):
    rust_code: str
    ts_code: str
    ai_answer: str


class Submission(BaseModel):
    id: str
    rust_code: str
    ts_code: str
    ai_answer: str
    rust_score: float
    ts_score: float
    ai_score: float
    rust_time: float = Field(..., description="Execution round trip in milliseconds.")
    ts_time: float = Field(..., description="Execution round trip in milliseconds.")
    rust_wrong: int = Field(..., ge=0, le=1)
    ts_wrong: int = Field(..., ge=0, le=1)
    created_at: datetime

    model_config = {"frozen": True}


class ResultsResponse(BaseModel):
    total_submissions: int
    rust_success_rate: float
    ts_success_rate: float
    ai_success_rate: float
    avg_rust_time: float
    avg_ts_time: float
    total_rust_wrong: int
    total_ts_wrong: int
    submissions: List[Submission] = Field(default_factory=list)


class RecruiterRequest(BaseModel):
    custom_question: str
    mcq_question: str
    mcq_options: List[str]
    mcq_correct: str


class RecruiterNote(BaseModel):
    id: str
    custom_question: str
    mcq_question: str
    mcq_options: List[str]
    mcq_correct: str
    created_at: datetime

    model_config = {"frozen": True}


class RecruiterStatus(BaseModel):
    has_custom: bool
    input: Optional[RecruiterNote] = None


class RuntimeInfo(BaseModel):
    language: str
    version: str
    aliases: List[str] = Field(default_factory=list)
