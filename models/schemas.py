from __future__ import annotations
from datetime import datetime, timezone
from typing import Optional
from pydantic import BaseModel, Field


# ─────────────────────────────────────────
#  Helpers
# ─────────────────────────────────────────

def utcnow() -> datetime:
    return datetime.now(timezone.utc)


# ─────────────────────────────────────────
#  Documents
# ─────────────────────────────────────────

class User(BaseModel):
    user_id: str
    created_at: datetime


class KnowledgeTestResult(BaseModel):
    user_id: str
    total_error: Optional[int]     # None when the total error is infinite
    levenshtein_distance: int
    jaccard_similarity_of_objects: float
    jaccard_similarity_of_activities: float
    invalid: bool
    created_at: datetime = Field(default_factory=utcnow)


class VrNuggetResult(BaseModel):
    user_id: str
    duration_in_seconds: float
    number_of_errors: int
    number_of_helps: int
    created_at: datetime = Field(default_factory=utcnow)


class VrNuggetError(BaseModel):
    user_id: str
    step_name: str
    error_message: str


class VrNuggetHelp(BaseModel):
    user_id: str
    step_name: str


# ─────────────────────────────────────────
#  Request / Response schemas (API surface)
# ─────────────────────────────────────────

# Users
class CreateUserResponse(BaseModel):
    message: str = "User created successfully"
    user_id: str


# VR nugget
class VrNuggetResultRequest(BaseModel):
    user_id: str
    duration_in_seconds: float = Field(ge=0)
    number_of_errors: int = Field(ge=0)
    number_of_helps: int = Field(ge=0)
    error_stepnames: list[str]
    error_messages: list[str]
    help_stepnames: list[str]


class MessageResponse(BaseModel):
    message: str


# Knowledge test
class KnowledgeTestAnswerRequest(BaseModel):
    user_id: str
    answer: str


class KnowledgeTestAnswerResponse(BaseModel):
    message: str = "Knowledge test result received successfully"
    # None when the total error is infinite (see degenerate)
    total_error: Optional[float] = Field(serialization_alias="totalError")
    edit_distance: int = Field(serialization_alias="levenshteinDamerauDistance")
    jaccard_objects: float = Field(serialization_alias="jaccardSimilarityofObjects")
    jaccard_verbs: float = Field(serialization_alias="jaccardSimilarityOfVerbs")
    invalid: bool
    degenerate: bool
