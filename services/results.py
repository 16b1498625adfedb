"""
Result persistence.

Each participant may store one knowledge test result and one VR nugget
result. A second attempt is reported as SaveOutcome.duplicate instead of
raising, so callers can answer 409 without treating it as a failure of
the database. Any other PyMongoError propagates.
"""

import asyncio
import logging
from enum import Enum

from pymongo.errors import DuplicateKeyError

from core.database import (
    knowledge_test_results_col, vr_nugget_results_col,
    vr_nugget_errors_col, vr_nugget_helps_col,
)
from models.schemas import (
    KnowledgeTestResult, VrNuggetResult, VrNuggetError, VrNuggetHelp,
    VrNuggetResultRequest,
)
from services.scoring import ScoreResult

logger = logging.getLogger(__name__)


class SaveOutcome(str, Enum):
    created = "created"
    duplicate = "duplicate"


async def save_knowledge_test_result(user_id: str, result: ScoreResult) -> SaveOutcome:
    doc = KnowledgeTestResult(
        user_id=user_id,
        total_error=result.rounded_total_error,
        levenshtein_distance=result.edit_distance,
        jaccard_similarity_of_objects=result.jaccard_objects,
        jaccard_similarity_of_activities=result.jaccard_verbs,
        invalid=result.invalid,
    ).model_dump()

    try:
        await knowledge_test_results_col().insert_one(doc)
    except DuplicateKeyError:
        logger.info(f"Duplicate knowledge test result for user_id: {user_id}")
        return SaveOutcome.duplicate
    return SaveOutcome.created


async def save_vr_nugget_result(body: VrNuggetResultRequest) -> SaveOutcome:
    """
    Insert the summary row first; step errors and helps are only written
    once the summary has been accepted.
    """
    doc = VrNuggetResult(
        user_id=body.user_id,
        duration_in_seconds=body.duration_in_seconds,
        number_of_errors=body.number_of_errors,
        number_of_helps=body.number_of_helps,
    ).model_dump()

    try:
        await vr_nugget_results_col().insert_one(doc)
    except DuplicateKeyError:
        logger.info(f"Duplicate VR nugget result for user_id: {body.user_id}")
        return SaveOutcome.duplicate

    batches = []
    if body.error_stepnames:
        error_rows = [
            VrNuggetError(user_id=body.user_id, step_name=step, error_message=message).model_dump()
            for step, message in zip(body.error_stepnames, body.error_messages)
        ]
        batches.append(vr_nugget_errors_col().insert_many(error_rows))
    if body.help_stepnames:
        help_rows = [
            VrNuggetHelp(user_id=body.user_id, step_name=step).model_dump()
            for step in body.help_stepnames
        ]
        batches.append(vr_nugget_helps_col().insert_many(help_rows))

    await asyncio.gather(*batches)
    return SaveOutcome.created
