from fastapi import APIRouter, status

from core.exceptions import error_response
from models.schemas import MessageResponse, VrNuggetResultRequest
from services.results import SaveOutcome, save_vr_nugget_result

router = APIRouter(tags=["VR nugget"])


@router.post("/vr-nugget-results", response_model=MessageResponse, status_code=status.HTTP_201_CREATED)
async def create_vr_nugget_result(body: VrNuggetResultRequest):
    """
    Store the completion telemetry of the VR training module.
    error_messages[i] describes the error raised at error_stepnames[i].
    """
    if len(body.error_messages) < len(body.error_stepnames):
        return error_response(
            status.HTTP_400_BAD_REQUEST,
            "Every entry of error_stepnames needs a matching entry in error_messages",
            "VALIDATION_ERROR",
        )

    outcome = await save_vr_nugget_result(body)
    if outcome == SaveOutcome.duplicate:
        return error_response(
            status.HTTP_409_CONFLICT,
            "A test result for this user already exists.",
            "DUPLICATE_ENTRY",
        )

    return MessageResponse(message="VR nugget result created successfully")
