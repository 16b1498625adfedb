from typing import Optional

from fastapi import APIRouter, status
from bson import ObjectId
from bson.errors import InvalidId

from core.database import users_col
from core.exceptions import error_response
from models.schemas import CreateUserResponse, User, utcnow

router = APIRouter(tags=["Users"])


# The VR client can only issue GET requests at startup, hence GET for creation
@router.get("/create-new-user", response_model=CreateUserResponse, status_code=status.HTTP_201_CREATED)
async def create_new_user():
    """Register an anonymous study participant and return its id."""
    inserted = await users_col().insert_one({"created_at": utcnow()})
    return CreateUserResponse(user_id=str(inserted.inserted_id))


@router.get("/get-user", response_model=User)
async def get_user(user_id: Optional[str] = None):
    if user_id is None:
        return error_response(
            status.HTTP_400_BAD_REQUEST,
            "Missing required field. Please provide: user_id",
            "VALIDATION_ERROR",
        )

    try:
        oid = ObjectId(user_id)
    except (InvalidId, TypeError):
        return error_response(status.HTTP_400_BAD_REQUEST, "Invalid user_id", "VALIDATION_ERROR")

    doc = await users_col().find_one({"_id": oid})
    if not doc:
        return error_response(status.HTTP_404_NOT_FOUND, "User not found", "NOT_FOUND")

    return User(user_id=str(doc["_id"]), created_at=doc["created_at"])
