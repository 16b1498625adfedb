import logging

from pymongo import AsyncMongoClient
from core.config import settings

logger = logging.getLogger(__name__)

_client: AsyncMongoClient | None = None

def get_client() -> AsyncMongoClient:
    global _client
    if _client is None:
        _client = AsyncMongoClient(settings.mongodb_uri)
    return _client


async def close_client():
    global _client
    if _client is not None:
        await _client.close()
        _client = None


def get_db():
    return get_client()[settings.mongodb_database]


# Shorthand collection accessors
def users_col():
    return get_db()["users"]


def knowledge_test_results_col():
    return get_db()["knowledge_test_results"]


def vr_nugget_results_col():
    return get_db()["vr_nugget_results"]


def vr_nugget_errors_col():
    return get_db()["vr_nugget_user_errors"]


def vr_nugget_helps_col():
    return get_db()["vr_nugget_user_helps"]


async def create_indexes():
    """Run once on startup to ensure indexes exist."""
    # One result per participant; duplicates surface as DuplicateKeyError
    await knowledge_test_results_col().create_index("user_id", unique=True)
    await vr_nugget_results_col().create_index("user_id", unique=True)
    await vr_nugget_errors_col().create_index("user_id")
    await vr_nugget_helps_col().create_index("user_id")


async def check_db_connection() -> dict:
    """Lightweight ping; never raises."""
    try:
        await get_db().command("ping")
        return {"ok": True}
    except Exception as e:
        return {"ok": False, "error": str(e) or e.__class__.__name__}
