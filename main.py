import logging
from contextlib import asynccontextmanager
from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from pymongo.errors import PyMongoError

from core.config import settings
from core.database import close_client, create_indexes
from core.exceptions import (
    ServiceException,
    service_exception_handler,
    validation_exception_handler,
    database_exception_handler,
)
from core.knowledge_test import load_test_definition
from routers import health, knowledge_test, users, vr_nugget
from services.scoring import ScoringEngine

logging.basicConfig(
    level=settings.log_level,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Startup: the test definition is read once; a failure only disables scoring
    definition = load_test_definition(settings.knowledge_test_config_path)
    app.state.test_definition = definition
    app.state.scoring_engine = ScoringEngine(definition) if definition is not None else None

    try:
        await create_indexes()
    except PyMongoError as e:
        # /db/health reports the outage; unique indexes are retried on next start
        logger.error(f"Could not create MongoDB indexes: {e}")
    yield
    logger.info("Shutting down")
    await close_client()


app = FastAPI(
    title="WebXR Study API",
    description="Knowledge test scoring and VR training telemetry for the WebXR study",
    version="1.0.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.add_exception_handler(ServiceException, service_exception_handler)
app.add_exception_handler(RequestValidationError, validation_exception_handler)
app.add_exception_handler(PyMongoError, database_exception_handler)

app.include_router(health.router)
app.include_router(users.router)
app.include_router(vr_nugget.router)
app.include_router(knowledge_test.router)
