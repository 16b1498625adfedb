from fastapi import Request

from core.exceptions import ConfigNotLoaded
from core.knowledge_test import TestDefinition
from services.scoring import ScoringEngine


def get_test_definition(request: Request) -> TestDefinition:
    """FastAPI dependency: the definition loaded in the app lifespan."""
    definition = getattr(request.app.state, "test_definition", None)
    if definition is None:
        raise ConfigNotLoaded()
    return definition


def get_scoring_engine(request: Request) -> ScoringEngine:
    engine = getattr(request.app.state, "scoring_engine", None)
    if engine is None:
        raise ConfigNotLoaded()
    return engine
