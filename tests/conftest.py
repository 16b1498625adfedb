"""
Pytest configuration.

No test needs a live MongoDB: collection accessors are patched with mocks.
"""

import pytest

from main import app


@pytest.fixture(autouse=True)
def reset_app_state():
    """Each test starts without a loaded knowledge test definition."""
    app.state.test_definition = None
    app.state.scoring_engine = None
    yield
    app.state.test_definition = None
    app.state.scoring_engine = None
