import pytest
import structlog


@pytest.fixture(autouse=True)
def _reset_structlog():
    """The CLI configures structlog globally; restore defaults between tests."""
    yield
    structlog.reset_defaults()
