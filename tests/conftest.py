import pytest
import structlog


@pytest.fixture(autouse=True)
def _reset_logging():
    """Undo any logging configuration a test (e.g. a CLI invocation) applied."""
    yield
    structlog.reset_defaults()
