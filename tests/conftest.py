import pytest

from scicalc import reset_format_limits


@pytest.fixture(autouse=True)
def default_format_limits():
    """Restores the process-wide display limits around every test."""
    reset_format_limits()
    yield
    reset_format_limits()
