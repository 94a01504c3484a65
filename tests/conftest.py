"""Shared fixtures for the jsonapi_errors test suite."""
import pytest

from jsonapi_errors.core.config import docs


@pytest.fixture(autouse=True)
def reset_docs_url():
    """Every test starts (and ends) with an empty documentation URL."""
    docs.url = ""
    yield
    docs.url = ""


@pytest.fixture
def docs_url():
    """Documentation URL used by the examples."""
    docs.url = "http://api.example.com/docs/errors"
    return docs.url
