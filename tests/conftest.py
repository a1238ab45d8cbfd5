import os

import pytest
import httpx

from backoffhttp.domain.exceptions import ServiceError
from backoffhttp.domain.interfaces.http_provider import HttpProvider
from backoffhttp.infrastructure.config import settings

API_URL = "https://api.example.com/v1.0/users"


@pytest.fixture
def request_message():
    """A plain outbound request, opaque to the retry layer."""
    return httpx.Request("GET", API_URL, headers={"Authorization": "Bearer test-token"})


@pytest.fixture
def ok_response(request_message):
    return httpx.Response(200, json={"value": []}, request=request_message)


@pytest.fixture
def service_error(request_message):
    """Factory for ServiceError wrapping an httpx.HTTPStatusError with the given status."""
    def _make(status_code: int) -> ServiceError:
        response = httpx.Response(status_code, request=request_message)
        inner = httpx.HTTPStatusError(
            f"Server returned {status_code}", request=request_message, response=response
        )
        return ServiceError(f"Call failed with {status_code}", status_code=status_code, inner_exception=inner)
    return _make


@pytest.fixture
def mock_provider(mocker):
    mock = mocker.MagicMock(spec=HttpProvider)
    mock.send = mocker.AsyncMock()
    mock.aclose = mocker.AsyncMock()
    return mock


@pytest.fixture
def recorded_sleep(mocker):
    """Stand-in for asyncio.sleep that records the requested delays."""
    return mocker.AsyncMock(return_value=None)


@pytest.fixture(autouse=True)
def isolated_config(mocker):
    """Each test starts from an empty configuration with no BACKOFFHTTP_* env vars.

    os.environ is restored after the test, including values loaded from .env files.
    """
    mocker.patch.dict(os.environ)
    for name in [
        "BACKOFFHTTP_MAX_ATTEMPTS",
        "BACKOFFHTTP_INITIAL_DELAY",
        "BACKOFFHTTP_MAX_DELAY",
        "BACKOFFHTTP_CANCELLABLE_BACKOFF",
        "BACKOFFHTTP_LOG_LEVEL",
    ]:
        os.environ.pop(name, None)
    settings.reset_configuration()
    settings.clear_test_config()
    yield
    settings.reset_configuration()
    settings.clear_test_config()
