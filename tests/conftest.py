from unittest.mock import MagicMock, patch

import pytest

from config import Settings
from server import create_app

TOKEN = "test-token"


@pytest.fixture
def settings():
    return Settings(
        allowed_emails=frozenset({"me@example.com", "partner@example.com"}),
        shared_password="hunter2",
        api_token=TOKEN,
        default_selector="all",
        api_url="https://api.lifx.test/v1",
    )


@pytest.fixture
def app(settings):
    app = create_app(settings)
    app.config["TESTING"] = True
    return app


@pytest.fixture
def client(app):
    return app.test_client()


def make_response(status_code=200, payload=None, text=""):
    response = MagicMock()
    response.status_code = status_code
    response.ok = 200 <= status_code < 300
    response.json.return_value = payload if payload is not None else {}
    response.text = text
    return response


@pytest.fixture
def lifx():
    """Patch the outbound requests functions used by the LIFX client."""
    with patch("api.get") as get, patch("api.post") as post, patch("api.put") as put:
        for mock in (get, post, put):
            mock.return_value = make_response(payload={"results": []})
        yield MagicMock(get=get, post=post, put=put)
