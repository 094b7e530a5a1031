from __future__ import annotations

import pytest
from flask.testing import FlaskClient

from backend.app import create_app
from backend.config import Settings


@pytest.fixture()
def settings() -> Settings:
    return Settings(
        app_name="savings-calculator-test",
        env="test",
        log_level="WARNING",
        cors_origins=("http://localhost:5173",),
        fallback_years=10.0,
    )


@pytest.fixture()
def client(settings: Settings) -> FlaskClient:
    flask_app = create_app(settings)
    flask_app.config["TESTING"] = True
    with flask_app.test_client() as test_client:
        yield test_client
