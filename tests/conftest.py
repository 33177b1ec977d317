"""Shared test fixtures."""

from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from expense_intake.core.config import Settings
from expense_intake.main import create_app


@pytest.fixture
def settings() -> Settings:
    """Settings isolated from any local .env file."""
    return Settings(_env_file=None, json_logs=False, api_prefix="/api")


@pytest.fixture
def app(settings):
    return create_app(settings_override=settings)


@pytest.fixture
def client(app) -> TestClient:
    return TestClient(app, raise_server_exceptions=False)


@pytest.fixture
def valid_payload() -> dict:
    return {
        "amount": 12.5,
        "description": "Coffee beans",
        "category": "Food",
        "date": "2024-02-03",
    }
