"""Shared fixtures: a fresh application and store per test."""

from datetime import datetime, timedelta, timezone
from typing import Callable

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from users_api.app.core.config import Settings
from users_api.app.main import create_app
from users_api.app.services.user_store import UserStore


class SteppingClock:
    """Clock returning a fixed start time advanced by one second per call."""

    def __init__(self, start: datetime) -> None:
        self.current = start

    def __call__(self) -> datetime:
        now = self.current
        self.current = now + timedelta(seconds=1)
        return now


@pytest.fixture
def clock() -> SteppingClock:
    return SteppingClock(datetime(2024, 1, 1, tzinfo=timezone.utc))


@pytest.fixture
def store(clock: Callable[[], datetime]) -> UserStore:
    return UserStore(clock=clock)


@pytest.fixture
def app_settings() -> Settings:
    return Settings(environment="test", cors_origin="*", log_level="INFO")


@pytest.fixture
def app(app_settings: Settings) -> FastAPI:
    return create_app(settings=app_settings)


@pytest.fixture
def client(app: FastAPI) -> TestClient:
    return TestClient(app)
