"""Shared fixtures: a fake provider and a TourApiClient wired to it."""

from __future__ import annotations

import pytest

from tests.fakes import FakeProvider, SleepRecorder, make_client


@pytest.fixture
def provider() -> FakeProvider:
    return FakeProvider()


@pytest.fixture
def sleeper() -> SleepRecorder:
    return SleepRecorder()


@pytest.fixture
def client(provider: FakeProvider, sleeper: SleepRecorder):
    return make_client(provider, sleeper)
