"""Shared test fixtures for the notiontree test suite."""

from __future__ import annotations

import pytest
from factories import FakeAssets

from notiontree.config import NotiontreeConfig


@pytest.fixture
def config(tmp_path) -> NotiontreeConfig:
    """Fast, deterministic configuration with a dummy token."""
    return NotiontreeConfig(
        token="test-token-1234",
        database_id="db-1",
        retry_max_attempts=3,
        retry_base_delay=0.0,
        retry_max_delay=0.0,
        retry_jitter=False,
        rate_limit_rps=10_000.0,
        asset_dir=str(tmp_path / "notion-images"),
    )


@pytest.fixture
def fake_assets() -> FakeAssets:
    """Asset cache double; records every resolve call."""
    return FakeAssets()
