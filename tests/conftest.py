"""Shared fixtures for the proximity search tests."""

from __future__ import annotations

import logging
from collections.abc import Iterator

import pytest
import structlog

from driverfinder.core.config import get_settings
from driverfinder.models.driver import Driver
from driverfinder.repositories.memory import InMemoryDriverRepository


@pytest.fixture(autouse=True)
def _fresh_settings(monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    for key in (
        "DRIVERFINDER_ENTITY_HASH_PRECISION",
        "DRIVERFINDER_QUERY_PRECISION",
        "DRIVERFINDER_EARTH_RADIUS_M",
        "DRIVERFINDER_STRICT_HASH_PRECISION",
    ):
        monkeypatch.delenv(key, raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()
    structlog.reset_defaults()
    root = logging.getLogger()
    for handler in list(root.handlers):
        if isinstance(handler.formatter, structlog.stdlib.ProcessorFormatter):
            root.removeHandler(handler)
            handler.close()


@pytest.fixture
def istanbul_drivers() -> list[Driver]:
    return [
        Driver.at(1, "Ahmet", 41.0082, 28.9784, hash_precision=7),
        Driver.at(2, "Mehmet", 41.0090, 28.9800, hash_precision=7),
        Driver.at(3, "Ayşe", 41.0200, 29.0000, hash_precision=7),
        Driver.at(4, "Fatma", 40.9950, 28.9600, hash_precision=7),
        Driver.at(5, "Can", 41.0085, 28.9788, hash_precision=7),
    ]


@pytest.fixture
def repository(istanbul_drivers: list[Driver]) -> InMemoryDriverRepository:
    return InMemoryDriverRepository(istanbul_drivers)
