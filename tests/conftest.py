from __future__ import annotations

from datetime import datetime, timezone
from pathlib import Path

import pytest

from config_engine.clock import FixedClock
from config_engine.languages import Language, StaticLanguageRegistry, default_registry
from config_engine.store import ConfigStore, StoreOptions


@pytest.fixture
def registry() -> StaticLanguageRegistry:
    return default_registry()


@pytest.fixture
def english(registry: StaticLanguageRegistry) -> Language:
    return registry.require("en")


@pytest.fixture
def clock() -> FixedClock:
    return FixedClock(datetime(2024, 1, 2, 3, 4, 5, tzinfo=timezone.utc))


@pytest.fixture
def config_path(tmp_path: Path) -> Path:
    return tmp_path / ".writingtool.cfg"


@pytest.fixture
def make_store(config_path: Path, registry: StaticLanguageRegistry, english: Language, clock: FixedClock):
    """Factory for stores over the shared test file."""

    def _make(
        language: Language | None = english,
        *,
        path: Path | None = None,
        options: StoreOptions | None = None,
    ) -> ConfigStore:
        return ConfigStore(
            path or config_path,
            language,
            registry=registry,
            options=options,
            clock=clock,
        )

    return _make
