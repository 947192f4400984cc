# tests/conftest.py
from __future__ import annotations

from typing import Callable, Optional

import pytest
from loguru import logger

from tl_assistant.config.simulation_config import SimulationConfig
from tl_assistant.timeline.buffs.catalog import BuffCatalog, CatalogEntry
from tl_assistant.timeline.engine import TimelineEngine


@pytest.fixture(autouse=True)
def disable_file_logger():
    logger.remove()
    logger.add(lambda msg: None)
    yield


@pytest.fixture
def captured_logs():
    """Collects every log line emitted while the test runs."""
    captured = []
    sink_id = logger.add(lambda msg: captured.append(str(msg)), level="DEBUG")
    yield captured
    logger.remove(sink_id)


@pytest.fixture(scope="session")
def default_catalog() -> BuffCatalog:
    return BuffCatalog.load()


@pytest.fixture
def boost_catalog() -> BuffCatalog:
    """
    Two individual modifiers and a template, no grants.

        Boost  -> A, +300, 300 frames
        BoostB -> B, +200, 300 frames
    """
    return BuffCatalog([
        CatalogEntry(id="boost", name="Boost", target="A", magnitude=300, duration=300,
                     include=["^Boost$"]),
        CatalogEntry(id="boost_b", name="BoostB", target="B", magnitude=200, duration=300,
                     include=["^BoostB$"]),
        CatalogEntry(id="general", name="コスト回復力増加", target="NA", template=True),
    ])


@pytest.fixture
def make_engine(boost_catalog) -> Callable[..., TimelineEngine]:
    def _make(catalog: Optional[BuffCatalog] = None, **overrides) -> TimelineEngine:
        return TimelineEngine(SimulationConfig(**overrides), catalog or boost_catalog)

    return _make

