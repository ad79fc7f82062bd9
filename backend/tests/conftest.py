"""
Shared pytest fixtures for Lantern tests.

This module provides:
- output: A RecordingOutput that captures everything emitted
- build_house: Factory for a small hand-built world (lit foyer, dark
  cellar, study with a box)
- world / engine: A built house world, bare or driven by a GameEngine
- worlds_dir: Directory with the YAML test worlds
- Custom markers for test categorization
"""

from __future__ import annotations

import sys
from pathlib import Path
from typing import Callable

import pytest

# Add backend to path for imports
backend_path = Path(__file__).parent.parent
if str(backend_path) not in sys.path:
    sys.path.insert(0, str(backend_path))

from lantern.engine.entity import Entity  # noqa: E402
from lantern.engine.location import Location  # noqa: E402
from lantern.engine.output import RecordingOutput  # noqa: E402
from lantern.engine.player import Player  # noqa: E402
from lantern.engine.processor import GameEngine  # noqa: E402
from lantern.engine.world import World  # noqa: E402
from lantern.models.direction import Direction  # noqa: E402
from lantern.models.flags import Flag  # noqa: E402


# =============================================================================
# Pytest Configuration
# =============================================================================


def pytest_configure(config: pytest.Config) -> None:
    """Register custom markers."""
    config.addinivalue_line(
        "markers", "slow: marks tests as slow (deselect with '-m \"not slow\"')"
    )
    config.addinivalue_line("markers", "integration: marks tests as integration tests")


# =============================================================================
# World Fixtures
# =============================================================================


def make_house(output: RecordingOutput | None = None) -> World:
    """Build the house world used across the engine tests.

    Layout:
        foyer (naturally lit) --north--> study (naturally lit)
        foyer --down--> cellar (dark)

    Contents:
        foyer: brass lamp (light source, off), wooden sign (readable)
        study: oak box (open-able container, closed) holding a gold coin,
               desk (surface), iron key (the box's key)
    """
    foyer = Location(
        "Foyer",
        "A grand foyer with a staircase leading down.",
        flags=[Flag.NATURALLY_LIT],
    )
    study = Location("Study", "Books line every wall.", flags=[Flag.NATURALLY_LIT])
    cellar = Location("Cellar", "Damp stone walls surround you.")

    foyer.set_exit(Direction.NORTH, study, bidirectional=True)
    foyer.set_exit(Direction.DOWN, cellar, bidirectional=True)

    lamp = Entity(
        "brass lamp",
        "A battered brass lamp.",
        synonyms=["lamp", "lantern"],
        flags=[Flag.TAKEABLE],
        location=foyer,
    )
    lamp.make_light_source()
    Entity(
        "wooden sign",
        "A sign nailed to the wall.",
        synonyms=["sign"],
        flags=[Flag.READABLE],
        location=foyer,
    )

    box = Entity(
        "oak box",
        "A sturdy oak box.",
        synonyms=["box"],
        flags=[Flag.CONTAINER, Flag.OPENABLE, Flag.TAKEABLE],
        location=study,
    )
    Entity("gold coin", "A shiny coin.", synonyms=["coin"], flags=[Flag.TAKEABLE], location=box)
    Entity("desk", "A writing desk.", flags=[Flag.SURFACE], location=study)
    key = Entity("iron key", "A heavy key.", synonyms=["key"], flags=[Flag.TAKEABLE, Flag.TOOL], location=study)
    box.set_key(key)

    player = Player(foyer)
    world = World(player, output=output, title="The House", version="2")
    for location in (foyer, study, cellar):
        world.register_location(location)
    return world


@pytest.fixture
def output() -> RecordingOutput:
    """Capture emitted text."""
    return RecordingOutput()


@pytest.fixture
def build_house() -> Callable[[], World]:
    """Factory producing a fresh house world on every call."""
    return make_house


@pytest.fixture
def world(output: RecordingOutput) -> World:
    """A house world writing to the recording output."""
    return make_house(output)


@pytest.fixture
def engine(output: RecordingOutput) -> GameEngine:
    """A GameEngine driving the house world, restartable."""
    return GameEngine(make_house, output=output)


@pytest.fixture
def worlds_dir() -> Path:
    """Directory holding the YAML test worlds."""
    return Path(__file__).parent / "fixtures" / "worlds"
