"""Shared fixtures for Maia tests."""

import pytest

from maia.classroom import FocusedContent, LearnLineCatalog, ProgressTracker
from maia.schemas import LearnLine, NextAction, Step, TextContent
from maia.storage import MemoryKeyValueStore, ProfileStore


def text_item(item_id, next_action=None):
    return TextContent(id=item_id, text=f"Text {item_id}", next_action=next_action)


@pytest.fixture
def make_line():
    """Factory for small learn lines; one continue-button item by default."""
    def _make(line_id, prerequisites=(), steps=None, tags=()):
        if steps is None:
            steps = [Step(id=f"{line_id}-s1", content=[text_item("c1", NextAction.CONTINUE_BUTTON)])]
        return LearnLine(
            id=line_id,
            title=f"Line {line_id}",
            prerequisites=list(prerequisites),
            tags=list(tags),
            steps=steps,
        )
    return _make


@pytest.fixture
def chain_line(make_line):
    """
    Two steps: [A(continue), B(auto), C(continue)], [D].
    """
    return make_line("chain", steps=[
        Step(id="s1", content=[
            text_item("A", NextAction.CONTINUE_BUTTON),
            text_item("B", NextAction.AUTO_PROCEED),
            text_item("C", NextAction.CONTINUE_BUTTON),
        ]),
        Step(id="s2", content=[text_item("D")]),
    ])


@pytest.fixture
def kv():
    return MemoryKeyValueStore()


@pytest.fixture
def profile_store(kv):
    return ProfileStore(kv)


@pytest.fixture
def focus():
    return FocusedContent()


@pytest.fixture
def catalog(chain_line, make_line):
    return LearnLineCatalog([
        chain_line,
        make_line("basics"),
        make_line("advanced", prerequisites=["basics"]),
    ])


@pytest.fixture
def tracker(catalog, profile_store, focus):
    return ProgressTracker(catalog, profile_store, focus=focus)
