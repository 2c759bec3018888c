"""Shared fixtures for tabscope tests."""

from __future__ import annotations

import pytest

from tabscope.engine import ScopeEngine
from tabscope.host.memory import InMemoryHost
from tabscope.types import ScopeConfig


@pytest.fixture
def host() -> InMemoryHost:
    return InMemoryHost()


@pytest.fixture
def engine(host) -> ScopeEngine:
    eng = ScopeEngine(host, config=ScopeConfig())
    host.attach(eng)
    return eng


def build_tabs(host: InMemoryHost, tabs: list[list[str]]) -> dict[str, int]:
    """Open each list of names in its own tab; a repeated name is shared.

    Leaves the last tab active. Returns name -> buffer id.
    """
    ids: dict[str, int] = {}
    for i, names in enumerate(tabs):
        if i > 0:
            host.create_workspace()
        for name in names:
            ids[name] = host.open_buffer(name)
    return ids


@pytest.fixture
def tabs(host, engine):
    """Factory fixture: ``tabs([["a", "b"], ["c"]])``."""
    def _make(layout: list[list[str]]) -> dict[str, int]:
        return build_tabs(host, layout)
    return _make
