"""Tests for moving the current buffer between tabs."""

from __future__ import annotations

import pytest

from tabscope.core.cache import ScopeState
from tabscope.core.move import MoveOrchestrator
from tabscope.types import InvalidTargetError


class TestSingleTab:
    def test_creates_exactly_one_tab(self, host, engine, tabs):
        ids = tabs([["a", "b"]])
        origin = host.active_workspace()
        host.focus_buffer(ids["a"])
        buffers_before = {b for b in range(1, 10) if host.is_buffer_valid(b)}

        result = engine.move_current_buffer()

        assert result.moved and result.created
        assert host.list_workspaces() == [origin, result.target]
        assert host.active_workspace() == origin
        assert host.listed_buffers() == [ids["b"]]
        assert engine.state.cache.get(result.target) == [ids["a"]]
        # The placeholder buffer of the new tab is gone
        assert {b for b in range(1, 10) if host.is_buffer_valid(b)} == buffers_before

    def test_new_tab_lists_only_moved_buffer(self, host, engine, tabs):
        ids = tabs([["a", "b"]])
        host.focus_buffer(ids["a"])
        result = engine.move_current_buffer()

        host.focus_workspace(result.target)

        assert host.listed_buffers() == [ids["a"]]
        assert host.active_buffer() == ids["a"]

    def test_explicit_target_ignored(self, host, engine, tabs):
        tabs([["a", "b"]])
        result = engine.move_current_buffer(7)
        assert result.moved and result.created
        assert host.errors == []

    def test_only_buffer_stays_listed_in_origin(self, host, engine, tabs):
        ids = tabs([["a"]])
        result = engine.move_current_buffer()
        assert result.moved
        assert host.listed_buffers() == [ids["a"]]
        assert engine.state.cache.get(result.target) == [ids["a"]]


class TestExistingTabs:
    def test_move_by_index(self, host, engine, tabs):
        ids = tabs([["a"], ["b", "c"]])
        first, second = host.list_workspaces()

        result = engine.move_current_buffer(1)

        assert result.moved and not result.created
        assert result.target == first
        assert engine.state.cache.get(first) == [ids["a"], ids["c"]]
        assert host.listed_buffers() == [ids["b"]]
        assert host.active_buffer() == ids["b"]

        host.focus_workspace(first)
        assert host.listed_buffers() == [ids["a"], ids["c"]]

    def test_numeric_string_target(self, host, engine, tabs):
        tabs([["a"], ["b", "c"]])
        first, _ = host.list_workspaces()
        assert engine.move_current_buffer("1").target == first

    def test_prompts_when_target_missing(self, host, engine, tabs):
        tabs([["a"], ["b", "c"]])
        first, _ = host.list_workspaces()
        host.answers.append("1")

        result = engine.move_current_buffer()

        assert host.prompts == [("input", "Move buf to: ")]
        assert result.target == first

    def test_prompts_when_target_not_numeric(self, host, engine, tabs):
        tabs([["a"], ["b", "c"]])
        host.answers.append("1")
        assert engine.move_current_buffer("abc").moved
        assert len(host.prompts) == 1

    def test_empty_answer_cancels(self, host, engine, tabs):
        ids = tabs([["a"], ["b", "c"]])
        first, second = host.list_workspaces()
        before = engine.state.cache.get(first)

        result = engine.move_current_buffer()

        assert result.moved is False
        assert host.errors == []
        assert engine.state.cache.get(first) == before
        assert host.is_buffer_listed(ids["c"])

    def test_invalid_target_reports_once(self, host, engine, tabs):
        ids = tabs([["a"], ["b", "c"]])
        first, second = host.list_workspaces()
        engine.revalidate()
        snapshot = {ws: list(bufs) for ws, bufs in engine.state.cache.items()}

        result = engine.move_current_buffer(99)

        assert result.moved is False
        assert host.errors == ["Invalid target tab"]
        assert {ws: list(bufs) for ws, bufs in engine.state.cache.items()} == snapshot
        assert host.is_buffer_listed(ids["c"])

    def test_garbage_answer_is_invalid_target(self, host, engine, tabs):
        tabs([["a"], ["b", "c"]])
        host.answers.append("left")
        assert engine.move_current_buffer().moved is False
        assert host.errors == ["Invalid target tab"]

    def test_move_to_own_tab_is_noop(self, host, engine, tabs):
        ids = tabs([["a"], ["b", "c"]])
        _, second = host.list_workspaces()

        result = engine.move_current_buffer(2)

        assert result.moved is False
        assert result.target == second
        assert host.is_buffer_listed(ids["c"])
        assert second not in engine.state.cache

    def test_unlisted_buffer_is_not_moved(self, host, engine, tabs):
        ids = tabs([["a"], ["b", "c"]])
        host.set_buffer_listed(ids["c"], False)

        result = engine.move_current_buffer(1)

        assert result.moved is False
        assert host.prompts == []
        assert host.errors == []


class TestMoveBuffer:
    def test_creates_missing_entry(self, host, engine, tabs):
        ids = tabs([["a", "b"]])
        engine.move_buffer(ids["a"], "elsewhere")
        assert engine.state.cache.get("elsewhere") == [ids["a"]]
        assert not host.is_buffer_listed(ids["a"])

    def test_origin_entry_not_pruned(self, host, engine, tabs):
        ids = tabs([["a", "b"]])
        tab = host.active_workspace()
        engine.revalidate()
        engine.move_buffer(ids["b"], "elsewhere")
        assert engine.state.cache.get(tab) == [ids["a"], ids["b"]]
        assert host.active_buffer() == ids["a"]

    def test_non_active_buffer_keeps_focus(self, host, engine, tabs):
        ids = tabs([["a", "b"]])
        engine.move_buffer(ids["a"], "elsewhere")
        assert host.active_buffer() == ids["b"]


def test_resolve_target_bounds(host):
    mover = MoveOrchestrator(host, ScopeState())
    assert mover.resolve_target(2, ["x", "y"]) == "y"
    for bad in (0, 3, -1, None):
        with pytest.raises(InvalidTargetError):
            mover.resolve_target(bad, ["x", "y"])
