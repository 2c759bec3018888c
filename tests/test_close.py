"""Tests for the smart close workflow."""

from __future__ import annotations

import pytest

from tabscope.types import CloseAction, HostError


class TestSharedBuffer:
    def test_hide_when_tab_has_other_buffers(self, host, engine, tabs):
        ids = tabs([["a"], ["a", "b"]])
        host.focus_buffer(ids["a"])

        action = engine.close_buffer()

        assert action is CloseAction.HIDE
        assert host.is_buffer_valid(ids["a"])
        assert host.listed_buffers() == [ids["b"]]
        assert host.active_buffer() == ids["b"]
        assert engine.state.cache.get(host.active_workspace()) == [ids["b"]]

    def test_hidden_buffer_still_listed_in_other_tab(self, host, engine, tabs):
        ids = tabs([["a"], ["a", "b"]])
        first, _ = host.list_workspaces()
        host.focus_buffer(ids["a"])
        engine.close_buffer()

        host.focus_workspace(first)

        assert host.listed_buffers() == [ids["a"]]

    def test_only_buffer_closes_tab_and_keeps_buffer(self, host, engine, tabs):
        ids = tabs([["b", "c"], ["b"]])
        first, second = host.list_workspaces()

        action = engine.close_buffer()

        assert action is CloseAction.CLOSE_WORKSPACE
        assert host.list_workspaces() == [first]
        assert host.is_buffer_valid(ids["b"])
        assert ids["b"] in host.listed_buffers()
        assert second not in engine.state.cache
        assert engine.state.cache.get(first) == [ids["b"], ids["c"]]


class TestUnsharedBuffer:
    def test_only_buffer_with_other_tabs(self, host, engine, tabs):
        ids = tabs([["a"], ["b"]])
        first, second = host.list_workspaces()

        action = engine.close_buffer()

        assert action is CloseAction.DESTROY_AND_CLOSE_WORKSPACE
        assert not host.is_buffer_valid(ids["b"])
        assert host.list_workspaces() == [first]
        assert host.listed_buffers() == [ids["a"]]
        assert second not in engine.state.cache

    def test_multiple_buffers_destroys_and_shows_previous(self, host, engine, tabs):
        ids = tabs([["a", "b", "c"]])

        action = engine.close_buffer()

        assert action is CloseAction.DESTROY
        assert not host.is_buffer_valid(ids["c"])
        assert host.active_buffer() == ids["b"]
        assert engine.state.cache.get(host.active_workspace()) == [ids["a"], ids["b"]]

    def test_explicit_buffer_option(self, host, engine, tabs):
        ids = tabs([["a", "b", "c"]])

        engine.close_buffer(buffer=ids["a"])

        assert not host.is_buffer_valid(ids["a"])
        assert host.is_buffer_valid(ids["c"])
        assert host.listed_buffers() == [ids["b"], ids["c"]]

    def test_force_false_refuses_modified(self, host, engine, tabs):
        ids = tabs([["a", "b"]])
        host.set_modified(ids["b"])

        with pytest.raises(HostError, match="unsaved changes"):
            engine.close_buffer(force=False)

        assert host.is_buffer_valid(ids["b"])

    def test_force_default_discards_changes(self, host, engine, tabs):
        ids = tabs([["a", "b"]])
        host.set_modified(ids["b"])

        engine.close_buffer()

        assert not host.is_buffer_valid(ids["b"])

    def test_revalidates_stale_cache_first(self, host, engine, tabs):
        ids = tabs([["a", "b"]])
        tab = host.active_workspace()
        engine.state.cache.set(tab, [ids["b"]])

        # Cache claims a single buffer; the live list has two
        assert engine.close_buffer() is CloseAction.DESTROY


class TestLastTab:
    def test_asks_once_and_quits_on_yes(self, host, engine, tabs):
        tabs([["a"]])
        host.answers.append(1)

        action = engine.close_buffer()

        assert action is CloseAction.QUIT
        assert host.quit is True
        assert host.prompts == [("confirm", "You're about to close the last tab. Do you want to quit?")]

    def test_declined_leaves_everything(self, host, engine, tabs):
        ids = tabs([["a"]])
        tab = host.active_workspace()
        host.answers.append("n")

        action = engine.close_buffer()

        assert action is CloseAction.QUIT_DECLINED
        assert len(host.prompts) == 1
        assert host.quit is False
        assert host.list_workspaces() == [tab]
        assert host.is_buffer_listed(ids["a"])

    def test_dismissed_prompt_counts_as_no(self, host, engine, tabs):
        tabs([["a"]])
        assert engine.close_buffer() is CloseAction.QUIT_DECLINED
        assert host.quit is False

    def test_ask_false_quits_without_prompt(self, host, engine, tabs):
        tabs([["a"]])

        action = engine.close_buffer(ask=False)

        assert action is CloseAction.QUIT
        assert host.prompts == []
        assert host.quit is True
