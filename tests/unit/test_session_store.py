"""Tests for the in-memory session store."""

from stack_builder.core.models import SessionData, StackCategory, StackOption
from stack_builder.core.selection import StackSelection
from stack_builder.core.session import InMemorySessionStore


def test_get_or_create_returns_same_engine():
    store = InMemorySessionStore()

    first = store.get_or_create("s1")
    second = store.get_or_create("s1")

    assert first is second
    assert isinstance(first.selection, StackSelection)


def test_get_or_create_uses_injected_catalog():
    catalog = [StackCategory("only", "Only", (StackOption("one", "One", "one.svg"),))]
    store = InMemorySessionStore(catalog)

    selection = store.get_or_create("s1").selection

    assert [category.id for category in selection.catalog] == ["only"]


def test_delete_and_clear():
    store = InMemorySessionStore()
    store.get_or_create("s1")
    store.get_or_create("s2")

    store.delete("s1")
    store.delete("missing")
    assert store.get("s1") is None
    assert store.get("s2") is not None

    store.clear()
    assert store.get("s2") is None


def test_get_all_with_submissions():
    store = InMemorySessionStore()
    store.set("a", SessionData(selection=StackSelection(), submission={"formData": {}}))
    store.get_or_create("b")

    assert list(store.get_all_with_submissions()) == ["a"]
