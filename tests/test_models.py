"""Tests for provider projections and the in-memory store."""

from __future__ import annotations

from custom_components.olisto.olisto_control import Automation, Button, MemoryCredentialStore
from custom_components.olisto.olisto_control.models import buttons_from_channel_accounts, filter_by_name


def test_automation_choice_description() -> None:
    a = Automation.from_api({"_id": 7, "name": "Porch", "category": "Lights", "enabled": 1})
    assert a == Automation("7", "Porch", "Lights", True)
    assert a.as_choice().description == "Lights • Enabled"


def test_filter_keeps_order_and_ignores_case() -> None:
    items = [Button("1", "Alpha"), Button("2", "beta"), Button("3", "ALPHABET")]
    assert filter_by_name(items, "ALPHA") == [items[0], items[2]]
    assert filter_by_name(items, None) == items


def test_first_button_channel_wins_and_junk_is_skipped() -> None:
    accounts = [
        "not-a-channel",
        {"channel": "triggi-buttons", "units": [{"_id": "a", "name": "A"}, None]},
        {"channel": "triggi-buttons", "units": [{"_id": "b", "name": "B"}]},
    ]
    assert buttons_from_channel_accounts(accounts) == [Button("a", "A")]


def test_memory_store_credentials() -> None:
    store = MemoryCredentialStore({"username": "me@example.com"})
    assert store.credentials() is None
    store.set_credentials("me@example.com", "pw")
    assert store.credentials().password == "pw"
    assert store.pending_login is False
    assert store.token is None
