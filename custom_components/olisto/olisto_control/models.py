# custom_components/olisto/olisto_control/models.py
"""Read-only projections of Olisto provider state."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Iterable, Mapping, Sequence, TypeVar

from .const import BUTTON_CHANNEL


@dataclass(frozen=True)
class Credentials:
    email: str
    password: str


@dataclass(frozen=True)
class Choice:
    """Autocomplete entry handed to the host (id + label + hint)."""

    id: str
    name: str
    description: str = ""

    def as_dict(self) -> dict[str, str]:
        return {"id": self.id, "name": self.name, "description": self.description}


@dataclass(frozen=True)
class Automation:
    """A provider-side trigg."""

    id: str
    name: str
    category: str
    enabled: bool

    @classmethod
    def from_api(cls, raw: Mapping[str, Any]) -> "Automation":
        return cls(
            id=str(raw["_id"]),
            name=str(raw.get("name") or ""),
            category=str(raw.get("category") or ""),
            enabled=bool(raw.get("enabled")),
        )

    def as_choice(self) -> Choice:
        state = "Enabled" if self.enabled else "Disabled"
        return Choice(self.id, self.name, f"{self.category} • {state}")


@dataclass(frozen=True)
class Button:
    """A virtual push button unit of the triggi-buttons channel."""

    id: str
    name: str

    @classmethod
    def from_api(cls, raw: Mapping[str, Any]) -> "Button":
        return cls(id=str(raw["_id"]), name=str(raw.get("name") or ""))

    def as_choice(self) -> Choice:
        return Choice(self.id, self.name)


def buttons_from_channel_accounts(accounts: Iterable[Mapping[str, Any]]) -> list[Button]:
    """Pick the button channel and return its visible units.

    Accounts identify the channel either by ``channel`` or ``name``.
    """
    for account in accounts:
        if not isinstance(account, Mapping):
            continue
        if BUTTON_CHANNEL not in (account.get("channel"), account.get("name")):
            continue
        units = account.get("units") or []
        return [
            Button.from_api(u)
            for u in units
            if isinstance(u, Mapping) and not u.get("hideFromChannelDetails")
        ]
    return []


_Named = TypeVar("_Named", Automation, Button)


def filter_by_name(items: Sequence[_Named], query: str | None) -> list[_Named]:
    """Case-insensitive substring match on ``name``; empty query keeps all."""
    q = (query or "").lower()
    if not q:
        return list(items)
    return [item for item in items if q in item.name.lower()]


__all__ = [
    "Automation",
    "Button",
    "Choice",
    "Credentials",
    "buttons_from_channel_accounts",
    "filter_by_name",
]
