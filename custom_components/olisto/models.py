# custom_components/olisto/models.py
"""The olisto integration models."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from .coordinator import OlistoSessionCoordinator
from .olisto_control import SessionClient


@dataclass
class OlistoData:
    """Root data container stored under hass.data[DOMAIN][entry_id].

    Attributes:
        title:       Entry title shown in HA (the account e-mail).
        client:      Session client shared by services and entities.
        coordinator: Periodic login health check.
        options:     Snapshot of entry.options at setup, used to tell option
                     changes (reload) from token writes (no reload).
    """

    title: str
    client: SessionClient
    coordinator: OlistoSessionCoordinator
    options: dict[str, Any] = field(default_factory=dict)
