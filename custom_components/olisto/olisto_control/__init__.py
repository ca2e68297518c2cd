# custom_components/olisto/olisto_control/__init__.py
"""Olisto cloud session library.

Host-independent: no Home Assistant imports here. The integration in the
parent package and the ``olistoctl`` CLI both build on these pieces.
"""
from __future__ import annotations

from .api import ProviderClient
from .auth import AuthGate
from .exception import (
    ErrorKind,
    InvalidArgument,
    LoginPending,
    MissingCredentials,
    NotAuthenticated,
    NotFound,
    OlistoError,
    ProviderRejected,
    ReloginFailed,
    TransportError,
)
from .models import Automation, Button, Choice, Credentials
from .session import SessionClient
from .store import CredentialStore, MemoryCredentialStore

__all__ = [
    "AuthGate",
    "Automation",
    "Button",
    "Choice",
    "CredentialStore",
    "Credentials",
    "ErrorKind",
    "InvalidArgument",
    "LoginPending",
    "MemoryCredentialStore",
    "MissingCredentials",
    "NotAuthenticated",
    "NotFound",
    "OlistoError",
    "ProviderClient",
    "ProviderRejected",
    "ReloginFailed",
    "SessionClient",
    "TransportError",
]
