# errors.py
# -*- coding: utf-8 -*-
"""
===============================================================================
sprestfw.core.errors — Fehlerarten des SharePoint-REST-Clients
===============================================================================
Hierarchie:
    SpRestError
    ├── InvalidArgument      (ungültige Item-ID, ungültige Konfiguration)
    ├── TransportError       (Netzwerkfehler oder HTTP-Status außerhalb 2xx)
    └── AuthError            (Request-Digest konnte nicht erneuert werden)
        └── AuthShapeMismatch (Antwort enthält keinen FormDigestValue)

Hinweise:
    - Alle Fehler sind terminal für den jeweiligen Aufruf (keine Retries).
    - TransportError trägt Status/URL/Methode und einen gekürzten Antworttext.

Autor: sprestfw maintainers
Version: 1.0.0 (2025-10-02)
===============================================================================
"""
from __future__ import annotations

from typing import Optional


class SpRestError(Exception):
    """Basisklasse aller sprestfw-Fehler."""


class InvalidArgument(SpRestError, ValueError):
    """Ungültiges Argument (z. B. leere Item-ID, max_items außerhalb 1..5000)."""


class TransportError(SpRestError):
    """
    HTTP- oder Netzwerkfehler.

    Attribute:
        status: HTTP-Status (None, wenn keine Antwort kam)
        url, method: aufgerufene URL/Methode
        text: gekürzter Antworttext (für Diagnose)
    """

    def __init__(
        self,
        message: str,
        *,
        status: Optional[int] = None,
        url: Optional[str] = None,
        method: Optional[str] = None,
        text: str = "",
    ) -> None:
        super().__init__(message)
        self.status = status
        self.url = url
        self.method = method
        self.text = text

    def __repr__(self) -> str:
        return f"TransportError(status={self.status}, method={self.method!r}, url={self.url!r})"


class AuthError(SpRestError):
    """Request-Digest (Authorization-Token) konnte nicht bezogen werden."""


class AuthShapeMismatch(AuthError):
    """Antwort von /_api/contextinfo hat keine der erwarteten Formen."""


__all__ = [
    "SpRestError",
    "InvalidArgument",
    "TransportError",
    "AuthError",
    "AuthShapeMismatch",
]
