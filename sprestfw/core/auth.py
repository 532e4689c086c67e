# -*- coding: utf-8 -*-
"""
===============================================================================
sprestfw.core.auth — Request-Digest (Authorization-Token) aus /_api/contextinfo
===============================================================================
Zweck:
    - Liest den FormDigestValue aus der Antwort von POST /_api/contextinfo.
    - Zwei Antwortformen werden akzeptiert:
        • odata=verbose                       → d.GetContextWebInformation.FormDigestValue
        • odata=nometadata / minimalmetadata  → value.GetContextWebInformation.FormDigestValue
    - Jede andere Form → AuthShapeMismatch.

Wann nötig?
    - Aufruf außerhalb einer SharePoint-Seite (kein Digest vorhanden)
    - Erneuerung nach Ablauf (Standard: 30 Minuten, FormDigestTimeoutSeconds)

Beispiel:
    token = extract_form_digest(payload)
    ttl = extract_digest_timeout(payload)   # z. B. 1800 oder None

Autor: sprestfw maintainers
Version: 1.0.0 (2025-10-02)
===============================================================================
"""
from __future__ import annotations

from typing import Any, Optional, Tuple, overload

from .errors import AuthShapeMismatch
from .util import coerce_int, deep_get

__version__ = "1.0.0"

_CONTEXT_PATHS = (
    "d.GetContextWebInformation",      # odata=verbose
    "value.GetContextWebInformation",  # odata=nometadata, odata=minimalmetadata
)


def _context_node(payload: Any) -> Optional[dict]:
    for path in _CONTEXT_PATHS:
        node = deep_get(payload, path)
        if isinstance(node, dict) and node.get("FormDigestValue"):
            return node
    return None


@overload
def extract_form_digest(payload: Any, *, return_status: False = False) -> str: ...
@overload
def extract_form_digest(payload: Any, *, return_status: True = True) -> Tuple[str, bool, str]: ...

def extract_form_digest(payload: Any, *, return_status: bool = False):
    """
    Holt den FormDigestValue aus einer contextinfo-Antwort.

    Rückgabe:
        - Standard: Token (str)
        - Mit return_status=True: (token_or_empty, succeeded, error_message)

    Raises:
        AuthShapeMismatch (nur im Standardmodus)
    """
    node = _context_node(payload)
    if node is None:
        msg = "Unable to obtain SharePoint authorization token: unexpected contextinfo response shape."
        if return_status:
            return ("", False, msg)
        raise AuthShapeMismatch(msg)
    token = str(node["FormDigestValue"])
    if return_status:
        return (token, True, "")
    return token


def extract_digest_timeout(payload: Any) -> Optional[int]:
    """FormDigestTimeoutSeconds (falls vorhanden)."""
    node = _context_node(payload)
    if node is None:
        return None
    return coerce_int(node.get("FormDigestTimeoutSeconds"))


__all__ = ["extract_form_digest", "extract_digest_timeout", "__version__"]
