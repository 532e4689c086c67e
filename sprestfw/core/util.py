# util.py
# -*- coding: utf-8 -*-
"""
===============================================================================
sprestfw.core.util — Helfer: Masking, Deep-Get, Coercion, Text-Kürzung
===============================================================================
Zweck:
    - Masking sensibler Felder (Request-Digest, Secrets) für Logs/Repr
    - Deep-Get (obj['a']['b']...) für verschachtelte JSON-Antworten
    - Typ-Coercion für Werte aus ENV/JSON (bool/int)
    - Antworttexte für Logs/Fehler kürzen

Abhängigkeiten:
    * Standardbibliothek

Autor: sprestfw maintainers
Version: 1.0.0 (2025-10-02)
===============================================================================
"""
from __future__ import annotations

from typing import Any, Dict, Mapping, Optional, Sequence
import locale
import sys

DEFAULT_MASK_KEYS: Sequence[str] = ("token", "digest", "secret", "password")


def supports_utf8_stdout() -> bool:
    enc = (getattr(sys.stdout, "encoding", None) or locale.getpreferredencoding(False) or "").lower()
    return "utf" in enc


ELLIPSIS = "…" if supports_utf8_stdout() else "..."


# ------------------------------ Masking ---------------------------------------

def mask_secrets(d: Mapping[str, Any], *, mask_keys: Sequence[str] = DEFAULT_MASK_KEYS) -> Dict[str, Any]:
    """
    Gibt eine Kopie von 'd' zurück, in der Werte unterhalb bestimmter Keys maskiert sind.
    - Fall-insensitiver Key-Vergleich (enthält-Logik), z. B. 'X-RequestDigest'.
    - Leere Werte bleiben leer (zeigt an, dass kein Token gesetzt ist).
    """
    out: Dict[str, Any] = {}
    for k, v in d.items():
        k_lc = str(k).lower()
        if v not in (None, "") and any(m in k_lc for m in mask_keys):
            out[k] = "***"
        else:
            out[k] = v
    return out


# ------------------------------ Deep-Get --------------------------------------

def deep_get(obj: Any, path: str, default: Any = None) -> Any:
    """Navigiert 'a.b.c' in dicts; gibt default zurück, wenn Segment fehlt."""
    cur = obj
    for seg in path.split("."):
        if isinstance(cur, dict) and seg in cur:
            cur = cur[seg]
        else:
            return default
    return cur


# ------------------------------ Coercion --------------------------------------

def coerce_bool(val: Any, default: Optional[bool] = None) -> Optional[bool]:
    if val is None:
        return default
    if isinstance(val, bool):
        return val
    s = str(val).strip().lower()
    if s in ("1", "true", "t", "y", "yes", "on"):
        return True
    if s in ("0", "false", "f", "n", "no", "off"):
        return False
    return default


def coerce_int(val: Any, default: Optional[int] = None) -> Optional[int]:
    if val is None or str(val).strip() == "":
        return default
    try:
        return int(val)
    except (TypeError, ValueError):
        return default


# ------------------------------ Text ------------------------------------------

def truncate(text: Optional[str], limit: int = 500) -> str:
    """Kürzt Text für Logs/Fehlermeldungen."""
    t = text or ""
    return t if len(t) <= limit else t[:limit] + " " + ELLIPSIS


__all__ = [
    "DEFAULT_MASK_KEYS",
    "ELLIPSIS",
    "supports_utf8_stdout",
    "mask_secrets",
    "deep_get",
    "coerce_bool",
    "coerce_int",
    "truncate",
]
