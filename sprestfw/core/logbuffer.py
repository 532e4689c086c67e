# logbuffer.py
# -*- coding: utf-8 -*-
"""
===============================================================================
sprestfw.core.logbuffer — Print + Log-Puffer → DataFrame
===============================================================================
Zweck:
    - Einfache Logging-Hilfe für Client-Aufrufe, die
        * sofort auf die Konsole schreibt (print, abschaltbar über echo)
        * und parallel strukturierte Log-Einträge puffert.
    - Der Puffer kann als pandas-DataFrame exportiert werden (to_df) oder als
      Liste von dicts weiterverarbeitet werden.

Besonderheiten:
    - Maskiert sensible Schlüssel (token, X-RequestDigest, secret, password)
    - Level: DEBUG/INFO/WARNING/ERROR; min_level filtert die Konsolenausgabe
    - ISO8601 Zeitstempel (UTC)

Beispiel:
    lb = LogBuffer(echo=False)
    client = ListClient(site_url=..., log=lb)
    client.select_list("Docs").fetch_all()
    df_logs = lb.to_df()

Autor: sprestfw maintainers
Version: 1.0.0 (2025-10-02)
===============================================================================
"""
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, List, Sequence

import pandas as pd

from .util import DEFAULT_MASK_KEYS, mask_secrets

_LEVELS = {"DEBUG": 10, "INFO": 20, "WARNING": 30, "ERROR": 40}


@dataclass
class LogBuffer:
    """
    Kleiner Logger:
        - echo: sofort in Konsole ausgeben
        - min_level: kleinstes Level für die Konsolenausgabe (gepuffert wird alles)
        - mask_keys: Keys, deren Werte in context maskiert werden
    """
    echo: bool = True
    min_level: str = "INFO"
    mask_keys: Sequence[str] = field(default=DEFAULT_MASK_KEYS)

    _entries: List[Dict[str, Any]] = field(default_factory=list, init=False)

    # ------------------------------ Basis-API ---------------------------------

    def log(self, level: str, message: str, **context: Any) -> None:
        """Allgemeiner Logeintrag."""
        ts = datetime.now(timezone.utc).isoformat()
        ctx_masked = mask_secrets(context, mask_keys=self.mask_keys) if context else {}
        entry = {"ts": ts, "level": level.upper(), "message": message, **ctx_masked}
        self._entries.append(entry)
        if self.echo and _LEVELS.get(entry["level"], 0) >= _LEVELS.get(self.min_level.upper(), 0):
            kv = " ".join(f"{k}={v}" for k, v in ctx_masked.items())
            print(f"[{entry['level']}] {entry['ts']} {entry['message']}" + (f" | {kv}" if kv else ""))

    # ------------------------------ Komfort-API -------------------------------

    def debug(self, message: str, **context: Any) -> None:
        self.log("DEBUG", message, **context)

    def info(self, message: str, **context: Any) -> None:
        self.log("INFO", message, **context)

    def warning(self, message: str, **context: Any) -> None:
        self.log("WARNING", message, **context)

    def error(self, message: str, **context: Any) -> None:
        self.log("ERROR", message, **context)

    # ------------------------------ Export-API --------------------------------

    def to_list(self) -> List[Dict[str, Any]]:
        """Rohdaten (Liste von dicts)."""
        return list(self._entries)

    def to_df(self) -> pd.DataFrame:
        """Export nach pandas.DataFrame."""
        return pd.DataFrame(self._entries)

    # ------------------------------ Extras ------------------------------------

    def __len__(self) -> int:
        return len(self._entries)

    def clear(self) -> None:
        self._entries.clear()


def safe_log(log: Any, level: str, message: str, **context: Any) -> None:
    """
    Schreibt in einen optionalen Logger (LogBuffer oder kompatibel).
    Fehler des Loggers erreichen den Aufrufer nicht.
    """
    if log is None:
        return
    try:
        fn = getattr(log, level.lower(), None)
        if callable(fn):
            fn(message, **context)
        else:
            log.log(level, message, **context)
    except Exception:
        pass


__all__ = ["LogBuffer", "safe_log"]
