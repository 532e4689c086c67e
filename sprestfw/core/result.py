# result.py
# -*- coding: utf-8 -*-
"""
===============================================================================
sprestfw.core.result — Einheitlicher Rückgabetyp (Erfolg | Fehler)
===============================================================================
Zweck:
    - Jede ListClient-Operation liefert ein SpResult statt zweier getrennter
      Fehlerpfade (Callback vs. Exception).
    - Erfolg: .ok=True, .data = geparstes JSON (oder None bei 204)
    - Fehler: .ok=False, .error = SpRestError-Instanz
    - unwrap(): liefert data bzw. wirft den enthaltenen Fehler

Beispiel:
    res = client.fetch_item(5)
    if res.ok:
        print(res.data)
    item = client.fetch_item(5).unwrap()   # wirft bei Fehler

Autor: sprestfw maintainers
Version: 1.0.0 (2025-10-02)
===============================================================================
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional

from .errors import SpRestError


@dataclass(frozen=True)
class SpResult:
    ok: bool
    data: Any = None
    error: Optional[SpRestError] = None

    @classmethod
    def success(cls, data: Any) -> "SpResult":
        return cls(ok=True, data=data)

    @classmethod
    def failure(cls, error: SpRestError) -> "SpResult":
        return cls(ok=False, error=error)

    def unwrap(self) -> Any:
        """Gibt data zurück oder wirft den gespeicherten Fehler."""
        if not self.ok:
            raise self.error  # type: ignore[misc]
        return self.data

    def __bool__(self) -> bool:
        return self.ok


__all__ = ["SpResult"]
