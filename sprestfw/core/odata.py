# odata.py
# -*- coding: utf-8 -*-
"""
===============================================================================
sprestfw.core.odata — Verbosity, Antwort-Envelopes und $filter-Bausteine
===============================================================================
Zweck:
    - Verbosity-Enum: bestimmt Accept/Content-Type und damit die Form der
      Antwort (verbose: d.results / d.__next, sonst: value / odata.nextLink).
    - Envelope-Helfer: Ergebnisliste und Folgeseiten-Link aus einer Antwort
      lesen bzw. zusammengeführte Seiten wieder in dieselbe Form bringen.
    - FilterCriterion + build_filter: kleine $filter-Ausdrücke (eq/ne/gt/...)
      sowie substringof(...) für den FileRef-Workaround.

Beispiel:
    Verbosity.parse("compact").value
    # -> "application/json;odata=nometadata"
    build_filter([FilterCriterion("Status", "eq", "Open"), FilterCriterion("Prio", "gt", 2)])
    # -> "Status eq 'Open' and Prio gt 2"

Autor: sprestfw maintainers
Version: 1.0.0 (2025-10-02)
===============================================================================
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Iterable, List, Optional, Union

from .errors import InvalidArgument


class Verbosity(str, Enum):
    """Menge an Metadaten in der JSON-Antwort. Für die meisten Fälle reicht COMPACT."""

    # Werte unter `.value`, wenig Metadaten (nicht in SP 2013 und älter)
    COMPACT = "application/json;odata=nometadata"
    # Werte unter `.value`, mittlere Metadaten (nicht in SP 2013 und älter)
    MINIMAL = "application/json;odata=minimalmetadata"
    # Werte unter `.d.results`, volle Metadaten
    VERBOSE = "application/json;odata=verbose"

    @classmethod
    def parse(cls, value: Union[str, "Verbosity"]) -> "Verbosity":
        """Akzeptiert Enum, Namen ('compact', 'VERBOSE') oder das Header-Literal."""
        if isinstance(value, cls):
            return value
        s = str(value or "").strip()
        for member in cls:
            if s.upper() == member.name or s.lower() == member.value:
                return member
        raise InvalidArgument(f"Unknown verbosity: {value!r}")

    @property
    def is_verbose(self) -> bool:
        return self is Verbosity.VERBOSE


def accept_header(verbosity: Union[str, Verbosity]) -> str:
    """Header-Literal für Accept/Content-Type."""
    return Verbosity.parse(verbosity).value


# ------------------------------ Envelopes -------------------------------------

_NEXT_LINK_KEYS = ("odata.nextLink", "@odata.nextLink")


def extract_results(payload: Any, verbosity: Union[str, Verbosity]) -> List[Dict[str, Any]]:
    """
    Ergebnisliste einer Collection-Antwort.
    verbose: payload['d']['results'], sonst: payload['value'].
    Fehlende Keys → leere Liste (Server-Antwort wird nicht validiert).
    """
    if not isinstance(payload, dict):
        return []
    if Verbosity.parse(verbosity).is_verbose:
        d = payload.get("d")
        items = d.get("results", []) if isinstance(d, dict) else []
    else:
        items = payload.get("value", [])
    return list(items) if isinstance(items, list) else []


def extract_next_link(payload: Any, verbosity: Union[str, Verbosity]) -> Optional[str]:
    """Link auf die Folgeseite oder None."""
    if not isinstance(payload, dict):
        return None
    if Verbosity.parse(verbosity).is_verbose:
        d = payload.get("d")
        return (d.get("__next") or None) if isinstance(d, dict) else None
    for k in _NEXT_LINK_KEYS:
        if payload.get(k):
            return str(payload[k])
    return None


def extract_entity(payload: Any, verbosity: Union[str, Verbosity]) -> Dict[str, Any]:
    """Einzelobjekt einer Antwort: verbose → payload['d'], sonst payload selbst."""
    if not isinstance(payload, dict):
        return {}
    if Verbosity.parse(verbosity).is_verbose:
        d = payload.get("d")
        return d if isinstance(d, dict) else {}
    return payload


def merge_pages(first: Dict[str, Any], items: List[Dict[str, Any]], verbosity: Union[str, Verbosity]) -> Dict[str, Any]:
    """
    Baut eine Antwort in der Form der ersten Seite, deren Ergebnisliste alle
    Items enthält; der Folgeseiten-Link wird entfernt.
    """
    merged = dict(first)
    if Verbosity.parse(verbosity).is_verbose:
        d = dict(merged.get("d") or {})
        d["results"] = items
        d.pop("__next", None)
        merged["d"] = d
    else:
        merged["value"] = items
        for k in _NEXT_LINK_KEYS:
            merged.pop(k, None)
    return merged


# ------------------------------ $filter ---------------------------------------

_OPERATORS = {"eq", "ne", "gt", "ge", "lt", "le"}


def quote_literal(value: Any) -> str:
    """OData-Literal: Strings in '...' mit verdoppeltem ', bool → true/false."""
    if isinstance(value, bool):
        return "true" if value else "false"
    if value is None:
        return "null"
    if isinstance(value, (int, float)):
        return str(value)
    return "'" + str(value).replace("'", "''") + "'"


@dataclass(frozen=True)
class FilterCriterion:
    """
    Ein $filter-Term.

    Beispiel:
        FilterCriterion("Title", "eq", "Foo").to_expression()   # "Title eq 'Foo'"
        FilterCriterion("FileRef", "substringof", "Lists/Docs/") # "substringof('Lists/Docs/', FileRef)"
    """
    field: str
    operator: str = "eq"
    value: Any = None

    def to_expression(self) -> str:
        op = (self.operator or "").strip().lower()
        name = (self.field or "").strip()
        if not name:
            raise InvalidArgument("FilterCriterion.field must not be empty.")
        if op == "substringof":
            return substringof(str(self.value), name)
        if op not in _OPERATORS:
            raise InvalidArgument(f"Unsupported filter operator: {self.operator!r}")
        return f"{name} {op} {quote_literal(self.value)}"


def substringof(needle: str, field: str) -> str:
    """substringof('<needle>', <field>) — ohne Escaping, SharePoint-Verhalten."""
    return f"substringof('{needle}', {field})"


def build_filter(criteria: Iterable[FilterCriterion]) -> str:
    """Verknüpft Terme mit ' and '; leere Eingabe → ''."""
    return " and ".join(c.to_expression() for c in criteria)


__all__ = [
    "Verbosity",
    "accept_header",
    "extract_results",
    "extract_next_link",
    "extract_entity",
    "merge_pages",
    "quote_literal",
    "FilterCriterion",
    "substringof",
    "build_filter",
]
