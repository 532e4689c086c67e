# urls.py
# -*- coding: utf-8 -*-
"""
===============================================================================
sprestfw.core.urls — URL-Templating für die SharePoint-REST-API
===============================================================================
Zweck:
    - Positionsplatzhalter {0}, {1}, ... in URL-Vorlagen ersetzen
      (nicht belegte Platzhalter bleiben unverändert stehen).
    - Query-Parameter anhängen: '?' falls noch kein Query-String existiert,
      sonst '&'.
    - FileRef-Teilstring für Unterordner-Filter bilden.

Beispiel:
    format_template("/_api/web/lists/getbytitle('{0}')/items({1})", "Docs", 5)
    # -> "/_api/web/lists/getbytitle('Docs')/items(5)"
    add_max_items("https://x/_api/.../items", 100)
    # -> "https://x/_api/.../items?$top=100"

Hinweise:
    - Query-Werte werden prozentkodiert; OData-lesbare Zeichen (Leerzeichen,
      ' ( ) , / = $ :) bleiben stehen, requests kodiert Leerzeichen selbst.
      & # % + im Wert werden zu %26 %23 %25 %2B.

Autor: sprestfw maintainers
Version: 1.0.0 (2025-10-02)
===============================================================================
"""
from __future__ import annotations

import re
from typing import Any
from urllib.parse import quote

_PLACEHOLDER_RE = re.compile(r"{(\d+)}")
_QUERY_SAFE = "'(),/ =$:"


def format_template(template: str, *args: Any) -> str:
    """Ersetzt {n} durch args[n]; fehlende Argumente lassen den Platzhalter stehen."""
    def _sub(m: "re.Match[str]") -> str:
        idx = int(m.group(1))
        return str(args[idx]) if idx < len(args) else m.group(0)

    return _PLACEHOLDER_RE.sub(_sub, template)


def add_query_param(url: str, key: str, value: Any) -> str:
    """Hängt key=value mit '?' bzw. '&' an; value wird prozentkodiert."""
    sep = "&" if "?" in url else "?"
    return f"{url}{sep}{key}={quote(str(value), safe=_QUERY_SAFE)}"


def add_max_items(url: str, max_items: int) -> str:
    """$top=<max_items> anhängen."""
    return add_query_param(url, "$top", int(max_items))


def subfolder_fileref(list_title: str, subfolder_name: str) -> str:
    """
    FileRef-Teilstring eines Unterordners.

    Ein Item in /sites/s/Lists/My List/My Subfolder/12_.000 enthält im FileRef
    den Teil 'Lists/My List/My Subfolder/'.
    """
    return f"Lists/{list_title}/{subfolder_name}/"


def join_site(site_url: str, path: str) -> str:
    """Site-URL (ohne abschließenden '/') + relativer API-Pfad."""
    return (site_url or "").rstrip("/") + path


__all__ = [
    "format_template",
    "add_query_param",
    "add_max_items",
    "subfolder_fileref",
    "join_site",
]
