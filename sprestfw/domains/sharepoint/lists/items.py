# sprestfw/domains/sharepoint/lists/items.py
# -*- coding: utf-8 -*-
"""
===============================================================================
sprestfw.domains.sharepoint.lists.items — SharePoint List Items → DataFrame
===============================================================================
Funktion:
    list_df(client, *, columns=None, subfolder=None, drop_metadata=True)

Merkmale:
    - Holt alle Items über ListClient.iter_items (Paging über d.__next /
      odata.nextLink, unabhängig von recursive_fetch)
    - Optional nur ein Unterordner (FileRef-Teilstring)
    - Spaltenauswahl in angegebener Reihenfolge; fehlende Spalten werden
      leer ergänzt und in info['warnings'] gemeldet
    - OData-Metadaten (__metadata, odata.*, *@odata.*) werden entfernt

Rückgabe:
    (df, info)  – df: pandas.DataFrame, info: Dict mit Diagnosedaten

Autor: sprestfw maintainers
Version: 1.0.0 (2025-10-02)
===============================================================================
"""
from __future__ import annotations

from typing import Any, Dict, List, Optional, Sequence, Tuple, Union

import pandas as pd

from sprestfw.domains.sharepoint.lists.client import ListClient

__all__ = ["list_df", "__version__"]
__version__ = "1.0.0"


def list_df(
    client: ListClient,
    *,
    columns: Union[str, Sequence[str], None] = None,
    subfolder: Optional[str] = None,
    drop_metadata: bool = True,
) -> Tuple[pd.DataFrame, Dict[str, Any]]:
    """
    SharePoint: List Items → DataFrame.

    Parameters
    ----------
    client : ListClient
        Konfigurierter Client (site_url, list_title, verbosity, token).
    columns : list[str] | "a,b,c" | "*" | None
        Interne Feldnamen; None/"*" → alle Felder in Antwortreihenfolge.
    subfolder : str | None
        Name eines Unterordners der Liste (ohne Schrägstriche).
    drop_metadata : bool
        OData-Metadatenfelder entfernen.

    Returns
    -------
    (df, info) : tuple[pandas.DataFrame, dict]

    Raises
    ------
    TransportError
        Wenn ein Seitenabruf fehlschlägt.
    """
    def _columns_from_value(val: Union[str, Sequence[str], None]) -> Optional[List[str]]:
        if val is None:
            return None
        if isinstance(val, str):
            s = val.strip()
            if s == "" or s == "*":
                return None
            return [c.strip() for c in s.split(",") if c and c.strip()]
        cols = [str(c).strip() for c in val if str(c).strip()]
        return cols or None

    def _is_metadata_key(key: str) -> bool:
        return key == "__metadata" or key.startswith("odata.") or "@odata." in key

    def _clean(item: Dict[str, Any]) -> Dict[str, Any]:
        if not drop_metadata:
            return dict(item)
        out = {}
        for k, v in item.items():
            if _is_metadata_key(k):
                continue
            # verbose: nicht expandierte Lookups kommen als {"__deferred": {...}}
            if isinstance(v, dict) and "__deferred" in v:
                continue
            out[k] = v
        return out

    # --- Hauptlogik ----------------------------------------------------------------------
    warnings: List[str] = []
    cfg = client.config

    # 1) Abholen (alle Seiten)
    rows = [_clean(it) for it in client.iter_items(subfolder_name=subfolder)]

    # 2) DataFrame bauen
    cols = _columns_from_value(columns)
    if cols is None:
        df = pd.DataFrame.from_records(rows)
    else:
        present = {k for r in rows for k in r}
        missing = [c for c in cols if c not in present]
        if rows and missing:
            warnings.append(f"Columns not found in response: {', '.join(missing)}")
        df = pd.DataFrame.from_records(rows, columns=cols)

    # 3) Diagnostics
    url = client.subfolder_url(subfolder, cfg=cfg) if subfolder else client.list_items_url(cfg=cfg)
    info: Dict[str, Any] = {
        "url": url,
        "list_title": cfg.list_title,
        "verbosity": cfg.verbosity.name.lower(),
        "count": int(len(df)),
        "warnings": warnings,
        "module_version": __version__,
    }
    return df, info
