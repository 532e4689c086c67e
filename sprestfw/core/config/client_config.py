# -*- coding: utf-8 -*-
"""
===============================================================================
sprestfw.core.config.client_config — ListClient-Settings (Code, JSON + ENV)
===============================================================================
Zweck
-----
Hält die Optionen eines ListClient (Site-URL, Listenname, Request-Digest,
Seitengröße, Paging, Verbosity, URL-Vorlagen, Filter, Callbacks) und
liest sie optional aus einer `config.json` und/oder Umgebungsvariablen.

Highlights
----------
- `ClientConfig.merge(partial)` liefert eine neue Konfiguration; nicht
  angegebene Felder behalten ihren bisherigen Wert (last-write-wins).
- snake_case **und** die historischen camelCase-Keys (siteUrl, listTitle,
  maxItems, recursiveFetch, onsuccess, onerror) werden akzeptiert.
- `urls` wird feldweise gemerged (nur angegebene Vorlagen werden ersetzt).
- Dot-Path-Resolver für Knotenpunkte, z. B. "sites.hr"
- ENV-Overrides (case-insensitive), z. B. `SPRESTFW_SITE_URL`
- Kein impliziter Zugriff auf die Umgebung: ENV/JSON nur über
  `load_client_config(...)`.

Beispiel (JSON)
---------------
{
  "sharepoint": {
    "site_url": "https://contoso.sharepoint.com/sites/hr",
    "list_title": "Onboarding",
    "max_items": 500,
    "verbosity": "compact"
  }
}

Beispiel (ENV)
--------------
SPRESTFW_SITE_URL=https://contoso.sharepoint.com/sites/hr
SPRESTFW_LIST_TITLE=Onboarding
SPRESTFW_TOKEN=0x1234...,02 Oct 2025 10:00:00 -0000
SPRESTFW_MAX_ITEMS=500
SPRESTFW_RECURSIVE_FETCH=false
SPRESTFW_VERBOSITY=compact

Autor: sprestfw maintainers
Version: 1.0.0 (2025-10-02)
===============================================================================
"""
from __future__ import annotations

from dataclasses import dataclass, field, fields, replace
from pathlib import Path
from typing import Any, Callable, Dict, Iterable, Mapping, Optional, Tuple, Union
import json
import os

from ..errors import InvalidArgument
from ..odata import FilterCriterion, Verbosity
from ..util import coerce_bool, coerce_int

# Modulweite Version
__version__ = "1.0.0"

MAX_ITEMS_LIMIT = 5000


@dataclass(frozen=True)
class UrlTemplates:
    """Relative API-Pfade; {0} = Listenname, {1} = Item-ID."""
    list: str = "/_api/web/lists/getbytitle('{0}')/items"
    item: str = "/_api/web/lists/getbytitle('{0}')/items({1})"
    list_info: str = "/_api/web/lists/getbytitle('{0}')"
    fields: str = "/_api/web/lists/getbytitle('{0}')/fields"
    context_info: str = "/_api/contextinfo"

    def merge(self, partial: Union["UrlTemplates", Mapping[str, Any], None]) -> "UrlTemplates":
        if partial is None:
            return self
        if isinstance(partial, UrlTemplates):
            return partial
        if not isinstance(partial, Mapping):
            raise InvalidArgument(f"urls must be a mapping, got {type(partial).__name__}")
        known = {f.name for f in fields(self)}
        unknown = [k for k in partial if k not in known]
        if unknown:
            raise InvalidArgument(f"Unknown URL template(s): {', '.join(map(str, unknown))}")
        return replace(self, **{k: str(v) for k, v in partial.items()})


@dataclass(frozen=True)
class ClientConfig:
    """Normalisierte Optionen eines ListClient."""
    site_url: str = ""
    list_title: str = ""
    token: str = ""
    max_items: int = 100
    recursive_fetch: bool = True
    verbosity: Verbosity = Verbosity.VERBOSE
    urls: UrlTemplates = field(default_factory=UrlTemplates)
    filters: Tuple[FilterCriterion, ...] = ()
    timeout: int = 60
    on_success: Optional[Callable[[Any], Any]] = field(default=None, repr=False, compare=False)
    on_error: Optional[Callable[[Any], Any]] = field(default=None, repr=False, compare=False)

    def __post_init__(self) -> None:
        # Direkt konstruierte Instanzen durchlaufen dieselbe Prüfung wie merge()
        for name, norm in _NORMALIZERS.items():
            object.__setattr__(self, name, norm(self, getattr(self, name)))

    def merge(self, partial: Optional[Mapping[str, Any]] = None, **kwargs: Any) -> "ClientConfig":
        """
        Neue Konfiguration mit überschriebenen Feldern.

        Raises:
            InvalidArgument bei unbekannten Keys oder ungültigen Werten
        """
        items: Dict[str, Any] = {}
        for src in (partial or {}, kwargs):
            for k, v in src.items():
                name = _ALIASES.get(k, k)
                if name not in _NORMALIZERS:
                    raise InvalidArgument(f"Unknown config option: {k!r}")
                items[name] = v
        if not items:
            return self
        changes = {name: _NORMALIZERS[name](self, value) for name, value in items.items()}
        return replace(self, **changes)

    def as_dict(self, *, mask_secrets: bool = True) -> Dict[str, Any]:
        d: Dict[str, Any] = {
            "site_url": self.site_url,
            "list_title": self.list_title,
            "token": self.token,
            "max_items": self.max_items,
            "recursive_fetch": self.recursive_fetch,
            "verbosity": self.verbosity.name.lower(),
            "urls": {f.name: getattr(self.urls, f.name) for f in fields(self.urls)},
            "filters": [c.to_expression() for c in self.filters],
            "timeout": self.timeout,
        }
        if mask_secrets and d.get("token"):
            d["token"] = "****"
        return d


# ------------------------------ Normalisierung --------------------------------

def _norm_str(_: ClientConfig, v: Any) -> str:
    return "" if v is None else str(v)


def _norm_site_url(_: ClientConfig, v: Any) -> str:
    return ("" if v is None else str(v)).strip().rstrip("/")


def _norm_max_items(_: ClientConfig, v: Any) -> int:
    n = coerce_int(v)
    if n is None or isinstance(v, bool) or not (1 <= n <= MAX_ITEMS_LIMIT):
        raise InvalidArgument(f"max_items must be an integer between 1 and {MAX_ITEMS_LIMIT}, got {v!r}")
    return n


def _norm_bool(_: ClientConfig, v: Any) -> bool:
    b = coerce_bool(v)
    if b is None:
        raise InvalidArgument(f"Expected a boolean value, got {v!r}")
    return b


def _norm_verbosity(_: ClientConfig, v: Any) -> Verbosity:
    return Verbosity.parse(v)


def _norm_urls(cfg: ClientConfig, v: Any) -> UrlTemplates:
    base = cfg.urls if isinstance(cfg.urls, UrlTemplates) else UrlTemplates()
    return base.merge(v)


def _norm_filters(_: ClientConfig, v: Any) -> Tuple[FilterCriterion, ...]:
    if v is None:
        return ()
    if isinstance(v, (FilterCriterion, Mapping)):
        v = [v]
    out = []
    for c in v:
        if isinstance(c, FilterCriterion):
            out.append(c)
        elif isinstance(c, Mapping):
            out.append(FilterCriterion(
                field=str(c.get("field", "")),
                operator=str(c.get("operator", "eq")),
                value=c.get("value"),
            ))
        else:
            raise InvalidArgument(f"Invalid filter criterion: {c!r}")
    return tuple(out)


def _norm_timeout(_: ClientConfig, v: Any) -> int:
    n = coerce_int(v)
    if n is None or n <= 0:
        raise InvalidArgument(f"timeout must be a positive integer, got {v!r}")
    return n


def _norm_callback(_: ClientConfig, v: Any) -> Optional[Callable[[Any], Any]]:
    if v is not None and not callable(v):
        raise InvalidArgument(f"Callback must be callable, got {type(v).__name__}")
    return v


_NORMALIZERS: Dict[str, Callable[[ClientConfig, Any], Any]] = {
    "site_url": _norm_site_url,
    "list_title": _norm_str,
    "token": _norm_str,
    "max_items": _norm_max_items,
    "recursive_fetch": _norm_bool,
    "verbosity": _norm_verbosity,
    "urls": _norm_urls,
    "filters": _norm_filters,
    "timeout": _norm_timeout,
    "on_success": _norm_callback,
    "on_error": _norm_callback,
}

_ALIASES: Dict[str, str] = {
    "siteUrl": "site_url",
    "listTitle": "list_title",
    "maxItems": "max_items",
    "recursiveFetch": "recursive_fetch",
    "onsuccess": "on_success",
    "onerror": "on_error",
}


# ------------------------------ JSON / ENV ------------------------------------

_ENV_KEYS: Dict[str, Iterable[str]] = {
    "site_url": ("SPRESTFW_SITE_URL", "SPRESTFW_SITEURL"),
    "list_title": ("SPRESTFW_LIST_TITLE", "SPRESTFW_LIST"),
    "token": ("SPRESTFW_TOKEN", "SPRESTFW_REQUEST_DIGEST"),
    "max_items": ("SPRESTFW_MAX_ITEMS", "SPRESTFW_TOP"),
    "recursive_fetch": ("SPRESTFW_RECURSIVE_FETCH",),
    "verbosity": ("SPRESTFW_VERBOSITY",),
    "timeout": ("SPRESTFW_TIMEOUT",),
}


def _first_env(keys: Iterable[str]) -> Optional[str]:
    """Sucht den ersten gesetzten ENV-Wert (case-insensitive) aus einer Kandidatenliste."""
    lowered = {k.lower(): k for k in os.environ.keys()}
    for key in keys:
        k = key.strip()
        if not k:
            continue
        v = os.environ.get(k)
        if v is not None:
            return v
        real = lowered.get(k.lower())
        if real and os.environ.get(real) is not None:
            return os.environ[real]
    return None


def _dot_get(d: Mapping[str, Any], path: str) -> Optional[Mapping[str, Any]]:
    """Holt einen verschachtelten Knoten mittels Dot-Path ("a.b.c")."""
    cur: Any = d
    for seg in (path or "").split("."):
        seg = seg.strip()
        if not seg:
            continue
        if not isinstance(cur, Mapping) or seg not in cur:
            return None
        cur = cur[seg]
    return cur if isinstance(cur, Mapping) else None


def load_client_config(*,
                       config_path: Optional[Union[str, Path]] = None,
                       node: str = "sharepoint",
                       env_override: bool = True,
                       base: Optional[ClientConfig] = None) -> Tuple[ClientConfig, Dict[str, Any]]:
    """
    Lädt ListClient-Settings aus JSON (optional) und überschreibt sie mit ENV (optional).

    Parameter
    ---------
    config_path : str|Path|None
        Pfad zur JSON-Datei. Wenn None oder nicht vorhanden, werden nur ENV gelesen.
    node : str
        Dot-Path zum Knotenpunkt in der JSON (z. B. "sites.hr").
    env_override : bool
        Wenn True, überschreiben ENV-Variablen die JSON-Werte.
    base : ClientConfig|None
        Ausgangskonfiguration (Default: ClientConfig()).

    Rückgabe
    --------
    (config, info)
        config : ClientConfig
        info   : Diagnostics (source:"json|env|json+env|defaults", node_path, used_env_vars, warnings)

    Raises
    ------
    InvalidArgument
        Bei ungültigen Werten (z. B. max_items=0) oder unbekannten Keys im Knoten.
    """
    info: Dict[str, Any] = {"node_path": node, "used_env_vars": {}, "warnings": []}
    cfg = base or ClientConfig()
    sources = []

    # 1) JSON laden & zum Knoten navigieren
    if config_path is not None and Path(config_path).exists():
        try:
            raw = json.loads(Path(config_path).read_text(encoding="utf-8"))
        except (OSError, ValueError) as ex:
            info["warnings"].append(f"JSON load error: {type(ex).__name__}: {ex}")
        else:
            node_map = _dot_get(raw, node) if node else raw
            if node_map is None:
                info["warnings"].append(f"Node '{node}' not found in JSON; using defaults.")
            else:
                cfg = cfg.merge(dict(node_map))
                sources.append("json")
            info["config_path"] = str(config_path)
    elif config_path is not None:
        info["warnings"].append(f"Config file not found: {config_path}")

    # 2) ENV-Overrides (optional)
    if env_override:
        env: Dict[str, str] = {}
        for name, keys in _ENV_KEYS.items():
            val = _first_env(keys)
            if val is not None:
                env[name] = val.strip()
                info["used_env_vars"][name] = True
        if env:
            cfg = cfg.merge(env)
            sources.append("env")

    info["source"] = "+".join(sources) or "defaults"
    info["config"] = cfg.as_dict(mask_secrets=True)
    return cfg, info


__all__ = [
    "ClientConfig",
    "UrlTemplates",
    "MAX_ITEMS_LIMIT",
    "load_client_config",
    "__version__",
]
