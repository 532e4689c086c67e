# http.py
# -*- coding: utf-8 -*-
"""
===============================================================================
sprestfw.core.http — HTTP-Transport für die SharePoint-REST-API
===============================================================================
Zweck:
    - Einheitlicher Einzelaufruf gegen SharePoint-REST-Endpoints mit:
        * Accept/Content-Type gemäß Verbosity (odata=verbose|minimal|nometadata)
        * X-RequestDigest (Authorization-Token)
        * Cache-Control: no-cache (URL bleibt unverändert)
        * JSON-Deserialisierung (leerer Body/204 → None)
    - Genau ein Roundtrip pro Aufruf: kein Retry, kein Paging, kein Backoff.
      Folgeseiten und Token-Erneuerung liegen beim ListClient.
    - Netzwerk-/HTTP-Fehler werden als TransportError weitergereicht
      (Ursprungsausnahme als __cause__).

Abhängigkeiten:
    pip install requests

Beispiel:
    from sprestfw.core.http import SpHttp
    from sprestfw.core.odata import Verbosity

    http = SpHttp()
    data = http.request("GET", "https://contoso.sharepoint.com/sites/hr/_api/web",
                        verbosity=Verbosity.VERBOSE, token="")

Autor: sprestfw maintainers
Version: 1.0.0 (2025-10-02)
===============================================================================
"""
from __future__ import annotations

from typing import Any, Dict, Mapping, Optional, Union

import requests

from .errors import TransportError
from .logbuffer import safe_log
from .odata import Verbosity, accept_header
from .util import truncate

__version__ = "1.0.0"


class SpHttp:
    """
    Schlanker HTTP-Transport (requests.Session) für SharePoint REST.

    Hinweis:
        - Session wird wiederverwendet (Keep-Alive) und kann injiziert werden;
          jedes Objekt mit kompatiblem request(method, url, ...) genügt.
        - 'url' wird nie verändert (keine Cache-Buster-Parameter).
    """

    def __init__(
        self,
        *,
        timeout: int = 60,
        user_agent: Optional[str] = None,
        session: Optional[requests.Session] = None,
        log: Optional[Any] = None,  # kompatibel zu LogBuffer, aber optional
    ) -> None:
        self.timeout = int(timeout)
        self.user_agent = user_agent or f"sprestfw/{__version__}"
        self.session = session or requests.Session()
        self.log = log

    # ------------------------------- Header ------------------------------------

    def build_headers(
        self,
        verbosity: Union[str, Verbosity],
        token: str,
        extra: Optional[Mapping[str, str]] = None,
    ) -> Dict[str, str]:
        """Standard-Header; 'extra' überschreibt (z. B. X-HTTP-Method, IF-MATCH)."""
        mime = accept_header(verbosity)
        hdrs = {
            "Accept": mime,
            "Content-Type": mime,
            "X-RequestDigest": token or "",
            "Cache-Control": "no-cache",
            "User-Agent": self.user_agent,
        }
        if extra:
            hdrs.update(extra)
        return hdrs

    # ------------------------------- Kernaufruf --------------------------------

    def request(
        self,
        method: str,
        url: str,
        *,
        verbosity: Union[str, Verbosity],
        token: str,
        headers: Optional[Mapping[str, str]] = None,
        json: Optional[Any] = None,
        timeout: Optional[int] = None,
    ) -> Any:
        """
        Führt einen HTTP-Request aus und liefert das geparste JSON.

        Raises:
            TransportError bei Netzwerkfehler, Status >= 400 oder ungültigem JSON
        """
        method_u = method.upper()
        hdrs = self.build_headers(verbosity, token, headers)
        safe_log(self.log, "debug", "HTTP request", method=method_u, url=url)

        try:
            resp = self.session.request(
                method=method_u,
                url=url,
                headers=hdrs,
                json=json,
                timeout=timeout or self.timeout,
            )
        except requests.RequestException as ex:
            safe_log(self.log, "error", "HTTP request failed (no response)", method=method_u, url=url, error=str(ex))
            raise TransportError(
                f"{method_u} {url} failed: {type(ex).__name__}: {ex}",
                url=url,
                method=method_u,
            ) from ex

        try:
            resp.raise_for_status()
        except requests.HTTPError as ex:
            text = self._safe_text(resp)
            safe_log(self.log, "error", "HTTP error", method=method_u, url=url, status=resp.status_code, text=text)
            raise TransportError(
                f"{method_u} {url} returned HTTP {resp.status_code}",
                status=resp.status_code,
                url=url,
                method=method_u,
                text=text,
            ) from ex

        return self._parse_body(resp, method_u, url)

    # ------------------------------ interne Utils -----------------------------

    def _parse_body(self, resp: requests.Response, method: str, url: str) -> Any:
        """JSON-Body; 204/leer → None."""
        if resp.status_code == 204 or not resp.content:
            return None
        try:
            return resp.json()
        except ValueError as ex:
            raise TransportError(
                f"{method} {url} returned a non-JSON body",
                status=resp.status_code,
                url=url,
                method=method,
                text=self._safe_text(resp),
            ) from ex

    @staticmethod
    def _safe_text(resp: requests.Response, limit: int = 500) -> str:
        """Kürzt Response-Text für Logs."""
        try:
            return truncate(resp.text, limit)
        except Exception:
            return ""


__all__ = ["SpHttp"]
