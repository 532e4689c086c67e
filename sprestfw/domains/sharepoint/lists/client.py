# sprestfw/domains/sharepoint/lists/client.py
# -*- coding: utf-8 -*-
"""
===============================================================================
sprestfw.domains.sharepoint.lists.client — ListClient für SharePoint REST
===============================================================================
Funktion:
    ListClient(config=None, *, session=None, log=None, **options)

Merkmale (Auszug):
    - URL-Aufbau aus Site-URL + URL-Vorlage ({0}=Listenname, {1}=Item-ID)
    - $top (Seitengröße, 1..5000) und $filter (FilterCriterion, substringof)
    - Header: Accept/Content-Type gemäß Verbosity, X-RequestDigest
    - Paging: bei recursive_fetch=True werden d.__next / odata.nextLink
      verfolgt, bis keine Folgeseite mehr existiert; geliefert wird EIN
      Envelope in der Form der ersten Seite mit allen Items
    - Unterordner-Scope über FileRef-Teilstring ('Lists/<Liste>/<Ordner>/')
    - Request-Digest erneuern (POST /_api/contextinfo)
    - Schreiben: create_item / update_item (MERGE) / delete_item
    - Rückgabe jeder Operation: SpResult (ok/data bzw. error); zusätzlich
      werden on_success(data) bzw. on_error(error) aufgerufen

Hinweise:
    - Kein Retry, kein Caching: jeder Fehler ist terminal für den Aufruf.
    - Pro Aufruf wird EIN Config-Snapshot verwendet (URL und Header stammen
      immer aus derselben Konfiguration).
    - Token ist für POST/DELETE Pflicht; der Client prüft das nicht, loggt
      aber eine Warnung.

Beispiel:
    client = ListClient(site_url="https://contoso.sharepoint.com/sites/hr",
                        verbosity="compact", recursive_fetch=True)
    client.refresh_authorization_token()
    res = client.select_list("Onboarding").fetch_all()
    items = res.unwrap()["value"]

Autor: sprestfw maintainers
Version: 1.0.0 (2025-10-02)
===============================================================================
"""
from __future__ import annotations

from typing import Any, Callable, Dict, Generator, List, Mapping, Optional

import requests

from sprestfw.core.auth import extract_digest_timeout, extract_form_digest
from sprestfw.core.config import ClientConfig
from sprestfw.core.errors import AuthError, InvalidArgument, SpRestError, TransportError
from sprestfw.core.http import SpHttp
from sprestfw.core.logbuffer import safe_log
from sprestfw.core.odata import (
    build_filter,
    extract_entity,
    extract_next_link,
    extract_results,
    merge_pages,
    substringof,
)
from sprestfw.core.result import SpResult
from sprestfw.core.urls import (
    add_max_items,
    add_query_param,
    format_template,
    join_site,
    subfolder_fileref,
)

__all__ = ["ListClient", "__version__"]
__version__ = "1.0.0"

Callback = Optional[Callable[[Any], Any]]


class ListClient:
    """
    Dünner Client für SharePoint-Listen (REST, /_api/web/lists/...).

    Parameter:
        config: Ausgangskonfiguration (Default: ClientConfig())
        session: optionale requests.Session (z. B. mit NTLM-/Cookie-Auth)
        log: optionaler LogBuffer (oder kompatibel)
        http: optionaler Transport (Default: SpHttp(session=session, log=log))
        **options: Overrides wie bei configure()
    """

    def __init__(
        self,
        config: Optional[ClientConfig] = None,
        *,
        session: Optional[requests.Session] = None,
        log: Optional[Any] = None,
        http: Optional[SpHttp] = None,
        **options: Any,
    ) -> None:
        self.config = (config or ClientConfig()).merge(options)
        self.log = log
        self.http = http or SpHttp(timeout=self.config.timeout, session=session, log=log)
        self.digest_timeout: Optional[int] = None

    # ------------------------------- Konfiguration -----------------------------

    def configure(self, partial: Optional[Mapping[str, Any]] = None, **options: Any) -> "ListClient":
        """
        Übernimmt die angegebenen Felder; alle anderen behalten ihren Wert.

        Raises:
            InvalidArgument bei unbekannten Keys oder ungültigen Werten
        """
        self.config = self.config.merge(partial, **options)
        return self

    def select_list(self, list_title: str) -> "ListClient":
        """Setzt den Anzeigenamen der aktiven Liste."""
        self.config = self.config.merge(list_title=list_title)
        return self

    # ------------------------------- URL-Aufbau --------------------------------

    def list_items_url(self, *, extra_filter: Optional[str] = None, cfg: Optional[ClientConfig] = None) -> str:
        """
        Collection-URL inkl. $top und ggf. $filter.
        extra_filter steht vor den konfigurierten Filtern (verknüpft mit ' and ').
        """
        cfg = cfg or self.config
        url = join_site(cfg.site_url, format_template(cfg.urls.list, cfg.list_title))
        url = add_max_items(url, cfg.max_items)
        terms = [t for t in (extra_filter, build_filter(cfg.filters)) if t]
        if terms:
            url = add_query_param(url, "$filter", " and ".join(terms))
        return url

    def subfolder_url(self, subfolder_name: str, *, cfg: Optional[ClientConfig] = None) -> str:
        cfg = cfg or self.config
        fileref = subfolder_fileref(cfg.list_title, subfolder_name)
        return self.list_items_url(extra_filter=substringof(fileref, "FileRef"), cfg=cfg)

    def item_url(self, item_id: Any, *, cfg: Optional[ClientConfig] = None) -> str:
        """Einzel-Item-URL; leere/0-ID → InvalidArgument."""
        cfg = cfg or self.config
        if not item_id:
            raise InvalidArgument("The list item ID must not be empty.")
        return join_site(cfg.site_url, format_template(cfg.urls.item, cfg.list_title, item_id))

    # ------------------------------- Lesen -------------------------------------

    def fetch_all(self, on_success: Callback = None, on_error: Callback = None) -> SpResult:
        """Alle Items der Liste (bzw. bis max_items, wenn recursive_fetch=False)."""
        cfg = self.config
        return self._run(cfg, on_success, on_error, lambda: self._get_collection(cfg, self.list_items_url(cfg=cfg)))

    def fetch_all_in_subfolder(
        self,
        subfolder_name: str,
        on_success: Callback = None,
        on_error: Callback = None,
    ) -> SpResult:
        """
        Alle Items eines Unterordners.

        Filtert über FileRef-Teilstring statt CAML; liefert die Serverantwort
        unverändert durch, auch wenn der Teilstring unbeabsichtigt andere
        Ordner mit gleichem Präfix trifft oder nichts findet.
        """
        cfg = self.config
        return self._run(cfg, on_success, on_error,
                         lambda: self._get_collection(cfg, self.subfolder_url(subfolder_name, cfg=cfg)))

    def fetch_item(self, item_id: Any, on_success: Callback = None, on_error: Callback = None) -> SpResult:
        """Ein einzelnes Item (ID 0/None/'' → InvalidArgument)."""
        cfg = self.config
        return self._run(cfg, on_success, on_error, lambda: self._send(cfg, "GET", self.item_url(item_id, cfg=cfg)))

    def fetch_list_info(self, on_success: Callback = None, on_error: Callback = None) -> SpResult:
        """Listen-Metadaten (u. a. ListItemEntityTypeFullName, ItemCount)."""
        cfg = self.config
        url = join_site(cfg.site_url, format_template(cfg.urls.list_info, cfg.list_title))
        return self._run(cfg, on_success, on_error, lambda: self._send(cfg, "GET", url))

    def fetch_columns(self, on_success: Callback = None, on_error: Callback = None) -> SpResult:
        """Alle Felddefinitionen (Spalten) der Liste."""
        cfg = self.config
        url = join_site(cfg.site_url, format_template(cfg.urls.fields, cfg.list_title))
        return self._run(cfg, on_success, on_error, lambda: self._get_collection(cfg, url))

    def iter_items(self, *, subfolder_name: Optional[str] = None) -> Generator[Dict[str, Any], None, None]:
        """
        Generator über alle Items, Seite für Seite (unabhängig von recursive_fetch).

        Raises:
            TransportError beim ersten fehlgeschlagenen Seitenabruf
        """
        cfg = self.config
        url: Optional[str] = (
            self.subfolder_url(subfolder_name, cfg=cfg) if subfolder_name else self.list_items_url(cfg=cfg)
        )
        seen = set()
        while url and url not in seen:
            seen.add(url)
            page = self._send(cfg, "GET", url)
            for it in extract_results(page, cfg.verbosity):
                yield it
            url = extract_next_link(page, cfg.verbosity)

    # ------------------------------- Schreiben ---------------------------------

    def create_item(
        self,
        fields: Mapping[str, Any],
        *,
        entity_type: Optional[str] = None,
        on_success: Callback = None,
        on_error: Callback = None,
    ) -> SpResult:
        """
        Legt ein Item an (POST auf die Collection).
        Im verbose-Modus wird __metadata.type ergänzt; ohne entity_type wird
        ListItemEntityTypeFullName per fetch_list_info ermittelt.
        """
        cfg = self.config

        def _do() -> Any:
            url = join_site(cfg.site_url, format_template(cfg.urls.list, cfg.list_title))
            body = self._item_body(cfg, fields, entity_type)
            return self._send(cfg, "POST", url, json=body)

        return self._run(cfg, on_success, on_error, _do)

    def update_item(
        self,
        item_id: Any,
        fields: Mapping[str, Any],
        *,
        etag: str = "*",
        entity_type: Optional[str] = None,
        on_success: Callback = None,
        on_error: Callback = None,
    ) -> SpResult:
        """Aktualisiert Felder eines Items (X-HTTP-Method: MERGE, IF-MATCH)."""
        cfg = self.config

        def _do() -> Any:
            url = self.item_url(item_id, cfg=cfg)
            body = self._item_body(cfg, fields, entity_type)
            return self._send(cfg, "POST", url, json=body,
                              headers={"X-HTTP-Method": "MERGE", "IF-MATCH": etag})

        return self._run(cfg, on_success, on_error, _do)

    def delete_item(
        self,
        item_id: Any,
        *,
        etag: str = "*",
        on_success: Callback = None,
        on_error: Callback = None,
    ) -> SpResult:
        """Löscht ein Item (X-HTTP-Method: DELETE, IF-MATCH)."""
        cfg = self.config

        def _do() -> Any:
            url = self.item_url(item_id, cfg=cfg)
            return self._send(cfg, "POST", url, headers={"X-HTTP-Method": "DELETE", "IF-MATCH": etag})

        return self._run(cfg, on_success, on_error, _do)

    # ------------------------------- Generisch ---------------------------------

    def call_raw(
        self,
        url: str,
        method: str = "GET",
        on_success: Callback = None,
        on_error: Callback = None,
        *,
        json: Optional[Any] = None,
        headers: Optional[Mapping[str, str]] = None,
    ) -> SpResult:
        """Beliebiger Aufruf mit Verbosity- und Digest-Header; 'url' bleibt unverändert."""
        cfg = self.config
        return self._run(cfg, on_success, on_error,
                         lambda: self._send(cfg, method, url, json=json, headers=headers))

    # ------------------------------- Token -------------------------------------

    def refresh_authorization_token(self, callback: Callback = None, on_error: Callback = None) -> SpResult:
        """
        Holt einen neuen Request-Digest über POST /_api/contextinfo.

        Nötig außerhalb einer SharePoint-Seite und nach Ablauf des Tokens
        (Standard: 30 Minuten). Bei Erfolg wird config.token gesetzt und
        callback(token) aufgerufen.

        Fehler (im SpResult, zusätzlich an on_error):
            AuthShapeMismatch – Antwort ohne FormDigestValue in erwarteter Form
            AuthError         – Request selbst fehlgeschlagen (Ursache: TransportError)
        """
        cfg = self.config
        url = join_site(cfg.site_url, cfg.urls.context_info)

        def _do() -> str:
            try:
                payload = self._send(cfg, "POST", url)
            except TransportError as ex:
                raise AuthError(f"Unable to obtain SharePoint authorization token: {ex}") from ex
            token = extract_form_digest(payload)
            self.config = self.config.merge(token=token)
            self.digest_timeout = extract_digest_timeout(payload)
            safe_log(self.log, "info", "Authorization token refreshed", url=url, timeout_s=self.digest_timeout)
            return token

        return self._run(cfg, callback, on_error, _do, use_defaults=False)

    # ------------------------------ interne Utils -----------------------------

    def _send(
        self,
        cfg: ClientConfig,
        method: str,
        url: str,
        *,
        json: Optional[Any] = None,
        headers: Optional[Mapping[str, str]] = None,
    ) -> Any:
        if method.upper() in ("POST", "DELETE", "PUT", "PATCH", "MERGE") and not cfg.token:
            safe_log(self.log, "warning", "State-mutating request without authorization token",
                     method=method.upper(), url=url)
        return self.http.request(
            method,
            url,
            verbosity=cfg.verbosity,
            token=cfg.token,
            headers=headers,
            json=json,
            timeout=cfg.timeout,
        )

    def _get_collection(self, cfg: ClientConfig, url: str) -> Any:
        """GET + (bei recursive_fetch) alle Folgeseiten zu einem Envelope zusammenführen."""
        first = self._send(cfg, "GET", url)
        if not cfg.recursive_fetch:
            return first
        next_url = extract_next_link(first, cfg.verbosity)
        if not next_url:
            return first

        items: List[Dict[str, Any]] = extract_results(first, cfg.verbosity)
        seen = {url}
        pages = 1
        while next_url and next_url not in seen:
            seen.add(next_url)
            page = self._send(cfg, "GET", next_url)
            items.extend(extract_results(page, cfg.verbosity))
            pages += 1
            next_url = extract_next_link(page, cfg.verbosity)
        safe_log(self.log, "debug", "Pages merged", url=url, pages=pages, count=len(items))
        return merge_pages(first, items, cfg.verbosity)

    def _item_body(self, cfg: ClientConfig, fields: Mapping[str, Any], entity_type: Optional[str]) -> Dict[str, Any]:
        body = dict(fields)
        if cfg.verbosity.is_verbose and "__metadata" not in body:
            if not entity_type:
                url = join_site(cfg.site_url, format_template(cfg.urls.list_info, cfg.list_title))
                info = extract_entity(self._send(cfg, "GET", url), cfg.verbosity)
                entity_type = info.get("ListItemEntityTypeFullName")
            if entity_type:
                body["__metadata"] = {"type": entity_type}
        return body

    def _run(
        self,
        cfg: ClientConfig,
        on_success: Callback,
        on_error: Callback,
        action: Callable[[], Any],
        *,
        use_defaults: bool = True,
    ) -> SpResult:
        """Führt action aus, verpackt das Ergebnis in SpResult und ruft die Callbacks."""
        try:
            result = SpResult.success(action())
        except SpRestError as ex:
            safe_log(self.log, "error", "Request failed", error=f"{type(ex).__name__}: {ex}")
            result = SpResult.failure(ex)

        if result.ok:
            cb = on_success or (cfg.on_success if use_defaults else None)
            if cb is not None:
                cb(result.data)
        else:
            cb = on_error or cfg.on_error
            if cb is not None:
                cb(result.error)
        return result

    def __repr__(self) -> str:
        return f"ListClient({self.config.as_dict(mask_secrets=True)})"
