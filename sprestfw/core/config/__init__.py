# -*- coding: utf-8 -*-
"""
sprestfw.core.config — Konfigurations-Subpackage

Aktuell:
- ListClient: sprestfw.core.config.client_config (ClientConfig, UrlTemplates, load_client_config)

Public API (re-exports):
    from sprestfw.core.config import ClientConfig, load_client_config
"""
from .client_config import ClientConfig, UrlTemplates, MAX_ITEMS_LIMIT, load_client_config, __version__

__all__ = ["ClientConfig", "UrlTemplates", "MAX_ITEMS_LIMIT", "load_client_config", "__version__"]
