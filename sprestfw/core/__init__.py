# -*- coding: utf-8 -*-
# Re-exports für Kernklassen und Subpackages

from .errors import SpRestError, InvalidArgument, TransportError, AuthError, AuthShapeMismatch
from .result import SpResult
from .http import SpHttp
from .odata import Verbosity, FilterCriterion, accept_header, build_filter
from .urls import format_template, add_max_items, add_query_param
from .logbuffer import LogBuffer

# Subpackage als Attribut verfügbar machen
from . import config as config
from .config import ClientConfig, UrlTemplates, load_client_config

__all__ = [
    "SpRestError",
    "InvalidArgument",
    "TransportError",
    "AuthError",
    "AuthShapeMismatch",
    "SpResult",
    "SpHttp",
    "Verbosity",
    "FilterCriterion",
    "accept_header",
    "build_filter",
    "format_template",
    "add_max_items",
    "add_query_param",
    "LogBuffer",
    "config",
    "ClientConfig",
    "UrlTemplates",
    "load_client_config",
]
