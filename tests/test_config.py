from __future__ import annotations

import json

import pytest

from sprestfw.core.config import ClientConfig, load_client_config
from sprestfw.core.errors import InvalidArgument
from sprestfw.core.odata import Verbosity


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch) -> None:
    import os

    for key in list(os.environ):
        if key.upper().startswith("SPRESTFW_"):
            monkeypatch.delenv(key)


def test_defaults() -> None:
    cfg = ClientConfig()
    assert cfg.max_items == 100
    assert cfg.recursive_fetch is True
    assert cfg.verbosity is Verbosity.VERBOSE
    assert cfg.urls.list == "/_api/web/lists/getbytitle('{0}')/items"
    assert cfg.urls.item == "/_api/web/lists/getbytitle('{0}')/items({1})"


def test_merge_returns_new_config() -> None:
    base = ClientConfig(token="t")
    merged = base.merge({"listTitle": "X", "recursiveFetch": "no"})
    assert base.list_title == ""
    assert merged.token == "t"
    assert merged.list_title == "X"
    assert merged.recursive_fetch is False


def test_max_items_bounds() -> None:
    assert ClientConfig().merge(max_items=1).max_items == 1
    assert ClientConfig().merge(max_items="5000").max_items == 5000
    with pytest.raises(InvalidArgument):
        ClientConfig().merge(max_items=True)


def test_direct_construction_is_normalized() -> None:
    cfg = ClientConfig(site_url="https://x/sites/hr/", verbosity="compact", max_items="250",
                       urls={"item": "/_api/items({1})"})
    assert cfg.site_url == "https://x/sites/hr"
    assert cfg.verbosity is Verbosity.COMPACT
    assert cfg.max_items == 250
    assert cfg.urls.item == "/_api/items({1})"
    assert cfg.urls.list == "/_api/web/lists/getbytitle('{0}')/items"


@pytest.mark.parametrize("bad", [
    {"max_items": 0},
    {"max_items": 5001},
    {"verbosity": "chatty"},
    {"timeout": -1},
    {"urls": {"nope": "/x"}},
])
def test_direct_construction_rejects_invalid_values(bad) -> None:
    with pytest.raises(InvalidArgument):
        ClientConfig(**bad)


def test_as_dict_masks_token() -> None:
    d = ClientConfig(token="secret").as_dict()
    assert d["token"] == "****"
    assert ClientConfig().as_dict()["token"] == ""


def test_load_from_json_node(tmp_path) -> None:
    path = tmp_path / "config.json"
    path.write_text(
        json.dumps({"sites": {"hr": {"site_url": "https://x/sites/hr/", "list_title": "Docs", "verbosity": "compact"}}}),
        encoding="utf-8",
    )
    cfg, info = load_client_config(config_path=path, node="sites.hr", env_override=False)
    assert cfg.site_url == "https://x/sites/hr"
    assert cfg.list_title == "Docs"
    assert cfg.verbosity is Verbosity.COMPACT
    assert info["source"] == "json"
    assert info["warnings"] == []


def test_env_overrides_json(tmp_path, monkeypatch) -> None:
    path = tmp_path / "config.json"
    path.write_text(json.dumps({"sharepoint": {"list_title": "Docs", "max_items": 10}}), encoding="utf-8")
    monkeypatch.setenv("SPRESTFW_MAX_ITEMS", "250")
    monkeypatch.setenv("sprestfw_token", "env-digest")

    cfg, info = load_client_config(config_path=path)

    assert cfg.list_title == "Docs"
    assert cfg.max_items == 250
    assert cfg.token == "env-digest"
    assert info["source"] == "json+env"
    assert info["used_env_vars"] == {"token": True, "max_items": True}
    assert info["config"]["token"] == "****"


def test_missing_file_and_node_are_reported(tmp_path) -> None:
    cfg, info = load_client_config(config_path=tmp_path / "nope.json", env_override=False)
    assert cfg == ClientConfig()
    assert info["source"] == "defaults"
    assert "not found" in info["warnings"][0]

    path = tmp_path / "config.json"
    path.write_text("{}", encoding="utf-8")
    _, info = load_client_config(config_path=path, node="sharepoint", env_override=False)
    assert "Node 'sharepoint' not found" in info["warnings"][0]


def test_invalid_json_value_raises(tmp_path) -> None:
    path = tmp_path / "config.json"
    path.write_text(json.dumps({"sharepoint": {"max_items": 9000}}), encoding="utf-8")
    with pytest.raises(InvalidArgument):
        load_client_config(config_path=path, env_override=False)
