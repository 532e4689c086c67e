from __future__ import annotations

from sprestfw.core.urls import add_max_items, add_query_param, format_template, join_site, subfolder_fileref


def test_format_template_substitutes_positional_placeholders() -> None:
    tpl = "/_api/web/lists/getbytitle('{0}')/items({1})"
    assert format_template(tpl, "Docs", 5) == "/_api/web/lists/getbytitle('Docs')/items(5)"


def test_format_template_keeps_unmatched_placeholders() -> None:
    assert format_template("{0}/{1}/{0}", "a") == "a/{1}/a"


def test_add_max_items_uses_question_mark_without_query() -> None:
    assert add_max_items("https://x/items", 100) == "https://x/items?$top=100"


def test_add_max_items_uses_ampersand_with_existing_query() -> None:
    assert add_max_items("https://x/items?$select=Title", 50) == "https://x/items?$select=Title&$top=50"


def test_add_query_param_chains() -> None:
    url = add_query_param(add_query_param("https://x", "a", 1), "b", 2)
    assert url == "https://x?a=1&b=2"


def test_add_query_param_encodes_reserved_characters() -> None:
    assert add_query_param("https://x", "$filter", "Dept eq 'R&D'") == "https://x?$filter=Dept eq 'R%26D'"
    assert add_query_param("https://x", "$filter", "Tag eq 'C#'") == "https://x?$filter=Tag eq 'C%23'"
    assert add_query_param("https://x", "$filter", "Rate eq '100%+'") == "https://x?$filter=Rate eq '100%25%2B'"


def test_subfolder_fileref_and_join_site() -> None:
    assert subfolder_fileref("Docs", "Drafts") == "Lists/Docs/Drafts/"
    assert join_site("https://x/sites/a/", "/_api/web") == "https://x/sites/a/_api/web"
