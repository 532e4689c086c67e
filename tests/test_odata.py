from __future__ import annotations

import pytest

from sprestfw.core.errors import InvalidArgument
from sprestfw.core.odata import (
    FilterCriterion,
    Verbosity,
    accept_header,
    build_filter,
    extract_entity,
    extract_next_link,
    extract_results,
    merge_pages,
)


@pytest.mark.parametrize(
    "value, expected",
    [
        (Verbosity.COMPACT, "application/json;odata=nometadata"),
        ("minimal", "application/json;odata=minimalmetadata"),
        ("VERBOSE", "application/json;odata=verbose"),
        ("application/json;odata=nometadata", "application/json;odata=nometadata"),
    ],
)
def test_accept_header_selects_literal(value, expected) -> None:
    assert accept_header(value) == expected


def test_unknown_verbosity_is_rejected() -> None:
    with pytest.raises(InvalidArgument):
        Verbosity.parse("chatty")


def test_envelopes_verbose_and_flat() -> None:
    verbose = {"d": {"results": [{"Id": 1}], "__next": "https://x/next"}}
    flat = {"value": [{"Id": 2}], "odata.nextLink": "https://x/next2"}

    assert extract_results(verbose, Verbosity.VERBOSE) == [{"Id": 1}]
    assert extract_next_link(verbose, Verbosity.VERBOSE) == "https://x/next"
    assert extract_results(flat, Verbosity.COMPACT) == [{"Id": 2}]
    assert extract_next_link(flat, Verbosity.MINIMAL) == "https://x/next2"
    assert extract_next_link({"value": [], "@odata.nextLink": "https://x/next3"}, Verbosity.COMPACT) == "https://x/next3"
    assert extract_results({"unexpected": True}, Verbosity.VERBOSE) == []
    assert extract_entity({"d": {"Title": "Docs"}}, Verbosity.VERBOSE) == {"Title": "Docs"}


def test_merge_pages_keeps_shape_and_drops_next_link() -> None:
    first = {"d": {"results": [{"Id": 1}], "__next": "https://x/next"}}
    merged = merge_pages(first, [{"Id": 1}, {"Id": 2}], Verbosity.VERBOSE)
    assert merged == {"d": {"results": [{"Id": 1}, {"Id": 2}]}}
    assert first["d"]["__next"] == "https://x/next"
    flat = merge_pages({"value": [], "@odata.nextLink": "https://x/n"}, [{"Id": 3}], Verbosity.MINIMAL)
    assert flat == {"value": [{"Id": 3}]}


def test_filter_criteria_render() -> None:
    expr = build_filter([
        FilterCriterion("Status", "eq", "O'Neil"),
        FilterCriterion("Prio", "gt", 2),
        FilterCriterion("Done", "ne", True),
    ])
    assert expr == "Status eq 'O''Neil' and Prio gt 2 and Done ne true"
    assert FilterCriterion("FileRef", "substringof", "Lists/Docs/").to_expression() == (
        "substringof('Lists/Docs/', FileRef)"
    )


def test_filter_criterion_rejects_unknown_operator() -> None:
    with pytest.raises(InvalidArgument):
        FilterCriterion("Title", "like", "x").to_expression()
