from __future__ import annotations

from sprestfw.domains.sharepoint.lists.client import ListClient
from sprestfw.domains.sharepoint.lists.items import list_df

from tests.helpers import SITE, FakeSession

ITEMS = f"{SITE}/_api/web/lists/getbytitle('Docs')/items"


def test_list_df_collects_pages_and_drops_metadata() -> None:
    session = FakeSession(
        {"d": {"results": [
            {"__metadata": {"type": "SP.Data.DocsListItem"}, "Id": 1, "Title": "A",
             "Author": {"__deferred": {"uri": "x"}}},
        ], "__next": f"{ITEMS}?p=2"}},
        {"d": {"results": [{"__metadata": {}, "Id": 2, "Title": "B"}]}},
    )
    client = ListClient(session=session, site_url=SITE, list_title="Docs")

    df, info = list_df(client)

    assert list(df.columns) == ["Id", "Title"]
    assert df["Title"].tolist() == ["A", "B"]
    assert info["count"] == 2
    assert info["url"] == f"{ITEMS}?$top=100"


def test_list_df_selects_columns_and_warns_on_missing() -> None:
    session = FakeSession({"value": [{"Id": 1, "Title": "A", "Status": "Open"}]})
    client = ListClient(session=session, site_url=SITE, list_title="Docs", verbosity="compact")

    df, info = list_df(client, columns="Title, Missing", subfolder="Drafts")

    assert list(df.columns) == ["Title", "Missing"]
    assert "Missing" in info["warnings"][0]
    assert "substringof('Lists/Docs/Drafts/', FileRef)" in session.calls[0]["url"]
