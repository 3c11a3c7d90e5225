from unittest.mock import AsyncMock, MagicMock

import pytest

from graph_ogm.tools import relations
from graph_ogm.tools.utils import where_from_dict


def test_where_from_dict():
    where = where_from_dict(
        {
            "field": "since",
            "filter": {"$gte": 2020},
            "and": [{"field": "weight", "filter": {"$lt": 1}}],
        }
    )
    where.variable = "r"
    assert where.clause == "r.since >= 2020 AND r.weight < 1"
    assert where_from_dict(None) is None


def test_where_from_dict_rejects_bad_input():
    with pytest.raises(ValueError):
        where_from_dict("since >= 2020")
    with pytest.raises(ValueError):
        where_from_dict({"field": "since"})


@pytest.mark.asyncio
async def test_find_relations_tool(monkeypatch):
    fake_db = MagicMock()
    fake_db.find = AsyncMock(return_value=[{"id": 10, "type": "KNOWS"}])
    monkeypatch.setattr(relations, "relationdb", fake_db)

    result = await relations.find_relations(
        1, 2, "KNOWS", {"field": "since", "filter": {"$gte": 2020}}
    )

    assert result == {"count": 1, "results": [{"id": 10, "type": "KNOWS"}]}
    start_id, end_id, type_, where = fake_db.find.await_args.args
    assert (start_id, end_id, type_) == (1, 2, "KNOWS")
    assert where.field == "since"


@pytest.mark.asyncio
async def test_count_relations_tool(monkeypatch):
    fake_db = MagicMock()
    fake_db.count = AsyncMock(return_value=3)
    monkeypatch.setattr(relations, "relationdb", fake_db)

    assert await relations.count_relations(1, 2) == {"count": 3}
