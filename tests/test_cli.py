from graph_ogm.cli import _parse_value, _where_from_args, build_parser


def test_parse_value():
    assert _parse_value("2020") == 2020
    assert _parse_value('["a", "b"]') == ["a", "b"]
    assert _parse_value("Test1") == "Test1"


def test_where_from_args_chains_with_and():
    where = _where_from_args([["since", "$gte", "2020"], ["name", "$eq", "Ada"]])
    assert where.clause == "n.since >= 2020 AND n.name = 'Ada'"
    assert _where_from_args(None) is None


def test_find_arguments():
    args = build_parser().parse_args(
        ["find", "--start-id", "1", "--end-id", "2", "--type", "KNOWS", "--where", "since", "$gte", "2020"]
    )
    assert (args.start_id, args.end_id, args.type) == (1, 2, "KNOWS")
    assert args.where == [["since", "$gte", "2020"]]


def test_index_arguments():
    args = build_parser().parse_args(["create-index", "--label", "object", "--fields", "name", "value"])
    assert args.fields == ["name", "value"]
