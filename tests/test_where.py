import pytest

from graph_ogm.neo4j.where import Where, format_literal


def test_equality_clause_uses_variable():
    where = Where("name", {"$eq": "Test1"})
    where.variable = "n1"
    assert where.clause == "n1.name = 'Test1'"


def test_comparison_operators():
    assert Where("value", {"$gt": 2}, variable="r").clause == "r.value > 2"
    assert Where("value", {"$gte": 2}).clause == "n.value >= 2"
    assert Where("value", {"$lt": 2.5}).clause == "n.value < 2.5"
    assert Where("value", {"$lte": 2}).clause == "n.value <= 2"
    assert Where("value", {"$ne": 2}).clause == "n.value <> 2"


def test_string_operators():
    assert Where("name", {"$contains": "es"}).clause == "n.name CONTAINS 'es'"
    assert Where("name", {"$startswith": "Te"}).clause == "n.name STARTS WITH 'Te'"
    assert Where("name", {"$endswith": "t1"}).clause == "n.name ENDS WITH 't1'"
    assert Where("name", {"$regex": "T.*"}).clause == "n.name =~ 'T.*'"


def test_in_operator_renders_list():
    assert Where("name", {"$in": ["a", "b"]}).clause == "n.name IN ['a', 'b']"
    assert Where("value", {"$in": [1, 2]}).clause == "n.value IN [1, 2]"


def test_null_and_boolean_literals():
    assert Where("x", {"$eq": None}).clause == "n.x IS NULL"
    assert Where("x", {"$ne": None}).clause == "n.x IS NOT NULL"
    assert Where("flag", {"$eq": True}).clause == "n.flag = true"
    assert Where("flag", {"$eq": False}).clause == "n.flag = false"


def test_string_literal_is_escaped():
    assert Where("name", {"$eq": "O'Brien"}).clause == "n.name = 'O\\'Brien'"
    assert format_literal("a\\b") == "'a\\\\b'"


def test_field_name_is_quoted_when_not_an_identifier():
    assert Where("first name", {"$eq": "x"}).clause == "n.`first name` = 'x'"


def test_several_operators_are_a_conjunction():
    assert Where("value", {"$gt": 1, "$lt": 5}).clause == "n.value > 1 AND n.value < 5"


def test_logical_operators_on_one_field():
    where = Where("name", {"$or": [{"$eq": "a"}, {"$eq": "b"}]})
    assert where.clause == "(n.name = 'a' OR n.name = 'b')"

    where = Where("value", {"$or": [{"$gt": 1, "$lt": 3}, {"$eq": 10}]})
    assert where.clause == "((n.value > 1 AND n.value < 3) OR n.value = 10)"


def test_and_operator_on_one_field():
    where = Where("value", {"$and": [{"$gt": 1}, {"$lt": 5}]})
    assert where.clause == "(n.value > 1 AND n.value < 5)"

    where = Where("value", {"$and": [{"$gte": 0}]})
    assert where.clause == "n.value >= 0"


def test_and_chain():
    where = Where("a", {"$eq": 1}).and_("b", {"$eq": 2})
    assert where.clause == "n.a = 1 AND n.b = 2"


def test_mixed_connectives_group_what_came_before():
    where = Where("a", {"$eq": 1}).and_("b", {"$eq": 2}).or_("c", {"$eq": 3})
    assert where.clause == "(n.a = 1 AND n.b = 2) OR n.c = 3"


def test_compound_children_are_parenthesised():
    where = Where("a", {"$eq": 1}).or_(Where("b", {"$gt": 1, "$lt": 3}))
    assert where.clause == "n.a = 1 OR (n.b > 1 AND n.b < 3)"

    where = Where("a", {"$gt": 1, "$lt": 3}).or_("b", {"$eq": 2})
    assert where.clause == "(n.a > 1 AND n.a < 3) OR n.b = 2"


def test_variable_propagates_to_children():
    where = Where("a", {"$eq": 1}).and_(Where("b", {"$eq": 2}))
    where.variable = "r"
    assert where.clause == "r.a = 1 AND r.b = 2"

    where.and_("c", {"$eq": 3})
    assert where.clause == "r.a = 1 AND r.b = 2 AND r.c = 3"


def test_create_is_equivalent_to_constructor():
    assert Where.create("property", {"$eq": "c"}).clause == "n.property = 'c'"


@pytest.mark.parametrize(
    "field, filter",
    [
        ("", {"$eq": 1}),
        (None, {"$eq": 1}),
        ("a", {}),
        ("a", None),
        ("a", {"$like": 1}),
        ("a", {"$in": "x"}),
        ("a", {"$contains": 1}),
        ("a", {"$eq": object()}),
        ("a", {"$gt": float("nan")}),
        ("a", {"$lt": float("inf")}),
        ("a", {"$in": [1, float("-inf")]}),
        ("a", {"$or": []}),
        ("a", {"$and": [{"$bogus": 1}]}),
    ],
)
def test_invalid_construction_raises(field, filter):
    with pytest.raises(ValueError):
        Where(field, filter)


def test_chaining_with_itself_raises():
    where = Where("a", {"$eq": 1})
    with pytest.raises(ValueError):
        where.and_(where)
