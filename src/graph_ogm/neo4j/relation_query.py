"""Fluent builder for relation MATCH statements.

A ``RelationQuery`` accumulates optional constraints on the pattern

    (n1:StartLabel)-[r:TYPE]->(n2:EndLabel)

and renders one of four statement shapes from them:

- ``query_cypher()``: the matched relations
- ``query_populated_cypher()``: relations plus both endpoint nodes
- ``query_nodes_cypher()``: only the start and/or end nodes
- ``count_cypher()``: ``COUNT(r)``, ignoring projection, order and limit

Setters never raise. A value of the wrong type is ignored and the previous
(or default) state is kept, so a chain such as
``RelationQuery.create("KNOWS").start_node("x").limit(10)`` still renders.
Argument checking is the job of the facade in ``relation.py``.

Every render call recomputes the statement from the current state; the
object holds no execution state and can be reused.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional

from .properties import (
    PropertyNames,
    escape_name,
    is_valid_properties_array,
    parse_properties_array,
)
from .where import Where

START_VARIABLE = "n1"
END_VARIABLE = "n2"
RELATION_VARIABLE = "r"

NODES_START = "start"
NODES_END = "end"
NODES_BOTH = "both"


def _is_integer(value) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


@dataclass(frozen=True)
class OrderBy:
    """Single ordering descriptor shared by the relation and both endpoints."""

    direction: str
    properties: Optional[PropertyNames] = None
    start_node_properties: Optional[PropertyNames] = None
    end_node_properties: Optional[PropertyNames] = None


class RelationQuery:
    """Query object describing which relations to match and how to return them."""

    def __init__(self, type: Optional[str] = None) -> None:
        self._type: Optional[str] = None
        self._start_node_id: Optional[int] = None
        self._start_node_label: Optional[str] = None
        self._end_node_id: Optional[int] = None
        self._end_node_label: Optional[str] = None
        self._start_node_where: Optional[Where] = None
        self._end_node_where: Optional[Where] = None
        self._relation_where: Optional[Where] = None
        self._limit: Optional[int] = None
        self._order_by: Optional[OrderBy] = None
        self._return_start: Optional[str] = None
        self._return_end: Optional[str] = None
        self._return_relation: Optional[str] = None
        self.type = type

    @classmethod
    def create(cls, type: Optional[str] = None) -> "RelationQuery":
        return cls(type)

    # Constraints

    @property
    def type(self) -> Optional[str]:
        """Relation type constraint."""
        return self._type

    @type.setter
    def type(self, value: Optional[str]) -> None:
        if isinstance(value, str) and value:
            self._type = value

    def relation_type(self, value: str) -> "RelationQuery":
        self.type = value
        return self

    def start_node(
        self, node_id: Optional[int] = None, label: Optional[str] = None
    ) -> "RelationQuery":
        """Constrain the start node by internal id and/or label."""
        if _is_integer(node_id):
            self._start_node_id = node_id
        if isinstance(label, str) and label:
            self._start_node_label = label
        return self

    def end_node(
        self, node_id: Optional[int] = None, label: Optional[str] = None
    ) -> "RelationQuery":
        """Constrain the end node by internal id and/or label."""
        if _is_integer(node_id):
            self._end_node_id = node_id
        if isinstance(label, str) and label:
            self._end_node_label = label
        return self

    def start_node_where(self, where: Optional[Where]) -> "RelationQuery":
        """Filter on start node properties. ``None`` clears the filter."""
        if where is None or isinstance(where, Where):
            self._start_node_where = where
            if where is not None:
                where.variable = START_VARIABLE
        return self

    def end_node_where(self, where: Optional[Where]) -> "RelationQuery":
        """Filter on end node properties. ``None`` clears the filter."""
        if where is None or isinstance(where, Where):
            self._end_node_where = where
            if where is not None:
                where.variable = END_VARIABLE
        return self

    def relation_where(self, where: Optional[Where]) -> "RelationQuery":
        """Filter on relation properties. ``None`` clears the filter."""
        if where is None or isinstance(where, Where):
            self._relation_where = where
            if where is not None:
                where.variable = RELATION_VARIABLE
        return self

    def limit(self, value: int) -> "RelationQuery":
        """Cap the number of returned rows. Negative values are ignored."""
        if _is_integer(value) and value >= 0:
            self._limit = value
        return self

    def desc_order_by(
        self,
        properties: Optional[PropertyNames] = None,
        start_node_properties: Optional[PropertyNames] = None,
        end_node_properties: Optional[PropertyNames] = None,
    ) -> "RelationQuery":
        """Order descending. Replaces any earlier ordering."""
        self._order_by = OrderBy(
            "DESC", properties, start_node_properties, end_node_properties
        )
        return self

    def asc_order_by(
        self,
        properties: Optional[PropertyNames] = None,
        start_node_properties: Optional[PropertyNames] = None,
        end_node_properties: Optional[PropertyNames] = None,
    ) -> "RelationQuery":
        """Order ascending. Replaces any earlier ordering."""
        self._order_by = OrderBy(
            "ASC", properties, start_node_properties, end_node_properties
        )
        return self

    def return_start_node(self, properties: PropertyNames) -> "RelationQuery":
        if is_valid_properties_array(properties):
            self._return_start = parse_properties_array(properties, START_VARIABLE)
        return self

    def return_end_node(self, properties: PropertyNames) -> "RelationQuery":
        if is_valid_properties_array(properties):
            self._return_end = parse_properties_array(properties, END_VARIABLE)
        return self

    def return_relation_node(self, properties: PropertyNames) -> "RelationQuery":
        if is_valid_properties_array(properties):
            self._return_relation = parse_properties_array(
                properties, RELATION_VARIABLE
            )
        return self

    # Fragments

    def match_cypher(self) -> str:
        """MATCH pattern followed by the WHERE clause, if any."""
        match = (
            f"MATCH p=({self._start_node_clause()})"
            f"-[{self._relation_clause()}]->({self._end_node_clause()})"
        )
        return _join(match, self.where_cypher())

    def where_cypher(self) -> str:
        """WHERE clause, or an empty string when nothing is constrained."""
        terms: List[str] = []
        if self._start_node_id is not None:
            terms.append(f"ID({START_VARIABLE}) = {self._start_node_id}")
        if self._end_node_id is not None:
            terms.append(f"ID({END_VARIABLE}) = {self._end_node_id}")
        for where in (self._relation_where, self._start_node_where, self._end_node_where):
            if where is not None:
                terms.append(where.clause)
        return f"WHERE {' AND '.join(terms)}" if terms else ""

    def return_clause(self, populated: bool = False) -> str:
        projections = [self._return_relation or RELATION_VARIABLE]
        if populated:
            projections.append(self._return_start or START_VARIABLE)
            projections.append(self._return_end or END_VARIABLE)
        return f"RETURN {', '.join(projections)}"

    def nodes_return_clause(
        self, nodes: Optional[str] = NODES_BOTH, distinct: bool = False
    ) -> str:
        """RETURN clause projecting endpoint nodes only.

        ``nodes`` is ``"start"``, ``"end"`` or ``"both"``; ``None`` and any
        other value mean both.
        """
        if nodes not in (NODES_START, NODES_END):
            nodes = NODES_BOTH
        projections = []
        if nodes in (NODES_START, NODES_BOTH):
            projections.append(self._return_start or START_VARIABLE)
        if nodes in (NODES_END, NODES_BOTH):
            projections.append(self._return_end or END_VARIABLE)
        distinct_clause = "DISTINCT " if distinct else ""
        return f"RETURN {distinct_clause}{', '.join(projections)}"

    def order_by_clause(self) -> str:
        if self._order_by is None:
            return ""
        order = self._order_by
        lists = []
        for properties, variable in (
            (order.properties, RELATION_VARIABLE),
            (order.start_node_properties, START_VARIABLE),
            (order.end_node_properties, END_VARIABLE),
        ):
            if is_valid_properties_array(properties):
                lists.append(parse_properties_array(properties, variable))
        if not lists:
            return ""
        return f"ORDER BY {', '.join(lists)} {order.direction}"

    def limit_clause(self) -> str:
        return f"LIMIT {self._limit}" if self._limit is not None else ""

    # Statements

    def query_cypher(self) -> str:
        return self._query_cypher_builder(populated=False)

    def query_populated_cypher(self) -> str:
        return self._query_cypher_builder(populated=True)

    def query_nodes_cypher(
        self, nodes: Optional[str] = NODES_BOTH, distinct: bool = False
    ) -> str:
        return _join(
            self.match_cypher(),
            self.nodes_return_clause(nodes, distinct),
            self.order_by_clause(),
            self.limit_clause(),
        )

    def count_cypher(self) -> str:
        return _join(self.match_cypher(), f"RETURN COUNT({RELATION_VARIABLE}) AS count")

    def _query_cypher_builder(self, populated: bool) -> str:
        return _join(
            self.match_cypher(),
            self.return_clause(populated),
            self.order_by_clause(),
            self.limit_clause(),
        )

    def _start_node_clause(self) -> str:
        return _with_label(START_VARIABLE, self._start_node_label)

    def _end_node_clause(self) -> str:
        return _with_label(END_VARIABLE, self._end_node_label)

    def _relation_clause(self) -> str:
        return _with_label(RELATION_VARIABLE, self._type)

    def __repr__(self) -> str:
        return f"RelationQuery({self.query_cypher()!r})"


def _with_label(variable: str, label: Optional[str]) -> str:
    return f"{variable}:{escape_name(label)}" if label else variable


def _join(*parts: str) -> str:
    return " ".join(part for part in parts if part)
