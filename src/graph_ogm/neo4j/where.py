"""Property filter expressions rendered into Cypher boolean fragments.

A ``Where`` describes predicates on a single property, e.g.::

    Where("value", {"$gt": 2, "$lte": 10})

and can be chained with further filters::

    Where("name", {"$eq": "Test1"}).or_("name", {"$startswith": "Tmp"})

The pattern variable a filter renders against (``n1``, ``n2``, ``r``...) is
set late through ``variable``, normally by ``RelationQuery`` when the filter
is attached to a role.
"""

from __future__ import annotations

import math
from typing import Any, Dict, List, Mapping, Optional, Tuple, Union

from .properties import escape_name

COMPARISON_OPERATORS: Dict[str, str] = {
    "$eq": "=",
    "$ne": "<>",
    "$gt": ">",
    "$gte": ">=",
    "$lt": "<",
    "$lte": "<=",
    "$in": "IN",
    "$contains": "CONTAINS",
    "$startswith": "STARTS WITH",
    "$endswith": "ENDS WITH",
    "$regex": "=~",
}
LOGICAL_OPERATORS: Dict[str, str] = {"$and": "AND", "$or": "OR"}

_STRING_OPERATORS = {"$contains", "$startswith", "$endswith", "$regex"}


def format_literal(value: Any) -> str:
    """Render a Python value as a Cypher literal."""
    if value is None:
        return "NULL"
    # bool before int: bool is an int subclass
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and not math.isfinite(value):
        raise ValueError(f"Cannot render non-finite number: {value!r}")
    if isinstance(value, (int, float)):
        return repr(value)
    if isinstance(value, str):
        escaped = value.replace("\\", "\\\\").replace("'", "\\'")
        return f"'{escaped}'"
    if isinstance(value, (list, tuple)):
        return "[" + ", ".join(format_literal(v) for v in value) + "]"
    raise ValueError(f"Unsupported filter value type: {type(value).__name__}")


class Where:
    """A filter on one property, optionally chained with other filters."""

    def __init__(
        self,
        field: str,
        filter: Mapping[str, Any],
        variable: str = "n",
    ) -> None:
        if not isinstance(field, str) or not field:
            raise ValueError("Where field name must be a non-empty string")
        if not isinstance(filter, Mapping) or not filter:
            raise ValueError("Where filter must be a non-empty mapping of operators")
        _validate_operators(filter)

        self._field = field
        self._filter: Dict[str, Any] = dict(filter)
        self._children: List[Tuple[str, Where]] = []
        self._variable = variable

    @classmethod
    def create(cls, field: str, filter: Mapping[str, Any]) -> "Where":
        return cls(field, filter)

    @property
    def field(self) -> str:
        return self._field

    @property
    def variable(self) -> str:
        """Pattern variable the filter is scoped to."""
        return self._variable

    @variable.setter
    def variable(self, value: str) -> None:
        self._variable = value
        for _, child in self._children:
            child.variable = value

    def and_(
        self,
        field: Union[str, "Where"],
        filter: Optional[Mapping[str, Any]] = None,
    ) -> "Where":
        """Add a conjunct. Returns this instance."""
        return self._chain("AND", field, filter)

    def or_(
        self,
        field: Union[str, "Where"],
        filter: Optional[Mapping[str, Any]] = None,
    ) -> "Where":
        """Add a disjunct. Returns this instance."""
        return self._chain("OR", field, filter)

    def _chain(
        self,
        connective: str,
        field: Union[str, "Where"],
        filter: Optional[Mapping[str, Any]],
    ) -> "Where":
        if isinstance(field, Where):
            child = field
        else:
            if filter is None:
                raise ValueError("Where filter must be a non-empty mapping of operators")
            child = Where(field, filter)
        if child is self:
            raise ValueError("A Where cannot be chained with itself")
        child.variable = self._variable
        self._children.append((connective, child))
        return self

    @property
    def clause(self) -> str:
        """Boolean expression fragment, e.g. ``n1.name = 'Test1'``."""
        clause = self._predicate(grouped=bool(self._children))
        previous = None
        for connective, child in self._children:
            if previous is not None and connective != previous:
                clause = f"({clause})"
            clause = f"{clause} {connective} {child._grouped_clause()}"
            previous = connective
        return clause

    def _is_compound(self) -> bool:
        return bool(self._children) or len(self._filter) > 1

    def _grouped_clause(self) -> str:
        clause = self.clause
        return f"({clause})" if self._is_compound() else clause

    def _predicate(self, grouped: bool) -> str:
        terms = _render_operators(self._property(), self._filter)
        predicate = " AND ".join(terms)
        if grouped and len(terms) > 1:
            return f"({predicate})"
        return predicate

    def _property(self) -> str:
        return f"{self._variable}.{escape_name(self._field)}"

    def __repr__(self) -> str:
        return f"Where({self.clause!r})"


def _validate_operators(filter: Mapping[str, Any]) -> None:
    for key, value in filter.items():
        if key in LOGICAL_OPERATORS:
            if not isinstance(value, (list, tuple)) or not value:
                raise ValueError(f"{key} expects a non-empty list of operator mappings")
            for nested in value:
                if not isinstance(nested, Mapping) or not nested:
                    raise ValueError(f"{key} expects a non-empty list of operator mappings")
                _validate_operators(nested)
        elif key in COMPARISON_OPERATORS:
            if key == "$in" and not isinstance(value, (list, tuple)):
                raise ValueError("$in expects a list of values")
            if key in _STRING_OPERATORS and not isinstance(value, str):
                raise ValueError(f"{key} expects a string value")
            # Fail at construction rather than at render time.
            format_literal(value)
        else:
            raise ValueError(f"Unknown Where operator: {key}")


def _render_operators(prop: str, filter: Mapping[str, Any]) -> List[str]:
    terms = []
    for key, value in filter.items():
        if key in LOGICAL_OPERATORS:
            parts = []
            for nested in value:
                nested_terms = _render_operators(prop, nested)
                part = " AND ".join(nested_terms)
                parts.append(f"({part})" if len(nested_terms) > 1 else part)
            joined = f" {LOGICAL_OPERATORS[key]} ".join(parts)
            terms.append(f"({joined})" if len(parts) > 1 else joined)
        elif value is None and key == "$eq":
            terms.append(f"{prop} IS NULL")
        elif value is None and key == "$ne":
            terms.append(f"{prop} IS NOT NULL")
        else:
            terms.append(f"{prop} {COMPARISON_OPERATORS[key]} {format_literal(value)}")
    return terms
