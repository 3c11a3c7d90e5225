"""Flatten raw driver rows into plain records.

Graph entities come back from the driver as Node / Relationship objects.
Records handed to callers are plain dicts: the entity's properties with its
internal id under ``id`` (and ``type`` for relations). Property projections
such as ``r.name`` arrive as scalar columns and are grouped back under the
variable they belong to.
"""

from typing import Any, Dict, Mapping, Optional


def entity_id(entity: Any) -> Optional[int]:
    """Internal numeric id of a driver Node / Relationship.

    Neo4j 5 element ids look like ``4:<database>:<id>``; the trailing number
    is the id ``ID()`` returns in Cypher.
    """
    element_id = getattr(entity, "element_id", None)
    if isinstance(element_id, str):
        tail = element_id.rsplit(":", 1)[-1]
        if tail.isdigit():
            return int(tail)
    return getattr(entity, "id", None)


def is_entity(value: Any) -> bool:
    return hasattr(value, "element_id")


def is_relationship(value: Any) -> bool:
    return is_entity(value) and hasattr(value, "start_node") and hasattr(value, "type")


def flatten_entity(value: Any) -> Any:
    """Merge id (and type) with the property bag. Non-entities pass through."""
    if not is_entity(value):
        return dict(value) if isinstance(value, Mapping) else value
    record: Dict[str, Any] = dict(value.items())
    record["id"] = entity_id(value)
    if is_relationship(value):
        record["type"] = value.type
    return record


def _unquote(name: str) -> str:
    """Undo back-tick quoting applied by ``escape_name``."""
    if len(name) >= 2 and name.startswith("`") and name.endswith("`"):
        return name[1:-1].replace("``", "`")
    return name


def collect_variable(row: Mapping[str, Any], variable: str) -> Optional[Dict[str, Any]]:
    """Record for ``variable`` from a row, whole entity or projected columns."""
    if variable in row:
        return flatten_entity(row[variable])

    prefix = f"{variable}."
    projected = {
        _unquote(key[len(prefix):]): value
        for key, value in row.items()
        if key.startswith(prefix)
    }
    return projected or None


def parse_relation_row(row: Mapping[str, Any], populated: bool = False) -> Dict[str, Any]:
    """Relation record for one row.

    When ``populated``, the endpoint records are stored under ``start`` and
    ``end`` and take precedence over relation properties of the same name.
    """
    record = collect_variable(row, "r") or {}
    if populated:
        record["start"] = collect_variable(row, "n1")
        record["end"] = collect_variable(row, "n2")
    return record


def parse_deleted_relation_row(row: Mapping[str, Any]) -> Dict[str, Any]:
    """Row shaped ``id, type, properties`` as returned by delete statements."""
    record = dict(row.get("properties") or {})
    record["id"] = row.get("id")
    record["type"] = row.get("type")
    return record
