"""Simple CLI for running graph OGM operations offline.

Usage examples (from project root):

    # Ensure src is on PYTHONPATH, then:
    PYTHONPATH=src python -m graph_ogm.cli create-node --label Person \
        --properties '{"name": "Ada"}'

    PYTHONPATH=src python -m graph_ogm.cli relate --start-id 1 --type KNOWS \
        --end-id 2 --properties '{"since": 2020}'

    PYTHONPATH=src python -m graph_ogm.cli find --start-id 1 --end-id 2 \
        --type KNOWS --where since '$gte' 2019

The CLI uses:
- .env configuration (NEO4J_URI, NEO4J_USERNAME, NEO4J_PASSWORD)
- Neo4jClient for connection
- RelationDB / NodeDB / IndexDB for the operations
"""

import argparse
import asyncio
import json
import logging
from typing import Any, Awaitable, Callable, Dict, List, Optional

from .config import Config
from .neo4j import IndexDB, Neo4jClient, NodeDB, RelationDB, Where


def _parse_value(raw: str) -> Any:
    """JSON-decode a CLI value, falling back to the raw string."""
    try:
        return json.loads(raw)
    except json.JSONDecodeError:
        return raw


def _parse_properties(raw: Optional[str]) -> Dict[str, Any]:
    if raw is None:
        return {}
    value = json.loads(raw)
    if not isinstance(value, dict):
        raise SystemExit("--properties must be a JSON object")
    return value


def _where_from_args(conditions: Optional[List[List[str]]]) -> Optional[Where]:
    """Chain every ``--where FIELD OP VALUE`` triple with AND."""
    if not conditions:
        return None
    where: Optional[Where] = None
    for field, op, raw in conditions:
        condition = Where(field, {op: _parse_value(raw)})
        where = condition if where is None else where.and_(condition)
    return where


def _run(operation: Callable[[Neo4jClient], Awaitable[Any]]) -> Any:
    """Open a client, run one operation and close the client again."""

    async def _main() -> Any:
        async with Neo4jClient(config=Config()) as client:
            return await operation(client)

    return asyncio.run(_main())


def _print(serializable: Any) -> None:
    print(json.dumps(serializable, indent=2, sort_keys=True, default=str))


def _print_records(records: List[Dict[str, Any]]) -> None:
    _print({"count": len(records), "results": records})


def _cmd_relate(args: argparse.Namespace) -> None:
    """Create a relation between two nodes."""
    properties = _parse_properties(args.properties)
    record = _run(
        lambda client: RelationDB(client).relate(
            args.start_id, args.type, args.end_id, properties
        )
    )
    _print({"result": record})


def _cmd_find(args: argparse.Namespace) -> None:
    """Find relations between two nodes."""
    where = _where_from_args(args.where)
    records = _run(
        lambda client: RelationDB(client).find(args.start_id, args.end_id, args.type, where)
    )
    _print_records(records)


def _cmd_find_populated(args: argparse.Namespace) -> None:
    """Find relations between two nodes, with both endpoint nodes."""
    where = _where_from_args(args.where)
    records = _run(
        lambda client: RelationDB(client).find_populated(
            args.start_id, args.end_id, args.type, where
        )
    )
    _print_records(records)


def _cmd_count(args: argparse.Namespace) -> None:
    where = _where_from_args(args.where)
    count = _run(
        lambda client: RelationDB(client).count(args.start_id, args.end_id, args.type, where)
    )
    _print({"count": count})


def _cmd_exists(args: argparse.Namespace) -> None:
    where = _where_from_args(args.where)
    exists = _run(
        lambda client: RelationDB(client).exists(args.start_id, args.end_id, args.type, where)
    )
    _print({"exists": exists})


def _cmd_update(args: argparse.Namespace) -> None:
    """Merge properties into one relation."""
    properties = _parse_properties(args.properties)
    record = _run(lambda client: RelationDB(client).update(args.relation_id, properties))
    _print({"result": record})


def _cmd_update_many(args: argparse.Namespace) -> None:
    """Merge properties into every matching relation."""
    properties = _parse_properties(args.properties)
    where = _where_from_args(args.where)
    records = _run(
        lambda client: RelationDB(client).update_many(
            properties, args.start_id, args.end_id, args.type, where
        )
    )
    _print_records(records)


def _cmd_delete(args: argparse.Namespace) -> None:
    record = _run(lambda client: RelationDB(client).delete_relation(args.relation_id))
    _print({"result": record})


def _cmd_delete_many(args: argparse.Namespace) -> None:
    where = _where_from_args(args.where)
    records = _run(
        lambda client: RelationDB(client).delete_many(
            args.start_id, args.end_id, args.type, where
        )
    )
    _print_records(records)


def _cmd_create_node(args: argparse.Namespace) -> None:
    properties = _parse_properties(args.properties)
    record = _run(lambda client: NodeDB(client).create(properties, args.label))
    _print({"result": record})


def _cmd_create_index(args: argparse.Namespace) -> None:
    _run(lambda client: IndexDB(client).create(args.label, args.fields))
    _print({"index": IndexDB.index_name(args.label, args.fields), "created": True})


def _cmd_drop_index(args: argparse.Namespace) -> None:
    _run(lambda client: IndexDB(client).drop(args.label, args.fields))
    _print({"index": IndexDB.index_name(args.label, args.fields), "dropped": True})


def _add_endpoint_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--start-id", type=int, required=True, help="Start node internal id")
    parser.add_argument("--end-id", type=int, required=True, help="End node internal id")
    parser.add_argument("--type", type=str, default=None, help="Relation type")
    parser.add_argument(
        "--where",
        nargs=3,
        action="append",
        metavar=("FIELD", "OP", "VALUE"),
        help="Relation property filter, e.g. --where since '$gte' 2020 (repeatable, AND-ed)",
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="graph-ogm",
        description="Run graph OGM relation and node operations against Neo4j",
    )
    subparsers = parser.add_subparsers(dest="command")

    # relate command
    p_relate = subparsers.add_parser("relate", help="Create a relation between two nodes")
    p_relate.add_argument("--start-id", type=int, required=True, help="Start node internal id")
    p_relate.add_argument("--type", type=str, required=True, help="Relation type")
    p_relate.add_argument("--end-id", type=int, required=True, help="End node internal id")
    p_relate.add_argument("--properties", type=str, help="Relation properties as JSON")
    p_relate.set_defaults(func=_cmd_relate)

    p_find = subparsers.add_parser("find", help="Find relations between two nodes")
    _add_endpoint_arguments(p_find)
    p_find.set_defaults(func=_cmd_find)

    p_find_populated = subparsers.add_parser(
        "find-populated",
        help="Find relations between two nodes, including both endpoint nodes",
    )
    _add_endpoint_arguments(p_find_populated)
    p_find_populated.set_defaults(func=_cmd_find_populated)

    p_count = subparsers.add_parser("count", help="Count relations between two nodes")
    _add_endpoint_arguments(p_count)
    p_count.set_defaults(func=_cmd_count)

    p_exists = subparsers.add_parser("exists", help="Check whether a relation exists")
    _add_endpoint_arguments(p_exists)
    p_exists.set_defaults(func=_cmd_exists)

    p_update = subparsers.add_parser("update", help="Merge properties into one relation")
    p_update.add_argument("--relation-id", type=int, required=True, help="Relation internal id")
    p_update.add_argument("--properties", type=str, required=True, help="Properties as JSON")
    p_update.set_defaults(func=_cmd_update)

    p_update_many = subparsers.add_parser(
        "update-many", help="Merge properties into every matching relation"
    )
    _add_endpoint_arguments(p_update_many)
    p_update_many.add_argument("--properties", type=str, required=True, help="Properties as JSON")
    p_update_many.set_defaults(func=_cmd_update_many)

    p_delete = subparsers.add_parser("delete", help="Delete one relation by id")
    p_delete.add_argument("--relation-id", type=int, required=True, help="Relation internal id")
    p_delete.set_defaults(func=_cmd_delete)

    p_delete_many = subparsers.add_parser(
        "delete-many", help="Delete every matching relation between two nodes"
    )
    _add_endpoint_arguments(p_delete_many)
    p_delete_many.set_defaults(func=_cmd_delete_many)

    # node and index commands
    p_create_node = subparsers.add_parser("create-node", help="Create a node")
    p_create_node.add_argument("--label", type=str, default=None, help="Node label")
    p_create_node.add_argument("--properties", type=str, help="Node properties as JSON")
    p_create_node.set_defaults(func=_cmd_create_node)

    for name, func, help_text in (
        ("create-index", _cmd_create_index, "Create an index on a label"),
        ("drop-index", _cmd_drop_index, "Drop an index created by create-index"),
    ):
        p_index = subparsers.add_parser(name, help=help_text)
        p_index.add_argument("--label", type=str, required=True, help="Node label")
        p_index.add_argument(
            "--fields", type=str, nargs="+", required=True, help="Indexed property names"
        )
        p_index.set_defaults(func=func)

    return parser


def main() -> None:
    parser = build_parser()
    args = parser.parse_args()

    if not hasattr(args, "func"):
        parser.print_help()
        return

    logging.basicConfig(level=Config().log_level.upper())
    args.func(args)


if __name__ == "__main__":
    main()
