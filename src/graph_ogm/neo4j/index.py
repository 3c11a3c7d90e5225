"""Index management helpers."""

import hashlib
import re
from typing import Any, Dict, List, Sequence

from .client import Neo4jClient
from .properties import escape_name

INDEX_ARGUMENTS_ERROR = "a label and at least one field name must be provided"


class IndexDB:
    """Create and drop property indexes on node labels."""

    def __init__(self, client: Neo4jClient) -> None:
        self.client = client

    @staticmethod
    def _check(label: Any, fields: Any) -> None:
        if not isinstance(label, str) or not label:
            raise ValueError(INDEX_ARGUMENTS_ERROR)
        if (
            not isinstance(fields, (list, tuple))
            or not fields
            or not all(isinstance(f, str) and f for f in fields)
        ):
            raise ValueError(INDEX_ARGUMENTS_ERROR)

    @staticmethod
    def index_name(label: str, fields: Sequence[str]) -> str:
        """Deterministic index name, so ``drop`` finds what ``create`` made.

        The readable part is lossy (``["a", "b"]`` and ``["a b"]`` both read
        ``a_b``), so a digest of the exact label and fields is appended.
        """
        readable = re.sub(r"[^A-Za-z0-9_]", "_", "_".join(["index", label, *fields]))
        digest = hashlib.sha1("\x00".join([label, *fields]).encode("utf-8")).hexdigest()[:10]
        return f"{readable}_{digest}"

    async def create(self, label: str, fields: Sequence[str]) -> List[Dict[str, Any]]:
        self._check(label, fields)
        properties = ", ".join(f"n.{escape_name(f)}" for f in fields)
        cypher = (
            f"CREATE INDEX {self.index_name(label, fields)} IF NOT EXISTS "
            f"FOR (n:{escape_name(label)}) ON ({properties})"
        )
        return await self.client.run(cypher, {})

    async def drop(self, label: str, fields: Sequence[str]) -> List[Dict[str, Any]]:
        self._check(label, fields)
        cypher = f"DROP INDEX {self.index_name(label, fields)} IF EXISTS"
        return await self.client.run(cypher, {})
