"""Neo4j connection and session management."""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import Any, AsyncIterator, Dict, List, Optional

from neo4j import AsyncDriver, AsyncGraphDatabase, AsyncSession

from ..config import Config

logger = logging.getLogger(__name__)


class Neo4jClient:
    """Async Neo4j database client shared by the query facades.

    The driver owns connection pooling; this class only manages the
    driver lifecycle and runs single statements.
    """

    def __init__(self, config: Optional[Config] = None) -> None:
        """Initialize Neo4j client with configuration."""
        self.config = config or Config()
        self._driver: Optional[AsyncDriver] = None

    @property
    def connected(self) -> bool:
        return self._driver is not None

    async def connect(self) -> None:
        """Establish connection to Neo4j database."""
        if self._driver is not None:
            return

        if not self.config.neo4j_password:
            logger.error("NEO4J_PASSWORD not set in environment variables or .env file")
            raise ValueError(
                "NEO4J_PASSWORD must be set in environment variables or .env file"
            )

        self._driver = AsyncGraphDatabase.driver(
            str(self.config.neo4j_uri),
            auth=(self.config.neo4j_username, self.config.neo4j_password),
            max_connection_lifetime=self.config.neo4j_max_connection_lifetime,
            max_connection_pool_size=self.config.neo4j_max_connection_pool_size,
        )

        # Driver creation is lazy and doesn't actually connect.
        try:
            await self._driver.verify_connectivity()
        except Exception as e:
            logger.error(f"Failed to connect to Neo4j: {e}")
            await self._driver.close()
            self._driver = None
            raise ConnectionError(
                f"Cannot connect to Neo4j database at {self.config.neo4j_uri}. "
                "Please ensure Neo4j is running and accessible."
            ) from e

        logger.info("Connected to Neo4j at %s", self.config.neo4j_uri)

    async def close(self) -> None:
        """Close the Neo4j driver connection."""
        if self._driver is not None:
            await self._driver.close()
            self._driver = None
            logger.info("Neo4j driver closed")

    @asynccontextmanager
    async def session(self, **kwargs) -> AsyncIterator[AsyncSession]:
        """Async context manager for a Neo4j session."""
        if self._driver is None:
            await self.connect()

        assert self._driver is not None  # for type checkers
        session = self._driver.session(database=self.config.neo4j_database, **kwargs)
        try:
            yield session
        finally:
            await session.close()

    async def run(
        self, query: str, params: Optional[Dict[str, Any]] = None
    ) -> List[Dict[str, Any]]:
        """Run one statement and return its rows.

        Rows keep the driver's graph values (Node, Relationship) instead of
        ``Record.data()`` dicts, so internal ids are still available to the
        record parser.
        """
        logger.debug("Executing Cypher query: %s with params: %s", query, params)
        async with self.session() as session:
            result = await session.run(query, params or {})
            return [dict(record.items()) async for record in result]

    async def verify_connectivity(self) -> bool:
        """Verify connection to Neo4j database."""
        try:
            if self._driver is None:
                await self.connect()
            assert self._driver is not None
            await self._driver.verify_connectivity()
            return True
        except Exception as e:
            logger.error("Neo4j connectivity check failed: %s", e, exc_info=True)
            return False

    async def __aenter__(self) -> "Neo4jClient":
        await self.connect()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()
