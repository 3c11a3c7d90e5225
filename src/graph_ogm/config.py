"""Settings for the Neo4j connection, the MCP server and the CLI.

Values come from the process environment first, then from a ``.env`` file
in the working directory. A minimal ``.env``:

    NEO4J_URI=bolt://localhost:7687
    NEO4J_USERNAME=neo4j
    NEO4J_PASSWORD=secret
"""

from pydantic import AnyUrl, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Config(BaseSettings):
    """Graph OGM settings.

    Every field is read from the upper-case variable named by its alias;
    field names themselves are not accepted as keys.
    """

    neo4j_uri: AnyUrl = Field(
        ...,
        alias="NEO4J_URI",
        description="Bolt or neo4j:// URI of the graph server",
    )
    neo4j_username: str = Field(..., alias="NEO4J_USERNAME", description="Login user")
    neo4j_password: str = Field(..., alias="NEO4J_PASSWORD", description="Login password")
    neo4j_database: str = Field(
        "neo4j",
        alias="NEO4J_DATABASE",
        description="Database every session runs against",
    )
    neo4j_max_connection_lifetime: int = Field(
        3600,
        alias="NEO4J_MAX_CONNECTION_LIFETIME",
        description="Seconds before a pooled connection is recycled",
    )
    neo4j_max_connection_pool_size: int = Field(
        100,
        alias="NEO4J_MAX_CONNECTION_POOL_SIZE",
        description="Upper bound on pooled driver connections",
    )

    log_level: str = Field("INFO", alias="LOG_LEVEL", description="Root logging level")
    mcp_host: str = Field("0.0.0.0", alias="MCP_HOST", description="MCP bind address")
    mcp_port: int = Field(8000, alias="MCP_PORT", description="MCP listen port")

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
        populate_by_name=False,
    )
