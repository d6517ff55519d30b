"""
Configuration management for schemadoc
"""

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Logging
    debug: bool = False
    log_level: str = "INFO"

    # Linting
    rules_config_path: str | None = None
    default_format: str = "text"  # 'text', 'json'
    fail_on: str = "error"  # 'error', 'warning', 'info'

    # Markdown fence languages treated as GraphQL
    graphql_languages: list[str] = ["graphql", "gql", "graphqls"]

    # Location of the bundled tutorial and example configs
    docs_path: str = "docs"

    class Config:
        env_file = ".env"
        env_prefix = "SCHEMADOC_"
        case_sensitive = False


# Global settings instance
settings = Settings()
