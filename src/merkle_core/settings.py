from __future__ import annotations
from pydantic_settings import BaseSettings
from pydantic import Field


class Settings(BaseSettings):
    log_level: str = Field(default="INFO", alias="MERKLE_LOG_LEVEL")

    # Longest index-less proof checked against every leaf position it can describe
    verify_max_search_depth: int = Field(
        default=16, alias="MERKLE_VERIFY_MAX_SEARCH_DEPTH"
    )

    # Hex characters shown per node when rendering a tree
    render_hash_chars: int = Field(default=8, alias="MERKLE_RENDER_HASH_CHARS")

    class Config:
        env_file = ".env"
        case_sensitive = False


settings = Settings()  # load at import
