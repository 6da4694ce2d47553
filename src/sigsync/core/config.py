"""Global configuration for sigsync.

This module provides centralized configuration management with support for
environment variables and sensible defaults.
"""

from __future__ import annotations

from enum import Enum
from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings


class MemberMatching(str, Enum):
    """How an implementing method is paired with an interface member."""

    # Same name and identical parameter types first, then first same-named member
    MAPPING = "mapping"
    # First same-named member only
    NAME = "name"


class SigsyncConfig(BaseSettings):
    """sigsync configuration settings.

    Values can be overridden via environment variables with SIGSYNC_ prefix.
    Example: SIGSYNC_MAX_WORKERS=8 overrides max_workers.
    """

    # ID generation
    id_length: int = Field(
        default=16,
        ge=8,
        le=64,
        description="Length of generated document IDs (hex characters)",
    )

    # Project loading
    source_extension: str = Field(
        default="java",
        description="Source file extension (without the leading dot)",
    )
    exclude_dirs: list[str] = Field(
        default_factory=lambda: ["build", "target", "out", ".git", ".gradle"],
        description="Directory names skipped while loading a project",
    )

    # Analysis
    nullable_annotations: list[str] = Field(
        default_factory=lambda: ["Nullable", "CheckForNull", "NullableDecl"],
        description="Simple names of annotations that mark a parameter nullable",
    )
    member_matching: MemberMatching = Field(
        default=MemberMatching.MAPPING,
        description="Interface member lookup policy",
    )
    max_workers: int = Field(
        default=4,
        ge=1,
        le=64,
        description="Worker threads used by project-wide detection",
    )

    # Repair
    max_fix_passes: int = Field(
        default=50,
        ge=1,
        le=1000,
        description="Upper bound on detect/repair iterations in one fix run",
    )

    model_config = {
        "env_prefix": "SIGSYNC_",
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "extra": "ignore",
    }


@lru_cache
def get_config() -> SigsyncConfig:
    """Get cached configuration instance.

    Returns:
        SigsyncConfig singleton instance.
    """
    return SigsyncConfig()


def reload_config() -> SigsyncConfig:
    """Reload configuration (clears cache).

    Returns:
        Fresh SigsyncConfig instance.
    """
    get_config.cache_clear()
    return get_config()
