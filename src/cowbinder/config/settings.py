"""Configuration settings using Pydantic Settings.

Usage:
    from cowbinder.config import BinderSettings, get_settings

    # Load from environment variables (COWBINDER_*)
    settings = get_settings()

    # Or override with explicit values
    settings = BinderSettings(value_copy="shallow")
"""

from __future__ import annotations

import copy as cp
from collections.abc import Callable
from functools import lru_cache
from typing import Any, Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class BinderSettings(BaseSettings):  # type: ignore[misc]
    """Configuration for binder copy-on-write behavior.

    Attributes:
        value_copy: How values are duplicated when a node is cloned.
        warn_detached_writes: Warn when writing through a reference into a
            node that no binder holds anymore.

    Environment Variables:
        COWBINDER_VALUE_COPY
        COWBINDER_WARN_DETACHED_WRITES
    """

    model_config = SettingsConfigDict(
        env_prefix="COWBINDER_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    value_copy: Literal["deep", "shallow"] = Field(
        default="deep", description="deep uses copy.deepcopy, shallow uses copy.copy"
    )
    warn_detached_writes: bool = True

    def value_copier(self) -> Callable[[Any], Any]:
        """Function used to duplicate a value during a clone."""
        return cp.deepcopy if self.value_copy == "deep" else cp.copy


@lru_cache(maxsize=1)
def get_settings() -> BinderSettings:
    """Process-wide settings, read from the environment once."""
    return BinderSettings()
