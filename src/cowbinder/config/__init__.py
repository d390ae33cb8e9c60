"""Configuration module using Pydantic Settings.

Usage:
    from cowbinder.config import BinderSettings

    settings = BinderSettings(value_copy="shallow")
    binder = Binder(settings=settings)
"""

from cowbinder.config.settings import BinderSettings, get_settings

__all__ = [
    "BinderSettings",
    "get_settings",
]
