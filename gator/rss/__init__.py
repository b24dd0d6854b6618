# -*- coding: utf-8 -*-
"""
RSS module entry

Public API:
- `rss_config`
- `FeedScheduler`
- `run_scheduler`
- `fetch_feed`
- `parse_feed`
- `reconcile_entries`
- `refresh_feed`

Purpose:
- Expose the feed pipeline and scheduler. Submodules load on first access so
  that importing the models does not pull in the service layer.
"""

from typing import Any

from .config import rss_config

__all__ = [
    "rss_config",
    "FeedScheduler",
    "run_scheduler",
    "fetch_feed",
    "parse_feed",
    "reconcile_entries",
    "refresh_feed",
]


def __getattr__(name: str) -> Any:
    """Load submodules lazily to avoid import cycles."""
    if name in {"FeedScheduler", "run_scheduler"}:
        from . import scheduler as scheduler_module

        value = getattr(scheduler_module, name)
    elif name in {"fetch_feed", "parse_feed", "reconcile_entries", "refresh_feed"}:
        from . import service as service_module

        value = getattr(service_module, name)
    else:
        raise AttributeError(f"module 'gator.rss' has no attribute '{name}'")
    return value


def __dir__() -> list[str]:
    return sorted(__all__)
