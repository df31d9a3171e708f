"""Core package initializer for todostore.

Downstream code imports from the submodules directly, e.g.:
    from todostore.core.service import TodoService
    from todostore.core.settings import settings, get_logger
"""

from __future__ import annotations

__all__ = ["__doc__"]
