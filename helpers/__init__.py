"""Helper utilities for the circular text entry engine.

This package contains utility classes that are used across the engine to
provide common functionality.
"""

from .debug_util import DebugUtil  # noqa: F401
