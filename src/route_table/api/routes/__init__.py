"""Route group exports."""

from . import health, table

__all__ = ["health", "table"]
