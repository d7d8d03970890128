"""Infrastructure layer implementations."""

from retail_pos.infrastructure import storage

__all__ = ["storage"]
