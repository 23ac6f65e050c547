"""In-memory relation store."""

from .relation_store import RelationStore

__all__ = ["RelationStore"]
