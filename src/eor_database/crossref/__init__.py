"""
Cross-reference resolution between the EOR collections.

Answers questions such as where an item drops, who sells it, which quest
rewards it and where it can be gathered, by joining records of the
dataset store. Dangling references are omitted; a recipe naming an
unknown shop is the one hard failure.
"""

from .resolver import CrossReferenceResolver, RELATIONS
from .results import RelationResult, RelationStatus

__all__ = [
    "CrossReferenceResolver",
    "RELATIONS",
    "RelationResult",
    "RelationStatus",
]
