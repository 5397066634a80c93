"""
Typed outcome of a relationship resolution.

A relation either resolves completely (OK), resolves with some entries
omitted because they reference records that do not exist (PARTIAL), or
fails hard (FAILED). Only craftable resolution can fail hard.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Generic, List, Optional, Tuple, TypeVar

from ..errors import ResolutionError

T = TypeVar("T")


class RelationStatus(str, Enum):
    OK = "ok"
    PARTIAL = "partial"
    FAILED = "failed"


@dataclass(frozen=True)
class RelationResult(Generic[T]):
    """Rows of a relation plus how they were obtained.

    Attributes:
        status: Overall outcome
        rows: Resolved rows in source order (empty when failed)
        omitted: Number of entries dropped for dangling references
        error: The hard failure, when status is FAILED
    """

    status: RelationStatus
    rows: Tuple[T, ...] = ()
    omitted: int = 0
    error: Optional[ResolutionError] = None

    @property
    def ok(self) -> bool:
        return self.status is not RelationStatus.FAILED

    def unwrap(self) -> List[T]:
        """Return the rows as a list.

        Raises:
            ResolutionError: If the relation failed
        """
        if self.error is not None:
            raise self.error
        return list(self.rows)

    def __len__(self) -> int:
        return len(self.rows)


class RelationBuilder(Generic[T]):
    """Accumulates rows and omissions while resolving one relation."""

    def __init__(self, relation: str, entity_id: object):
        self.relation = relation
        self.entity_id = entity_id
        self.rows: List[T] = []
        self.omitted = 0
        self.logger = logging.getLogger(f"{__name__}.{self.__class__.__name__}")

    def add(self, row: T) -> None:
        self.rows.append(row)

    def omit(self, reference: str) -> None:
        """Record an entry skipped because its reference does not resolve."""
        self.omitted += 1
        self.logger.debug(f"{self.relation}({self.entity_id}): omitted dangling {reference}")

    def result(self) -> RelationResult[T]:
        status = RelationStatus.PARTIAL if self.omitted else RelationStatus.OK
        return RelationResult(status=status, rows=tuple(self.rows), omitted=self.omitted)

    def fail(self, error: ResolutionError) -> RelationResult[T]:
        self.logger.warning(f"{self.relation}({self.entity_id}) failed: {error}")
        return RelationResult(status=RelationStatus.FAILED, omitted=self.omitted, error=error)
