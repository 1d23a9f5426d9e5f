from collections.abc import Awaitable, Callable, Sequence
from dataclasses import dataclass, field
from enum import StrEnum
from typing import Generic, TypeVar

import structlog

from app.exceptions import NotFoundError

logger = structlog.get_logger()

T = TypeVar("T")


class OutcomeStatus(StrEnum):
    succeeded = "succeeded"
    skipped = "skipped"
    failed = "failed"


@dataclass(frozen=True)
class ItemOutcome:
    id: int | None
    status: OutcomeStatus
    reason: str | None = None


@dataclass(frozen=True)
class BatchFailure:
    id: int
    error: str


@dataclass
class BatchResult(Generic[T]):
    success: list[T] = field(default_factory=list)
    failed: list[BatchFailure] = field(default_factory=list)
    outcomes: list[ItemOutcome] = field(default_factory=list)
    total: int = 0

    @property
    def skipped(self) -> list[ItemOutcome]:
        return [o for o in self.outcomes if o.status == OutcomeStatus.skipped]

    def record_rejected(self, raw_ids: Sequence[object]) -> None:
        """Tag raw ids that failed id validation; they never count toward total."""
        for raw in raw_ids:
            self.outcomes.append(
                ItemOutcome(id=None, status=OutcomeStatus.skipped, reason=f"invalid id {raw!r}")
            )


async def process_batch(
    ids: Sequence[int],
    operation: Callable[[int], Awaitable[T]],
    *,
    label: str = "batch",
) -> BatchResult[T]:
    """Apply an operation to each id in order, isolating per-id failures.

    A NotFoundError marks the id as skipped; any other exception records a
    failure. Earlier successes are never undone by later failures.
    """
    result: BatchResult[T] = BatchResult(total=len(ids))

    for item_id in ids:
        try:
            item = await operation(item_id)
        except NotFoundError as exc:
            result.outcomes.append(
                ItemOutcome(id=item_id, status=OutcomeStatus.skipped, reason=exc.message)
            )
            logger.debug("batch_item_skipped", label=label, id=item_id)
            continue
        except Exception as exc:
            message = str(exc) or exc.__class__.__name__
            result.failed.append(BatchFailure(id=item_id, error=message))
            result.outcomes.append(
                ItemOutcome(id=item_id, status=OutcomeStatus.failed, reason=message)
            )
            logger.warning("batch_item_failed", label=label, id=item_id, error=message)
            continue

        result.success.append(item)
        result.outcomes.append(ItemOutcome(id=item_id, status=OutcomeStatus.succeeded))

    logger.info(
        "batch_completed",
        label=label,
        total=result.total,
        succeeded=len(result.success),
        failed=len(result.failed),
        skipped=len(result.skipped),
    )
    return result
