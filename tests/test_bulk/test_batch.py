"""Tests for the per-id batch engine."""

import pytest

from app.bulk.batch import OutcomeStatus, process_batch
from app.exceptions import NotFoundError


class FakeRows:
    def __init__(self, ids):
        self.ids = set(ids)
        self.deleted = []

    async def delete(self, item_id: int) -> int:
        if item_id == 13:
            raise RuntimeError("disk I/O error")
        if item_id not in self.ids:
            raise NotFoundError("Row", item_id)
        self.ids.remove(item_id)
        self.deleted.append(item_id)
        return item_id


@pytest.mark.asyncio
async def test_missing_ids_are_skipped_not_failed():
    rows = FakeRows([1, 2])

    result = await process_batch([1, 2, 999], rows.delete)

    assert result.success == [1, 2]
    assert result.failed == []
    assert result.total == 3
    assert [o.status for o in result.outcomes] == [
        OutcomeStatus.succeeded,
        OutcomeStatus.succeeded,
        OutcomeStatus.skipped,
    ]
    assert [o.id for o in result.skipped] == [999]


@pytest.mark.asyncio
async def test_failure_does_not_stop_or_undo_batch():
    rows = FakeRows([1, 13, 2])

    result = await process_batch([1, 13, 2], rows.delete)

    assert rows.deleted == [1, 2]
    assert len(result.failed) == 1
    assert result.failed[0].id == 13
    assert result.failed[0].error == "disk I/O error"
    assert result.outcomes[1].status == OutcomeStatus.failed
    assert result.outcomes[1].reason == "disk I/O error"


@pytest.mark.asyncio
async def test_success_plus_failed_never_exceeds_total():
    rows = FakeRows([1])

    result = await process_batch([1, 13, 5, 6], rows.delete)

    assert len(result.success) + len(result.failed) <= result.total
    assert len(result.outcomes) == result.total


@pytest.mark.asyncio
async def test_rejected_ids_are_tagged_without_counting():
    rows = FakeRows([1])

    result = await process_batch([1], rows.delete)
    result.record_rejected(["abc", None])

    assert result.total == 1
    assert [(o.id, o.status) for o in result.outcomes[1:]] == [
        (None, OutcomeStatus.skipped),
        (None, OutcomeStatus.skipped),
    ]
    assert result.outcomes[1].reason == "invalid id 'abc'"


@pytest.mark.asyncio
async def test_empty_batch():
    rows = FakeRows([])

    result = await process_batch([], rows.delete)

    assert result.total == 0
    assert result.success == []
    assert result.outcomes == []
