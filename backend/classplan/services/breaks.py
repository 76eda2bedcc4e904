from __future__ import annotations

from collections.abc import Iterable

from classplan.services.allocator import PlannedSlot
from classplan.services.catalog import BreakRecord


def inject_breaks(breaks: Iterable[BreakRecord], batch_id: str) -> list[PlannedSlot]:
    """Emit one break slot per (break, weekday) pair.

    Break slots bypass the allocator's exclusion sets and may overlap a
    teaching slot; the only assignment they carry is the batch placeholder.
    """
    return [
        PlannedSlot(
            day=day,
            start_time=item.start_time,
            end_time=item.end_time,
            batch_id=batch_id,
            is_break=True,
            break_name=item.name,
        )
        for item in breaks
        for day in item.days
    ]
