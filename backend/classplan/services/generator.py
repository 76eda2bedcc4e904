from __future__ import annotations

import logging
import random
from datetime import datetime
from time import perf_counter

from classplan.core.config import Settings, get_settings
from classplan.core.exceptions import BatchHasNoSubjectsError, InputMissingError, NoTargetBatchError
from classplan.services.allocator import Shuffle, SlotAllocator
from classplan.services.assembler import GenerationResult, assemble_timetable
from classplan.services.audit import audit_timetable
from classplan.services.breaks import inject_breaks
from classplan.services.catalog import Catalog
from classplan.services.ranker import rank_subjects

logger = logging.getLogger(__name__)


def generate_timetable(
    catalog: Catalog,
    semester: int | str,
    *,
    owner_id: str | None = None,
    rng: random.Random | None = None,
    shuffle: Shuffle | None = None,
    settings: Settings | None = None,
    now: datetime | None = None,
) -> GenerationResult:
    """Build a draft weekly timetable for the batch of ``semester``.

    Raises a :class:`~classplan.core.exceptions.GenerationError` subclass when
    the catalog cannot produce anything. Subjects that could not be placed are
    returned as warnings on the result.
    """
    settings = settings or get_settings()

    missing = catalog.missing_rosters()
    if missing:
        raise InputMissingError(missing)

    batch = catalog.find_batch(semester)
    if batch is None:
        raise NoTargetBatchError(str(semester))

    subjects = catalog.enrolled_subjects(batch)
    if not subjects:
        raise BatchHasNoSubjectsError(batch.id, batch.name)

    started = perf_counter()
    if rng is None:
        rng = random.Random(settings.random_seed)

    ranking = rank_subjects(
        subjects,
        catalog.faculty,
        catalog.classrooms,
        batch.strength,
        penalty=settings.unschedulable_penalty,
    )
    allocator = SlotAllocator(
        days=settings.teaching_days,
        time_windows=settings.time_windows,
        periods_per_day=settings.periods_per_day,
        rng=rng,
        shuffle=shuffle,
    )
    allocation = allocator.allocate(ranking, batch, catalog.faculty, catalog.classrooms)
    break_slots = inject_breaks(catalog.breaks_owned_by(owner_id), batch.id)

    result = assemble_timetable(
        semester=semester,
        batch=batch,
        allocation=allocation,
        break_slots=break_slots,
        ranking=ranking,
        owner_id=owner_id,
        now=now,
    )

    violations = audit_timetable(result.timetable, catalog)
    if violations:
        logger.error("Generated timetable %s failed audit: %s", result.timetable.id, "; ".join(violations))

    logger.info(
        "Generated timetable for batch %s (semester %s): %s of %s subjects placed, %s break slots, %.1f ms",
        batch.name,
        semester,
        len(allocation.slots),
        len(subjects),
        len(break_slots),
        (perf_counter() - started) * 1000,
    )
    return result
