from __future__ import annotations

import logging
import uuid

from sqlalchemy import delete, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from classplan.core.exceptions import PersistenceFailureError, ResourceNotFoundError
from classplan.models.timetable import TimeSlot, Timetable, TimetableStatus
from classplan.services.assembler import GenerationResult

logger = logging.getLogger(__name__)


def _retract_header(db: Session, timetable_id: str) -> None:
    db.execute(delete(TimeSlot).where(TimeSlot.timetable_id == timetable_id))
    db.execute(delete(Timetable).where(Timetable.id == timetable_id))
    db.commit()


def save_generated_timetable(db: Session, result: GenerationResult) -> Timetable:
    """Persist a generated timetable header and then its slots.

    The two writes are separate commits. If the slot write fails the header is
    deleted again so no empty timetable survives, and
    :class:`PersistenceFailureError` is raised.
    """
    assembled = result.timetable
    header = Timetable(
        id=assembled.id,
        name=assembled.name,
        semester=assembled.semester,
        status=assembled.status,
        owner_id=assembled.owner_id,
        created_at=assembled.created_at,
    )
    try:
        db.add(header)
        db.commit()
    except SQLAlchemyError as exc:
        db.rollback()
        logger.exception("Failed to write timetable header %s", assembled.id)
        raise PersistenceFailureError(assembled.id, "timetable header could not be written") from exc

    try:
        db.add_all(
            TimeSlot(
                id=str(uuid.uuid4()),
                timetable_id=assembled.id,
                position=position,
                day=slot.day,
                start_time=slot.start_time,
                end_time=slot.end_time,
                subject_id=slot.subject_id,
                faculty_id=slot.faculty_id,
                classroom_id=slot.classroom_id,
                batch_id=slot.batch_id,
                is_break=slot.is_break,
                break_name=slot.break_name,
            )
            for position, slot in enumerate(assembled.time_slots)
        )
        db.commit()
    except SQLAlchemyError as exc:
        db.rollback()
        logger.exception("Failed to write time slots for timetable %s; retracting header", assembled.id)
        _retract_header(db, assembled.id)
        raise PersistenceFailureError(assembled.id, "time slots could not be written") from exc

    db.refresh(header)
    return header


def list_timetables(db: Session, semester: str | None = None) -> list[Timetable]:
    query = select(Timetable).order_by(Timetable.created_at.desc(), Timetable.id.desc())
    if semester is not None:
        query = query.where(Timetable.semester == str(semester))
    return list(db.execute(query).scalars())


def latest_timetable(db: Session, semester: str) -> Timetable:
    timetables = list_timetables(db, semester)
    if not timetables:
        raise ResourceNotFoundError("Timetable for semester", str(semester))
    return timetables[0]


def get_timetable(db: Session, timetable_id: str) -> Timetable:
    timetable = db.get(Timetable, timetable_id)
    if timetable is None:
        raise ResourceNotFoundError("Timetable", timetable_id)
    return timetable


def publish_timetable(db: Session, timetable_id: str) -> Timetable:
    timetable = get_timetable(db, timetable_id)
    if timetable.status != TimetableStatus.published:
        timetable.status = TimetableStatus.published
        db.commit()
        db.refresh(timetable)
    return timetable


def delete_timetable(db: Session, timetable_id: str) -> None:
    timetable = get_timetable(db, timetable_id)
    try:
        db.delete(timetable)
        db.commit()
    except SQLAlchemyError:
        db.rollback()
        raise
