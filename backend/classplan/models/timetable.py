from __future__ import annotations

from datetime import datetime
from enum import Enum

from sqlalchemy import Boolean, DateTime, Enum as SAEnum, ForeignKey, Integer, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from classplan.db.base import Base


class TimetableStatus(str, Enum):
    draft = "draft"
    published = "published"


class Timetable(Base):
    __tablename__ = "timetables"

    id: Mapped[str] = mapped_column(String(36), primary_key=True)
    name: Mapped[str] = mapped_column(String(200), nullable=False)
    semester: Mapped[str] = mapped_column(String(20), index=True, nullable=False)
    status: Mapped[TimetableStatus] = mapped_column(
        SAEnum(TimetableStatus, name="timetable_status"),
        nullable=False,
        default=TimetableStatus.draft,
    )
    owner_id: Mapped[str | None] = mapped_column(String(36), nullable=True)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)

    time_slots: Mapped[list[TimeSlot]] = relationship(
        back_populates="timetable",
        cascade="all, delete-orphan",
        order_by="TimeSlot.position",
    )


class TimeSlot(Base):
    __tablename__ = "time_slots"

    id: Mapped[str] = mapped_column(String(36), primary_key=True)
    timetable_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("timetables.id", ondelete="CASCADE"), index=True, nullable=False
    )
    position: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    day: Mapped[str] = mapped_column(String(20), nullable=False)
    start_time: Mapped[str] = mapped_column(String(5), nullable=False)
    end_time: Mapped[str] = mapped_column(String(5), nullable=False)
    subject_id: Mapped[str | None] = mapped_column(String(36), nullable=True)
    faculty_id: Mapped[str | None] = mapped_column(String(36), nullable=True)
    classroom_id: Mapped[str | None] = mapped_column(String(36), nullable=True)
    batch_id: Mapped[str | None] = mapped_column(String(36), nullable=True)
    is_break: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    break_name: Mapped[str | None] = mapped_column(String(100), nullable=True)

    timetable: Mapped[Timetable] = relationship(back_populates="time_slots")
