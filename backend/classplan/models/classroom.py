import uuid
from datetime import datetime
from enum import Enum

from sqlalchemy import DateTime, Enum as SAEnum, Integer, JSON, String
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.sql import func

from classplan.db.base import Base


class ClassroomType(str, Enum):
    lecture = "lecture"
    lab = "lab"
    seminar = "seminar"


class Classroom(Base):
    __tablename__ = "classrooms"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    name: Mapped[str] = mapped_column(String(100), unique=True, index=True, nullable=False)
    capacity: Mapped[int] = mapped_column(Integer, nullable=False, default=30)
    type: Mapped[ClassroomType] = mapped_column(SAEnum(ClassroomType, name="classroom_type"), nullable=False)
    equipment: Mapped[list[str]] = mapped_column(JSON, nullable=False, default=list)
    building: Mapped[str] = mapped_column(String(200), nullable=False)
    floor: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now())
