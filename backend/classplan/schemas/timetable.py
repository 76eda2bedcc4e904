from datetime import datetime

from pydantic import BaseModel, Field

from classplan.models.timetable import TimetableStatus


class TimeSlotOut(BaseModel):
    id: str
    day: str
    start_time: str
    end_time: str
    subject_id: str | None = None
    faculty_id: str | None = None
    classroom_id: str | None = None
    batch_id: str | None = None
    is_break: bool = False
    break_name: str | None = None

    model_config = {"from_attributes": True}


class TimetableSummary(BaseModel):
    id: str
    name: str
    semester: str
    status: TimetableStatus
    owner_id: str | None = None
    created_at: datetime

    model_config = {"from_attributes": True}


class TimetableOut(TimetableSummary):
    time_slots: list[TimeSlotOut] = Field(default_factory=list)
