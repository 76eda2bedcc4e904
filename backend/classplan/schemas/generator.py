from pydantic import BaseModel, Field, field_validator

from classplan.schemas.timetable import TimetableOut


class GenerateTimetableRequest(BaseModel):
    semester: str = Field(min_length=1, max_length=20)
    owner_id: str | None = Field(default=None, min_length=1, max_length=36)
    random_seed: int | None = Field(default=None, ge=0, le=2_000_000_000)

    @field_validator("semester", mode="before")
    @classmethod
    def coerce_semester(cls, value: int | str) -> str:
        return str(value).strip()


class SchedulingWarning(BaseModel):
    subject_id: str
    subject_name: str
    subject_code: str
    reason: str
    message: str


class GenerateTimetableResponse(BaseModel):
    timetable: TimetableOut
    warnings: list[SchedulingWarning] = Field(default_factory=list)
