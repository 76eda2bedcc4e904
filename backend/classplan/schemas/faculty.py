from pydantic import BaseModel, EmailStr, Field, field_validator

from classplan.schemas.common import TIME_PATTERN, dedupe_ids, validate_day_name


class FacultyBase(BaseModel):
    name: str = Field(min_length=1, max_length=200)
    email: EmailStr
    department: str = Field(min_length=1, max_length=200)
    subjects: list[str] = Field(default_factory=list, max_length=200)
    availability: dict[str, list[str]] = Field(default_factory=dict)
    max_hours_per_week: int = Field(default=20, ge=1, le=200)

    @field_validator("subjects")
    @classmethod
    def normalize_subjects(cls, value: list[str]) -> list[str]:
        return dedupe_ids(value)

    @field_validator("availability")
    @classmethod
    def validate_availability(cls, value: dict[str, list[str]]) -> dict[str, list[str]]:
        normalized: dict[str, list[str]] = {}
        for day, times in value.items():
            day_name = validate_day_name(day)
            for item in times:
                if not TIME_PATTERN.match(item):
                    raise ValueError("Availability times must be in HH:MM 24-hour format")
            normalized[day_name] = sorted(set(times))
        return normalized


class FacultyCreate(FacultyBase):
    pass


class FacultyOut(FacultyBase):
    id: str

    model_config = {"from_attributes": True}
