from pydantic import BaseModel, Field, field_validator, model_validator

from classplan.schemas.common import TIME_PATTERN, parse_time_to_minutes, validate_day_name


class BreakBase(BaseModel):
    name: str = Field(min_length=1, max_length=100)
    start_time: str
    end_time: str
    days: list[str] = Field(min_length=1, max_length=7)
    owner_id: str | None = Field(default=None, min_length=1, max_length=36)

    @field_validator("start_time", "end_time")
    @classmethod
    def validate_time_format(cls, value: str) -> str:
        if not TIME_PATTERN.match(value):
            raise ValueError("Time must be in HH:MM 24-hour format")
        return value

    @field_validator("days")
    @classmethod
    def validate_days(cls, value: list[str]) -> list[str]:
        days: list[str] = []
        for item in value:
            day = validate_day_name(item)
            if day not in days:
                days.append(day)
        return days

    @model_validator(mode="after")
    def validate_order(self) -> "BreakBase":
        if parse_time_to_minutes(self.end_time) <= parse_time_to_minutes(self.start_time):
            raise ValueError("end_time must be after start_time")
        return self


class BreakCreate(BreakBase):
    pass


class BreakOut(BreakBase):
    id: str

    model_config = {"from_attributes": True}
