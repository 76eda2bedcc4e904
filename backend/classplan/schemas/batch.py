from pydantic import BaseModel, Field, field_validator

from classplan.schemas.common import dedupe_ids


class BatchBase(BaseModel):
    name: str = Field(min_length=1, max_length=100)
    semester: int = Field(ge=1, le=20)
    department: str = Field(min_length=1, max_length=200)
    strength: int = Field(ge=1, le=1000)
    subjects: list[str] = Field(default_factory=list, max_length=100)

    @field_validator("subjects")
    @classmethod
    def normalize_subjects(cls, value: list[str]) -> list[str]:
        return dedupe_ids(value)


class BatchCreate(BatchBase):
    pass


class BatchOut(BatchBase):
    id: str

    model_config = {"from_attributes": True}
