from pydantic import BaseModel, Field, field_validator

from classplan.models.classroom import ClassroomType


class ClassroomBase(BaseModel):
    name: str = Field(min_length=1, max_length=100)
    capacity: int = Field(ge=1, le=1000)
    type: ClassroomType
    equipment: list[str] = Field(default_factory=list, max_length=50)
    building: str = Field(min_length=1, max_length=200)
    floor: int = Field(default=0, ge=-5, le=200)

    @field_validator("equipment")
    @classmethod
    def normalize_equipment(cls, value: list[str]) -> list[str]:
        return [item.strip() for item in value if item.strip()]


class ClassroomCreate(ClassroomBase):
    pass


class ClassroomOut(ClassroomBase):
    id: str

    model_config = {"from_attributes": True}
