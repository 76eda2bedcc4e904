from pydantic import BaseModel, Field, field_validator

from classplan.models.subject import SubjectType


class SubjectBase(BaseModel):
    name: str = Field(min_length=1, max_length=200)
    code: str = Field(min_length=1, max_length=50)
    credits: int = Field(default=3, ge=0, le=40)
    type: SubjectType
    semester: int = Field(ge=1, le=20)
    department: str = Field(min_length=1, max_length=200)

    @field_validator("code")
    @classmethod
    def normalize_code(cls, value: str) -> str:
        code = value.strip().upper()
        if not code:
            raise ValueError("Subject code cannot be blank")
        return code


class SubjectCreate(SubjectBase):
    pass


class SubjectOut(SubjectBase):
    id: str

    model_config = {"from_attributes": True}
