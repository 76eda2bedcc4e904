from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy import select
from sqlalchemy.orm import Session

from classplan.api.deps import get_db
from classplan.models.faculty import Faculty
from classplan.models.subject import Subject
from classplan.schemas.faculty import FacultyCreate, FacultyOut

router = APIRouter()


@router.get("/", response_model=list[FacultyOut])
def list_faculty(db: Session = Depends(get_db)) -> list[FacultyOut]:
    return list(db.execute(select(Faculty).order_by(Faculty.name)).scalars())


@router.post("/", response_model=FacultyOut, status_code=status.HTTP_201_CREATED)
def create_faculty(payload: FacultyCreate, db: Session = Depends(get_db)) -> FacultyOut:
    existing = db.execute(select(Faculty).where(Faculty.email == payload.email)).scalar_one_or_none()
    if existing:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="Faculty email already exists")
    if payload.subjects:
        known = set(db.execute(select(Subject.id).where(Subject.id.in_(payload.subjects))).scalars())
        unknown = [subject_id for subject_id in payload.subjects if subject_id not in known]
        if unknown:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail=f"Unknown subject id(s): {', '.join(unknown)}",
            )
    member = Faculty(**payload.model_dump())
    db.add(member)
    db.commit()
    db.refresh(member)
    return member


@router.delete("/{faculty_id}")
def delete_faculty(faculty_id: str, db: Session = Depends(get_db)) -> dict:
    member = db.get(Faculty, faculty_id)
    if member is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Faculty not found")
    db.delete(member)
    db.commit()
    return {"success": True}
