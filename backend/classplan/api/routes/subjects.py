from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy import select
from sqlalchemy.orm import Session

from classplan.api.deps import get_db
from classplan.models.subject import Subject
from classplan.schemas.subject import SubjectCreate, SubjectOut

router = APIRouter()


@router.get("/", response_model=list[SubjectOut])
def list_subjects(
    semester: int | None = Query(default=None, ge=1, le=20),
    db: Session = Depends(get_db),
) -> list[SubjectOut]:
    query = select(Subject).order_by(Subject.name)
    if semester is not None:
        query = query.where(Subject.semester == semester)
    return list(db.execute(query).scalars())


@router.post("/", response_model=SubjectOut, status_code=status.HTTP_201_CREATED)
def create_subject(payload: SubjectCreate, db: Session = Depends(get_db)) -> SubjectOut:
    existing = db.execute(select(Subject).where(Subject.code == payload.code)).scalar_one_or_none()
    if existing:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="Subject code already exists")
    subject = Subject(**payload.model_dump())
    db.add(subject)
    db.commit()
    db.refresh(subject)
    return subject


@router.delete("/{subject_id}")
def delete_subject(subject_id: str, db: Session = Depends(get_db)) -> dict:
    subject = db.get(Subject, subject_id)
    if subject is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Subject not found")
    db.delete(subject)
    db.commit()
    return {"success": True}
