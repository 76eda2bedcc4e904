from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy import select
from sqlalchemy.orm import Session

from classplan.api.deps import get_db
from classplan.models.classroom import Classroom
from classplan.schemas.classroom import ClassroomCreate, ClassroomOut

router = APIRouter()


@router.get("/", response_model=list[ClassroomOut])
def list_classrooms(db: Session = Depends(get_db)) -> list[ClassroomOut]:
    return list(db.execute(select(Classroom).order_by(Classroom.name)).scalars())


@router.post("/", response_model=ClassroomOut, status_code=status.HTTP_201_CREATED)
def create_classroom(payload: ClassroomCreate, db: Session = Depends(get_db)) -> ClassroomOut:
    existing = db.execute(select(Classroom).where(Classroom.name == payload.name)).scalar_one_or_none()
    if existing:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="Classroom name already exists")
    classroom = Classroom(**payload.model_dump())
    db.add(classroom)
    db.commit()
    db.refresh(classroom)
    return classroom


@router.delete("/{classroom_id}")
def delete_classroom(classroom_id: str, db: Session = Depends(get_db)) -> dict:
    classroom = db.get(Classroom, classroom_id)
    if classroom is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Classroom not found")
    db.delete(classroom)
    db.commit()
    return {"success": True}
