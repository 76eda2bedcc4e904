from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy import select
from sqlalchemy.orm import Session

from classplan.api.deps import get_db
from classplan.models.batch import Batch
from classplan.models.subject import Subject
from classplan.schemas.batch import BatchCreate, BatchOut

router = APIRouter()


@router.get("/", response_model=list[BatchOut])
def list_batches(db: Session = Depends(get_db)) -> list[BatchOut]:
    return list(db.execute(select(Batch).order_by(Batch.name)).scalars())


@router.post("/", response_model=BatchOut, status_code=status.HTTP_201_CREATED)
def create_batch(payload: BatchCreate, db: Session = Depends(get_db)) -> BatchOut:
    existing = db.execute(select(Batch).where(Batch.name == payload.name)).scalar_one_or_none()
    if existing:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="Batch name already exists")
    if payload.subjects:
        known = set(db.execute(select(Subject.id).where(Subject.id.in_(payload.subjects))).scalars())
        unknown = [subject_id for subject_id in payload.subjects if subject_id not in known]
        if unknown:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail=f"Unknown subject id(s): {', '.join(unknown)}",
            )
    batch = Batch(**payload.model_dump())
    db.add(batch)
    db.commit()
    db.refresh(batch)
    return batch


@router.delete("/{batch_id}")
def delete_batch(batch_id: str, db: Session = Depends(get_db)) -> dict:
    batch = db.get(Batch, batch_id)
    if batch is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Batch not found")
    db.delete(batch)
    db.commit()
    return {"success": True}
