from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy import select
from sqlalchemy.orm import Session

from classplan.api.deps import get_db
from classplan.models.break_period import BreakPeriod
from classplan.schemas.break_period import BreakCreate, BreakOut

router = APIRouter()


@router.get("/", response_model=list[BreakOut])
def list_breaks(
    owner_id: str | None = Query(default=None, min_length=1, max_length=36),
    db: Session = Depends(get_db),
) -> list[BreakOut]:
    query = select(BreakPeriod).order_by(BreakPeriod.start_time)
    if owner_id is not None:
        query = query.where(BreakPeriod.owner_id == owner_id)
    return list(db.execute(query).scalars())


@router.post("/", response_model=BreakOut, status_code=status.HTTP_201_CREATED)
def create_break(payload: BreakCreate, db: Session = Depends(get_db)) -> BreakOut:
    item = BreakPeriod(**payload.model_dump())
    db.add(item)
    db.commit()
    db.refresh(item)
    return item


@router.delete("/{break_id}")
def delete_break(break_id: str, db: Session = Depends(get_db)) -> dict:
    item = db.get(BreakPeriod, break_id)
    if item is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Break not found")
    db.delete(item)
    db.commit()
    return {"success": True}
