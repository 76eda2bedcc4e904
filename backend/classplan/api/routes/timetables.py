import logging
import random

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from classplan.api.deps import get_db
from classplan.core.config import get_settings
from classplan.schemas.generator import GenerateTimetableRequest, GenerateTimetableResponse, SchedulingWarning
from classplan.schemas.timetable import TimetableOut, TimetableSummary
from classplan.services import timetable_store
from classplan.services.catalog import load_catalog
from classplan.services.generator import generate_timetable

router = APIRouter()
logger = logging.getLogger(__name__)


@router.post("/generate", response_model=GenerateTimetableResponse, status_code=status.HTTP_201_CREATED)
def generate(payload: GenerateTimetableRequest, db: Session = Depends(get_db)) -> GenerateTimetableResponse:
    settings = get_settings()
    seed = payload.random_seed if payload.random_seed is not None else settings.random_seed
    catalog = load_catalog(db)
    result = generate_timetable(
        catalog,
        payload.semester,
        owner_id=payload.owner_id,
        rng=random.Random(seed),
        settings=settings,
    )
    saved = timetable_store.save_generated_timetable(db, result)
    if result.warnings:
        logger.warning(
            "Timetable %s saved with %s unscheduled subject(s)",
            saved.id,
            len(result.warnings),
        )
    return GenerateTimetableResponse(
        timetable=TimetableOut.model_validate(saved),
        warnings=[
            SchedulingWarning(
                subject_id=item.subject_id,
                subject_name=item.subject_name,
                subject_code=item.subject_code,
                reason=item.reason,
                message=item.message,
            )
            for item in result.warnings
        ],
    )


@router.get("/", response_model=list[TimetableSummary])
def list_timetables(
    semester: str | None = Query(default=None, min_length=1, max_length=20),
    db: Session = Depends(get_db),
) -> list[TimetableSummary]:
    return timetable_store.list_timetables(db, semester)


@router.get("/latest", response_model=TimetableOut)
def latest_timetable(
    semester: str = Query(min_length=1, max_length=20),
    db: Session = Depends(get_db),
) -> TimetableOut:
    return timetable_store.latest_timetable(db, semester)


@router.get("/{timetable_id}", response_model=TimetableOut)
def get_timetable(timetable_id: str, db: Session = Depends(get_db)) -> TimetableOut:
    return timetable_store.get_timetable(db, timetable_id)


@router.post("/{timetable_id}/publish", response_model=TimetableSummary)
def publish_timetable(timetable_id: str, db: Session = Depends(get_db)) -> TimetableSummary:
    return timetable_store.publish_timetable(db, timetable_id)


@router.delete("/{timetable_id}")
def delete_timetable(timetable_id: str, db: Session = Depends(get_db)) -> dict:
    timetable_store.delete_timetable(db, timetable_id)
    return {"success": True}
