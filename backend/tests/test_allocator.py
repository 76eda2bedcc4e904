import random

import pytest

from classplan.core.config import DEFAULT_TIME_WINDOWS
from classplan.models.classroom import ClassroomType
from classplan.models.subject import SubjectType
from classplan.schemas.common import parse_time_window
from classplan.services.allocator import SlotAllocator
from classplan.services.catalog import BatchRecord, ClassroomRecord, FacultyRecord, SubjectRecord
from classplan.services.ranker import rank_subjects

WEEKDAYS = ["Monday", "Tuesday", "Wednesday", "Thursday", "Friday"]


def keep_order(slots):
    return None


def _allocate(catalog, *, days=WEEKDAYS, periods=6, rng=None, shuffle=None):
    batch = catalog.batches[0]
    ranked = rank_subjects(
        catalog.enrolled_subjects(batch),
        catalog.faculty,
        catalog.classrooms,
        batch.strength,
    )
    allocator = SlotAllocator(
        days=days,
        time_windows=DEFAULT_TIME_WINDOWS,
        periods_per_day=periods,
        rng=rng,
        shuffle=shuffle,
    )
    return allocator.allocate(ranked, batch, catalog.faculty, catalog.classrooms)


def test_parse_time_window():
    assert parse_time_window("09:00 - 10:00") == ("09:00", "10:00")
    with pytest.raises(ValueError):
        parse_time_window("10:00 - 09:00")
    with pytest.raises(ValueError):
        parse_time_window("09:00")


def test_candidate_universe_uses_first_periods_of_each_day():
    allocator = SlotAllocator(days=WEEKDAYS, time_windows=DEFAULT_TIME_WINDOWS, periods_per_day=6)

    candidates = allocator.candidate_slots()

    assert len(candidates) == 30
    assert {slot.start_time for slot in candidates} == {"09:00", "10:00", "11:00", "12:00", "13:00", "14:00"}
    assert len({slot.key for slot in candidates}) == 30


def test_both_subjects_placed_when_two_slots_exist(cs_sem5_catalog):
    result = _allocate(cs_sem5_catalog, days=["Monday"], periods=2, shuffle=keep_order)

    assert result.unscheduled == []
    placed = {slot.subject_id: slot for slot in result.slots}
    assert set(placed) == {"sub-a", "sub-b"}
    # Ranked first, the lab subject takes the first candidate slot.
    assert placed["sub-b"].start_time == "09:00"
    assert placed["sub-b"].classroom_id == "lab-1"
    assert placed["sub-b"].faculty_id == "f-4"
    assert placed["sub-a"].start_time == "10:00"


def test_single_slot_places_exactly_one_subject(cs_sem5_catalog):
    result = _allocate(cs_sem5_catalog, days=["Monday"], periods=1, shuffle=keep_order)

    assert len(result.slots) == 1
    assert result.slots[0].subject_id == "sub-b"
    assert len(result.unscheduled) == 1
    assert result.unscheduled[0].subject.id == "sub-a"
    assert result.unscheduled[0].reason == "no_free_slot"


def test_shared_sole_faculty_never_double_booked():
    subjects = (
        SubjectRecord(id="s1", name="Algorithms", code="CS1", type=SubjectType.core),
        SubjectRecord(id="s2", name="Data Structures", code="CS2", type=SubjectType.core),
    )
    faculty = (FacultyRecord(id="only", name="Only Teacher", subjects=frozenset({"s1", "s2"})),)
    classrooms = (
        ClassroomRecord(id="r1", name="R1", capacity=60, type=ClassroomType.lecture),
        ClassroomRecord(id="r2", name="R2", capacity=60, type=ClassroomType.lecture),
    )
    batch = BatchRecord(id="b1", name="B1", semester=3, strength=30, subjects=("s1", "s2"))
    ranked = rank_subjects(subjects, faculty, classrooms, batch.strength)

    for seed in range(25):
        allocator = SlotAllocator(
            days=WEEKDAYS,
            time_windows=DEFAULT_TIME_WINDOWS,
            periods_per_day=6,
            rng=random.Random(seed),
        )
        result = allocator.allocate(ranked, batch, faculty, classrooms)
        assert len(result.slots) == 2
        first, second = result.slots
        assert (first.day, first.start_time) != (second.day, second.start_time)


def test_seeded_runs_are_reproducible(cs_sem5_catalog):
    first = _allocate(cs_sem5_catalog, rng=random.Random(7))
    second = _allocate(cs_sem5_catalog, rng=random.Random(7))

    assert first.slots == second.slots


def test_unschedulable_subject_reported_with_ranker_reason():
    subject = SubjectRecord(id="s1", name="Lab", code="L1", type=SubjectType.lab)
    faculty = (FacultyRecord(id="f1", name="F1", subjects=frozenset({"s1"})),)
    classrooms = (ClassroomRecord(id="r1", name="R1", capacity=60, type=ClassroomType.lecture),)
    batch = BatchRecord(id="b1", name="B1", semester=1, strength=30, subjects=("s1",))
    ranked = rank_subjects([subject], faculty, classrooms, batch.strength)

    allocator = SlotAllocator(days=WEEKDAYS, time_windows=DEFAULT_TIME_WINDOWS, periods_per_day=6)
    result = allocator.allocate(ranked, batch, faculty, classrooms)

    assert result.slots == []
    assert result.unscheduled[0].reason == "no_suitable_classroom"
