from sqlalchemy.exc import OperationalError
from sqlalchemy.orm import Session

WEEKDAYS = ["Monday", "Tuesday", "Wednesday", "Thursday", "Friday"]


def create_catalog(client):
    lecture = client.post(
        "/api/classrooms/",
        json={"name": "LH-101", "capacity": 60, "type": "lecture", "building": "Main", "floor": 1},
    )
    assert lecture.status_code == 201
    lab = client.post(
        "/api/classrooms/",
        json={"name": "LAB-101", "capacity": 40, "type": "lab", "equipment": ["PCs"], "building": "Tech"},
    )
    assert lab.status_code == 201

    core = client.post(
        "/api/subjects/",
        json={"name": "Compiler Design", "code": "cs501", "type": "core", "semester": 5, "department": "CSE"},
    )
    assert core.status_code == 201
    assert core.json()["code"] == "CS501"
    lab_subject = client.post(
        "/api/subjects/",
        json={"name": "Networks Lab", "code": "CSL501", "type": "lab", "semester": 5, "department": "CSE"},
    )
    assert lab_subject.status_code == 201
    core_id = core.json()["id"]
    lab_id = lab_subject.json()["id"]

    teacher = client.post(
        "/api/faculty/",
        json={
            "name": "Dr. Rao",
            "email": "rao@example.com",
            "department": "CSE",
            "subjects": [core_id, lab_id],
            "availability": {"Monday": ["09:00", "10:00"]},
            "max_hours_per_week": 16,
        },
    )
    assert teacher.status_code == 201

    batch = client.post(
        "/api/batches/",
        json={
            "name": "CS-Sem5",
            "semester": 5,
            "department": "CSE",
            "strength": 40,
            "subjects": [core_id, lab_id],
        },
    )
    assert batch.status_code == 201

    lunch = client.post(
        "/api/breaks/",
        json={
            "name": "Lunch Break",
            "start_time": "12:00",
            "end_time": "13:00",
            "days": WEEKDAYS,
            "owner_id": "owner-1",
        },
    )
    assert lunch.status_code == 201
    return {"core_id": core_id, "lab_id": lab_id}


def test_generate_persist_and_lookup(client):
    ids = create_catalog(client)

    response = client.post("/api/timetables/generate", json={"semester": 5, "owner_id": "owner-1", "random_seed": 11})
    assert response.status_code == 201
    payload = response.json()
    timetable = payload["timetable"]
    assert payload["warnings"] == []
    assert timetable["status"] == "draft"
    assert timetable["semester"] == "5"

    teaching = [slot for slot in timetable["time_slots"] if not slot["is_break"]]
    breaks = [slot for slot in timetable["time_slots"] if slot["is_break"]]
    assert {slot["subject_id"] for slot in teaching} == {ids["core_id"], ids["lab_id"]}
    assert len({(slot["day"], slot["start_time"]) for slot in teaching}) == 2
    assert len(breaks) == 5

    latest = client.get("/api/timetables/latest", params={"semester": "5"})
    assert latest.status_code == 200
    assert latest.json()["id"] == timetable["id"]

    listed = client.get("/api/timetables/", params={"semester": "5"})
    assert [item["id"] for item in listed.json()] == [timetable["id"]]

    published = client.post(f"/api/timetables/{timetable['id']}/publish")
    assert published.status_code == 200
    assert published.json()["status"] == "published"

    deleted = client.delete(f"/api/timetables/{timetable['id']}")
    assert deleted.status_code == 200
    missing = client.get(f"/api/timetables/{timetable['id']}")
    assert missing.status_code == 404
    assert missing.json()["kind"] == "not_found"


def test_generation_error_kinds_are_distinguishable(client):
    empty = client.post("/api/timetables/generate", json={"semester": "5"})
    assert empty.status_code == 400
    assert empty.json()["kind"] == "input_missing"
    assert set(empty.json()["details"]["missing"]) == {"classrooms", "subjects", "faculty", "batches"}

    create_catalog(client)
    no_batch = client.post("/api/timetables/generate", json={"semester": "7"})
    assert no_batch.status_code == 400
    assert no_batch.json()["kind"] == "no_target_batch"

    assert client.get("/api/timetables/").json() == []


def test_batch_without_subjects_and_empty_result_kinds(client):
    create_catalog(client)
    bare = client.post(
        "/api/batches/",
        json={"name": "CS-Sem8", "semester": 8, "department": "CSE", "strength": 30, "subjects": []},
    )
    assert bare.status_code == 201

    no_subjects = client.post("/api/timetables/generate", json={"semester": "8", "owner_id": "owner-1"})
    assert no_subjects.status_code == 400
    assert no_subjects.json()["kind"] == "batch_has_no_subjects"
    assert no_subjects.json()["details"]["batch_id"] == bare.json()["id"]

    orphan = client.post(
        "/api/subjects/",
        json={"name": "Quantum Computing", "code": "CS999", "type": "elective", "semester": 9, "department": "CSE"},
    )
    assert orphan.status_code == 201
    batch = client.post(
        "/api/batches/",
        json={
            "name": "CS-Sem9",
            "semester": 9,
            "department": "CSE",
            "strength": 30,
            "subjects": [orphan.json()["id"]],
        },
    )
    assert batch.status_code == 201

    nothing_placed = client.post("/api/timetables/generate", json={"semester": "9", "owner_id": "owner-2"})
    assert nothing_placed.status_code == 400
    assert nothing_placed.json()["kind"] == "empty_result"

    assert client.get("/api/timetables/").json() == []


def test_failed_slot_write_returns_persistence_failure(client, monkeypatch):
    create_catalog(client)
    original_commit = Session.commit
    calls = {"count": 0}

    def flaky_commit(self):
        calls["count"] += 1
        if calls["count"] == 2:
            raise OperationalError("INSERT INTO time_slots", {}, Exception("disk I/O error"))
        return original_commit(self)

    monkeypatch.setattr(Session, "commit", flaky_commit)

    response = client.post("/api/timetables/generate", json={"semester": "5", "owner_id": "owner-1"})

    assert response.status_code == 500
    payload = response.json()
    assert payload["kind"] == "persistence_failure"
    assert payload["details"]["timetable_id"]
    assert calls["count"] == 3

    monkeypatch.undo()
    assert client.get("/api/timetables/").json() == []


def test_unschedulable_subject_returned_as_warning(client):
    ids = create_catalog(client)
    orphan = client.post(
        "/api/subjects/",
        json={"name": "Quantum Computing", "code": "CS599", "type": "elective", "semester": 5, "department": "CSE"},
    )
    assert orphan.status_code == 201
    batch = client.post(
        "/api/batches/",
        json={
            "name": "CS-Sem5-B",
            "semester": 6,
            "department": "CSE",
            "strength": 40,
            "subjects": [ids["core_id"], orphan.json()["id"]],
        },
    )
    assert batch.status_code == 201

    response = client.post("/api/timetables/generate", json={"semester": "6", "owner_id": "owner-1"})
    assert response.status_code == 201
    warnings = response.json()["warnings"]
    assert [item["subject_code"] for item in warnings] == ["CS599"]
    assert warnings[0]["reason"] == "no_qualified_faculty"


def test_catalog_validation_and_duplicates(client):
    create_catalog(client)

    duplicate = client.post(
        "/api/classrooms/",
        json={"name": "LH-101", "capacity": 30, "type": "lecture", "building": "Main"},
    )
    assert duplicate.status_code == 409

    bad_break = client.post(
        "/api/breaks/",
        json={"name": "Backwards", "start_time": "13:00", "end_time": "12:00", "days": ["Monday"]},
    )
    assert bad_break.status_code == 422

    bad_day = client.post(
        "/api/breaks/",
        json={"name": "Someday", "start_time": "10:00", "end_time": "10:15", "days": ["Funday"]},
    )
    assert bad_day.status_code == 422

    unknown_subject = client.post(
        "/api/batches/",
        json={"name": "Ghost", "semester": 2, "department": "CSE", "strength": 10, "subjects": ["nope"]},
    )
    assert unknown_subject.status_code == 400

    assert len(client.get("/api/classrooms/").json()) == 2
    assert len(client.get("/api/subjects/", params={"semester": 5}).json()) == 2
    assert len(client.get("/api/breaks/", params={"owner_id": "owner-1"}).json()) == 1
