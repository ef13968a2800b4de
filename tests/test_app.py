from __future__ import annotations

from datetime import date

from fakes import DAY, JANE, JOHN, MIKE, SARAH


def test_health(client):
    resp = client.get("/health")
    assert resp.status_code == 200
    assert resp.get_json()["data"] == {"status": "ok"}


def test_unknown_route_is_json_404(client):
    resp = client.get("/nope")
    assert resp.status_code == 404
    assert resp.get_json()["success"] is False


def test_portal_requires_sign_in(client):
    resp = client.get("/student/attendance")
    assert resp.status_code == 401
    assert resp.get_json() == {"success": False, "message": "Please sign in to continue"}


def test_bad_credentials_return_401(client):
    resp = client.post("/auth/login", json={"email": JOHN.email, "password": "nope"})
    assert resp.status_code == 401


def test_student_login_and_me(client, login):
    data = login(JOHN.email, "student123")
    assert data["role"] == "student"
    assert data["profile"]["student"]["roll_number"] == JOHN.roll_number
    assert data["profile"]["class"]["class_name"] == "3rd Year CSE A"

    me = client.get("/auth/me").get_json()["data"]
    assert me["role"] == "student"

    client.post("/auth/logout")
    assert client.get("/auth/me").status_code == 401


def test_identity_without_profile_signs_in_with_no_role(client, login):
    data = login("nobody@college.edu", "nobody123")
    assert data["role"] is None
    assert data["profile"] is None
    assert client.get("/student/profile").status_code == 403


def test_admin_email_gets_admin_portal(client, login):
    assert login("admin@college.edu", "admin123")["role"] == "admin"

    resp = client.get("/admin/classes")
    assert resp.status_code == 200
    assert [c["class_id"] for c in resp.get_json()["data"]] == [1, 2]


def test_profile_load_failure_is_503(client, container):
    container.students_repo.fail = True
    resp = client.post("/auth/login", json={"email": JOHN.email, "password": "student123"})
    assert resp.status_code == 503
    assert resp.get_json()["message"] == "Failed to load profile"


def test_faculty_marks_and_remarks_attendance(client, login, container):
    login(SARAH.email, "faculty123")
    payload = {
        "class_id": 1,
        "date": DAY.isoformat(),
        "period_number": 1,
        "subject": "Data Structures",
        "entries": [
            {"student_id": JOHN.student_id, "status": "present"},
            {"student_id": JANE.student_id, "status": "absent"},
        ],
    }

    assert client.post("/faculty/attendance", json=payload).get_json()["data"] == {"saved": 2}
    payload["entries"] = [{"student_id": JANE.student_id, "status": "onduty"}]
    assert client.post("/faculty/attendance", json=payload).status_code == 200

    records = client.get(f"/faculty/classes/1/attendance?date={DAY.isoformat()}&period=1").get_json()["data"]
    assert [(r["student_id"], r["status"]) for r in records] == [(1, "present"), (2, "onduty")]

    stats = client.get("/faculty/classes/1/stats").get_json()["data"]
    assert stats["overall"]["percentage"] == 100.0


def test_marking_without_period_is_conflict(client, login):
    login(SARAH.email, "faculty123")
    resp = client.post(
        "/faculty/attendance",
        json={"class_id": 1, "date": DAY.isoformat(), "entries": [{"student_id": 1, "status": "present"}]},
    )
    assert resp.status_code == 409


def test_marking_student_from_other_class_is_bad_request(client, login):
    login(SARAH.email, "faculty123")
    resp = client.post(
        "/faculty/attendance",
        json={"class_id": 1, "date": DAY.isoformat(), "period_number": 2, "entries": [{"student_id": MIKE.student_id, "status": "present"}]},
    )
    assert resp.status_code == 400


def test_students_cannot_mark_attendance(client, login):
    login(JOHN.email, "student123")
    resp = client.post("/faculty/attendance", json={})
    assert resp.status_code == 403


def test_student_views(client, login, container):
    repo = container.attendance_repo
    repo.add(JOHN.student_id, 1, DAY, 1, "Math", "present")
    repo.add(JOHN.student_id, 1, DAY, 2, "Math", "absent")
    repo.add(JOHN.student_id, 1, date(2026, 3, 3), 1, "Physics", "onduty")
    login(JOHN.email, "student123")

    stats = client.get("/student/attendance/stats").get_json()["data"]
    assert stats["total"] == 3
    assert stats["percentage"] == 66.67
    assert stats["above_threshold"] is False

    subjects = client.get("/student/attendance/subjects").get_json()["data"]
    assert [g["label"] for g in subjects["groups"]] == ["Math", "Physics"]

    monthly = client.get("/student/attendance/monthly?year=2026&month=3").get_json()["data"]
    assert [d["label"] for d in monthly] == ["2026-03-02", "2026-03-03"]

    day = client.get(f"/student/attendance?date={DAY.isoformat()}").get_json()["data"]
    assert [r["period_number"] for r in day] == [1, 2]

    timetable = client.get("/student/timetable").get_json()["data"]
    assert [e["subject"] for e in timetable] == ["Data Structures", "Database Systems"]

    classmates = client.get("/student/classmates").get_json()["data"]
    assert [s["student_id"] for s in classmates] == [JANE.student_id]

    advisor = client.get("/student/advisor").get_json()["data"]
    assert advisor["full_name"] == SARAH.full_name


def test_student_pdf_report(client, login, container):
    container.attendance_repo.add(JOHN.student_id, 1, DAY, 1, "Math", "present")
    login(JOHN.email, "student123")

    resp = client.get("/student/report.pdf")

    assert resp.status_code == 200
    assert resp.mimetype == "application/pdf"
    assert resp.data.startswith(b"%PDF")


def test_advisor_class_report(client, login):
    login(SARAH.email, "faculty123")

    report = client.get("/faculty/reports/class").get_json()["data"]
    assert report["class_name"] == "3rd Year CSE A"
    assert report["total_students"] == 2

    pdf = client.get("/faculty/reports/class.pdf")
    assert pdf.status_code == 200
    assert pdf.data.startswith(b"%PDF")

    assert client.get(f"/faculty/reports/students/{JOHN.student_id}.pdf").status_code == 200
    assert client.get(f"/faculty/reports/students/{MIKE.student_id}.pdf").status_code == 403


def test_non_advisor_cannot_open_class_report(client, login):
    login("michael.chen@college.edu", "faculty123")
    resp = client.get("/faculty/reports/class")
    assert resp.status_code == 403
    assert resp.get_json()["message"] == "You are not a class advisor"


def test_faculty_timetable_and_classes(client, login):
    login("michael.chen@college.edu", "faculty123")

    classes = client.get("/faculty/classes").get_json()["data"]
    assert sorted(c["class_id"] for c in classes) == [1, 2]

    resp = client.post(
        "/faculty/timetable",
        json={"class_id": 2, "day_of_week": 2, "period_number": 3, "subject": "Compilers"},
    )
    entry_id = resp.get_json()["data"]["entry_id"]
    mine = client.get("/faculty/timetable").get_json()["data"]
    assert entry_id in [e["entry_id"] for e in mine]

    assert client.delete(f"/faculty/timetable/{entry_id}").status_code == 200
    assert client.delete(f"/faculty/timetable/{entry_id}").status_code == 400


def test_admin_manages_students(client, login):
    login("admin@college.edu", "admin123")

    resp = client.post("/admin/students", json={"roll_number": "21cs020", "full_name": "New Student", "class_id": 2})
    assert resp.status_code == 201
    student_id = resp.get_json()["data"]["student_id"]

    updated = client.patch(f"/admin/students/{student_id}", json={"full_name": "Renamed"}).get_json()["data"]
    assert updated["full_name"] == "Renamed"

    linked = client.post("/admin/students", json={"roll_number": "21CS021", "full_name": "X", "user_id": "f-sarah"})
    assert linked.status_code == 400

    assert client.delete(f"/admin/students/{student_id}").status_code == 200


def test_admin_attendance_stats(client, login, container):
    container.attendance_repo.add(JOHN.student_id, 1, DAY, 1, "Math", "present")
    container.attendance_repo.add(MIKE.student_id, 2, DAY, 1, "OS", "absent")
    login("admin@college.edu", "admin123")

    stats = client.get("/admin/attendance/stats").get_json()["data"]
    assert (stats["total"], stats["present"], stats["absent"]) == (2, 1, 1)

    records = client.get("/admin/attendance?start=2026-03-01&end=2026-03-31").get_json()["data"]
    assert len(records) == 2


def test_persistence_failure_is_503(client, login, container):
    login(SARAH.email, "faculty123")
    container.students_repo.fail = True

    resp = client.get("/faculty/classes/1/students")

    assert resp.status_code == 503
    assert resp.get_json()["success"] is False


def _mark_payload(**overrides):
    payload = {
        "class_id": 1,
        "date": DAY.isoformat(),
        "period_number": 3,
        "subject": "Data Structures",
        "entries": [{"student_id": JOHN.student_id, "status": "present"}],
    }
    payload.update(overrides)
    return payload


def test_non_numeric_class_id_is_bad_request(client, login):
    login(SARAH.email, "faculty123")
    resp = client.post("/faculty/attendance", json=_mark_payload(class_id="abc"))
    assert resp.status_code == 400
    assert resp.get_json()["message"] == "Class id must be a number"


def test_non_numeric_student_id_is_bad_request(client, login):
    login(SARAH.email, "faculty123")
    resp = client.post("/faculty/attendance", json=_mark_payload(entries=[{"student_id": "x1", "status": "present"}]))
    assert resp.status_code == 400
    assert resp.get_json()["message"] == "Student id must be a number"


def test_entry_that_is_not_an_object_is_bad_request(client, login, container):
    login(SARAH.email, "faculty123")
    resp = client.post("/faculty/attendance", json=_mark_payload(entries=["oops"]))
    assert resp.status_code == 400
    assert container.attendance_repo.all() == []


def test_only_marking_faculty_can_correct_a_record(client, login):
    login(SARAH.email, "faculty123")
    client.post("/faculty/attendance", json=_mark_payload())
    record = client.get(f"/faculty/classes/1/attendance?date={DAY.isoformat()}&period=3").get_json()["data"][0]
    client.post("/auth/logout")

    login("michael.chen@college.edu", "faculty123")
    resp = client.patch(f"/faculty/attendance/{record['record_id']}", json={"status": "absent"})
    assert resp.status_code == 403
    client.post("/auth/logout")

    login(SARAH.email, "faculty123")
    resp = client.patch(f"/faculty/attendance/{record['record_id']}", json={"status": "absent"})
    assert resp.status_code == 200
    assert resp.get_json()["data"]["status"] == "absent"
