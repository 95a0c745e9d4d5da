"""
Learning module and lesson progress API tests
"""
import uuid

from app.models import LearningModule, ModuleProgress
from conftest import auth


def complete(client, user, module_id, lesson_id):
    return client.post(
        "/api/learning-modules/complete-lesson",
        json={"module_id": str(module_id), "lesson_id": lesson_id},
        headers=auth(user),
    )


def test_teacher_creates_module(client, teacher):
    payload = {
        "title": "Internet and Email Basics",
        "description": "Learn to browse the internet and use email",
        "skill_level": "basic",
        "order": 2,
        "duration": 150,
        "lessons": [
            {"id": "lesson1", "title": "Introduction to the Internet"},
            {"id": "lesson2", "title": "Web Browsing", "video_url": "https://example.com/v2"},
        ],
    }

    response = client.post("/api/learning-modules/", json=payload, headers=auth(teacher))

    assert response.status_code == 201
    body = response.json()
    assert [lesson["id"] for lesson in body["lessons"]] == ["lesson1", "lesson2"]
    assert body["lessons"][1]["video_url"] == "https://example.com/v2"


def test_duplicate_lesson_ids_rejected(client, teacher):
    payload = {
        "title": "Broken",
        "description": "Repeated lessons",
        "lessons": [{"id": "l1", "title": "A"}, {"id": "l1", "title": "B"}],
    }

    response = client.post("/api/learning-modules/", json=payload, headers=auth(teacher))

    assert response.status_code == 400


def test_student_cannot_create_module(client, student):
    response = client.post(
        "/api/learning-modules/",
        json={"title": "x", "description": "y"},
        headers=auth(student),
    )

    assert response.status_code == 403


def test_modules_listed_in_order(client, make_module):
    make_module(title="Second", order=2)
    make_module(title="First", order=1)

    titles = [m["title"] for m in client.get("/api/learning-modules/").json()]

    assert titles == ["First", "Second"]


def test_get_missing_module(client):
    response = client.get(f"/api/learning-modules/{uuid.uuid4()}")

    assert response.status_code == 404


def test_update_clears_duration(client, teacher, make_module):
    module = make_module()

    response = client.put(
        f"/api/learning-modules/{module.id}",
        json={"duration": None, "order": 4},
        headers=auth(teacher),
    )

    assert response.status_code == 200
    assert response.json()["duration"] is None
    assert response.json()["order"] == 4
    assert len(response.json()["lessons"]) == 3


def test_update_cannot_clear_lessons(client, teacher, make_module):
    module = make_module()

    response = client.put(
        f"/api/learning-modules/{module.id}",
        json={"lessons": None},
        headers=auth(teacher),
    )

    assert response.status_code == 400
    assert "lessons" in response.json()["message"]


def test_complete_lesson_sequence(client, student, make_module):
    module = make_module(lesson_count=3)

    first = complete(client, student, module.id, "lesson1").json()
    repeat = complete(client, student, module.id, "lesson1").json()
    second = complete(client, student, module.id, "lesson2").json()

    assert first["completion_percentage"] == 33
    assert repeat["lessons_completed"] == ["lesson1"]
    assert repeat["last_accessed_at"] >= first["last_accessed_at"]
    assert second["lessons_completed"] == ["lesson1", "lesson2"]
    assert second["completion_percentage"] == 67
    assert second["completed_at"] is None
    assert second["started_at"] == first["started_at"]


def test_complete_all_lessons_sets_completed_at(client, student, make_module):
    module = make_module(lesson_count=2)

    complete(client, student, module.id, "lesson1")
    done = complete(client, student, module.id, "lesson2").json()
    again = complete(client, student, module.id, "lesson1").json()

    assert done["completion_percentage"] == 100
    assert done["completed_at"] is not None
    assert again["completion_percentage"] == 100
    assert again["completed_at"] == done["completed_at"]


def test_completed_at_kept_after_module_grows(client, db, teacher, student, make_module):
    module = make_module(lesson_count=1)
    done = complete(client, student, module.id, "lesson1").json()

    client.put(
        f"/api/learning-modules/{module.id}",
        json={"lessons": [{"id": "lesson1", "title": "One"}, {"id": "lesson2", "title": "Two"}]},
        headers=auth(teacher),
    )
    after = complete(client, student, module.id, "lesson1").json()

    assert after["completion_percentage"] == 50
    assert after["completed_at"] == done["completed_at"]


def test_complete_lesson_missing_module(client, db, student):
    response = complete(client, student, uuid.uuid4(), "lesson1")

    assert response.status_code == 404
    assert response.json()["message"] == "Module not found"
    assert db.query(ModuleProgress).count() == 0


def test_complete_lesson_outside_module(client, student, make_module):
    module = make_module(lesson_count=2)

    response = complete(client, student, module.id, "intro-video")

    assert response.status_code == 200
    assert response.json()["lessons_completed"] == ["intro-video"]
    assert response.json()["completion_percentage"] == 50

    complete(client, student, module.id, "lesson1")
    body = complete(client, student, module.id, "lesson2").json()

    assert body["lessons_completed"] == ["intro-video", "lesson1", "lesson2"]
    assert body["completion_percentage"] == 100
    assert body["completed_at"] is not None


def test_progress_me(client, student, make_user, make_module):
    module = make_module()
    other = make_user()
    complete(client, student, module.id, "lesson1")
    complete(client, other, module.id, "lesson2")

    response = client.get("/api/learning-modules/progress/me", headers=auth(student))

    assert response.status_code == 200
    body = response.json()
    assert len(body) == 1
    assert body[0]["lessons_completed"] == ["lesson1"]


def test_delete_blocked_while_in_use(client, db, teacher, student, make_module):
    module = make_module()
    complete(client, student, module.id, "lesson1")

    response = client.delete(f"/api/learning-modules/{module.id}", headers=auth(teacher))

    assert response.status_code == 409
    assert db.query(LearningModule).count() == 1


def test_delete_unused_module(client, db, teacher, make_module):
    module = make_module()

    response = client.delete(f"/api/learning-modules/{module.id}", headers=auth(teacher))

    assert response.status_code == 200
    assert db.query(LearningModule).count() == 0


def test_module_statistics(client, teacher, make_user, make_module):
    module = make_module(lesson_count=2)
    finisher, starter = make_user(), make_user()
    complete(client, finisher, module.id, "lesson1")
    complete(client, finisher, module.id, "lesson2")
    complete(client, starter, module.id, "lesson1")

    response = client.get(f"/api/learning-modules/{module.id}/statistics", headers=auth(teacher))

    assert response.status_code == 200
    body = response.json()
    assert body["total_lessons"] == 2
    assert body["total_students"] == 2
    assert body["completed_students"] == 1
    assert body["in_progress"] == 1
    assert body["average_completion"] == 75
    assert sorted(row["lessons_completed"] for row in body["student_progress"]) == [1, 2]
