"""
Assessment authoring and submission API tests
"""
import uuid

from app.models import Assessment, AssessmentResult, User
from conftest import auth, build_questions


def new_assessment_payload(**overrides):
    payload = {
        "title": "Basic Digital Skills",
        "description": "Test your basic digital literacy",
        "skill_category": "basic",
        "questions": [
            {
                "id": "q1",
                "question": "Which is a web browser?",
                "options": ["Firefox", "Excel"],
                "correct_answer": "Firefox",
                "explanation": "Firefox browses the web.",
            },
            {
                "question": "What is a password?",
                "options": ["A secret code", "A computer part", "A type of email"],
                "correct_answer": "A secret code",
            },
        ],
        "total_points": 100,
        "time_limit": 15,
    }
    payload.update(overrides)
    return payload


def submit(client, user, assessment_id, answers):
    return client.post(
        "/api/assessments/submit",
        json={
            "assessment_id": str(assessment_id),
            "answers": [{"question_id": q, "user_answer": a} for q, a in answers],
        },
        headers=auth(user),
    )


def test_teacher_creates_assessment(client, teacher):
    response = client.post("/api/assessments/", json=new_assessment_payload(), headers=auth(teacher))

    assert response.status_code == 201
    body = response.json()
    assert body["title"] == "Basic Digital Skills"
    assert [q["id"] for q in body["questions"]] == ["q1", "2"]
    assert body["total_points"] == 100
    assert body["is_ai_generated"] is False


def test_student_cannot_create_assessment(client, student):
    response = client.post("/api/assessments/", json=new_assessment_payload(), headers=auth(student))

    assert response.status_code == 403
    assert response.json()["error"] == "permission_denied"


def test_missing_identity_header_is_unauthorized(client):
    response = client.post("/api/assessments/", json=new_assessment_payload())

    assert response.status_code == 401


def test_create_requires_questions(client, teacher):
    response = client.post(
        "/api/assessments/", json=new_assessment_payload(questions=[]), headers=auth(teacher)
    )

    assert response.status_code == 400
    assert response.json()["error"] == "validation_error"


def test_correct_answer_must_be_an_option(client, teacher):
    questions = [{"id": "q1", "question": "?", "options": ["a", "b"], "correct_answer": "c"}]

    response = client.post(
        "/api/assessments/", json=new_assessment_payload(questions=questions), headers=auth(teacher)
    )

    assert response.status_code == 400


def test_question_needs_two_options(client, teacher):
    questions = [{"id": "q1", "question": "?", "options": ["a"], "correct_answer": "a"}]

    response = client.post(
        "/api/assessments/", json=new_assessment_payload(questions=questions), headers=auth(teacher)
    )

    assert response.status_code == 400


def test_duplicate_question_ids_rejected(client, teacher):
    questions = build_questions(2)
    questions[1]["id"] = "q1"

    response = client.post(
        "/api/assessments/", json=new_assessment_payload(questions=questions), headers=auth(teacher)
    )

    assert response.status_code == 400
    assert "Duplicate question ids" in response.json()["message"]


def test_unknown_skill_category_rejected(client, teacher):
    response = client.post(
        "/api/assessments/",
        json=new_assessment_payload(skill_category="wizardry"),
        headers=auth(teacher),
    )

    assert response.status_code == 400


def test_list_and_get_assessment(client, make_assessment):
    assessment = make_assessment()

    listing = client.get("/api/assessments/")
    single = client.get(f"/api/assessments/{assessment.id}")

    assert listing.status_code == 200
    assert len(listing.json()) == 1
    assert single.json()["id"] == str(assessment.id)


def test_get_missing_assessment(client):
    response = client.get(f"/api/assessments/{uuid.uuid4()}")

    assert response.status_code == 404
    assert response.json()["error"] == "not_found"


def test_update_replaces_question_bank(client, teacher, make_assessment):
    assessment = make_assessment(question_count=5)

    response = client.put(
        f"/api/assessments/{assessment.id}",
        json={"title": "Renamed", "questions": build_questions(2)},
        headers=auth(teacher),
    )

    assert response.status_code == 200
    body = response.json()
    assert body["title"] == "Renamed"
    assert body["description"] == "Basic digital skills"
    assert len(body["questions"]) == 2


def test_update_clears_time_limit(client, teacher, make_assessment):
    assessment = make_assessment()

    response = client.put(
        f"/api/assessments/{assessment.id}",
        json={"time_limit": None},
        headers=auth(teacher),
    )

    assert response.status_code == 200
    assert response.json()["time_limit"] is None
    assert response.json()["title"] == assessment.title


def test_update_cannot_clear_title(client, db, teacher, make_assessment):
    assessment = make_assessment()

    response = client.put(
        f"/api/assessments/{assessment.id}",
        json={"title": None},
        headers=auth(teacher),
    )

    assert response.status_code == 400
    assert "title" in response.json()["message"]
    db.expire_all()
    assert db.get(Assessment, assessment.id).title is not None


def test_submit_four_of_five(client, db, student, make_assessment):
    assessment = make_assessment(question_count=5)
    answers = [(f"q{i}", f"right{i}") for i in range(1, 5)] + [("q5", "wrong5")]

    response = submit(client, student, assessment.id, answers)

    assert response.status_code == 201
    body = response.json()
    assert body["score"] == 80
    assert body["max_score"] == 100
    assert body["percentage"] == 80
    assert body["literacy_level"] == "literate"
    assert body["feedback"] == "Great job! You scored 80% on this assessment."
    assert body["assessment_title"] == assessment.title
    assert [a["is_correct"] for a in body["answers"]] == [True, True, True, True, False]

    db.expire_all()
    assert db.get(User, student.id).literacy_level == "literate"
    assert db.query(AssessmentResult).count() == 1


def test_submit_one_of_three(client, student, make_assessment):
    assessment = make_assessment(question_count=3)

    body = submit(client, student, assessment.id, [("q1", "right1")]).json()

    assert round(body["score"], 2) == 33.33
    assert body["percentage"] == 33
    assert body["literacy_level"] == "illiterate"


def test_user_level_tracks_latest_result(client, db, student, make_assessment):
    assessment = make_assessment(question_count=2)

    submit(client, student, assessment.id, [("q1", "right1"), ("q2", "right2")])
    latest = submit(client, student, assessment.id, [("q1", "right1"), ("q2", "nope")]).json()

    db.expire_all()
    assert latest["literacy_level"] == "semi-literate"
    assert db.get(User, student.id).literacy_level == latest["literacy_level"]
    assert db.query(AssessmentResult).count() == 2


def test_unknown_question_id_graded_incorrect(client, student, make_assessment):
    assessment = make_assessment(question_count=2)

    response = submit(client, student, assessment.id, [("nope", "right1"), ("q1", "right1")])

    assert response.status_code == 201
    body = response.json()
    assert body["answers"][0]["is_correct"] is False
    assert body["percentage"] == 50


def test_submit_missing_assessment(client, db, student):
    response = submit(client, student, uuid.uuid4(), [("q1", "a")])

    assert response.status_code == 404
    assert db.query(AssessmentResult).count() == 0


def test_submit_empty_question_bank_is_configuration_error(client, db, student):
    assessment = Assessment(title="Empty", description="none", questions=[], total_points=100)
    db.add(assessment)
    db.commit()

    response = submit(client, student, assessment.id, [("q1", "a")])

    assert response.status_code == 422
    assert response.json()["error"] == "configuration_error"
    db.expire_all()
    assert db.query(AssessmentResult).count() == 0
    assert db.get(User, student.id).literacy_level == "not-tested"


def test_submit_duplicate_answers_rejected(client, db, student, make_assessment):
    assessment = make_assessment(question_count=2)

    response = submit(client, student, assessment.id, [("q1", "right1"), ("q1", "right1")])

    assert response.status_code == 400
    assert db.query(AssessmentResult).count() == 0


def test_submit_without_answers_scores_zero(client, db, student, make_assessment):
    assessment = make_assessment(question_count=3)
    submit(client, student, assessment.id, [("q1", "right1"), ("q2", "right2"), ("q3", "right3")])

    response = submit(client, student, assessment.id, [])

    assert response.status_code == 201
    body = response.json()
    assert body["score"] == 0
    assert body["percentage"] == 0
    assert body["answers"] == []
    assert body["literacy_level"] == "illiterate"

    db.expire_all()
    assert db.get(User, student.id).literacy_level == "illiterate"
    assert db.query(AssessmentResult).count() == 2


def test_delete_blocked_while_results_exist(client, teacher, student, make_assessment):
    assessment = make_assessment(question_count=2)
    submit(client, student, assessment.id, [("q1", "right1")])

    response = client.delete(f"/api/assessments/{assessment.id}", headers=auth(teacher))

    assert response.status_code == 409
    assert "1 student(s)" in response.json()["message"]


def test_delete_unused_assessment(client, db, teacher, make_assessment):
    assessment = make_assessment()

    response = client.delete(f"/api/assessments/{assessment.id}", headers=auth(teacher))

    assert response.status_code == 200
    assert db.query(Assessment).count() == 0


def test_duplicate_assessment(client, teacher, make_assessment):
    assessment = make_assessment(question_count=3, title="Original")

    response = client.post(f"/api/assessments/{assessment.id}/duplicate", headers=auth(teacher))

    assert response.status_code == 201
    body = response.json()
    assert body["title"] == "Original (Copy)"
    assert body["id"] != str(assessment.id)
    assert len(body["questions"]) == 3


def test_assessment_statistics(client, teacher, make_user, make_assessment):
    assessment = make_assessment(question_count=4)
    strong, middle, weak = make_user(), make_user(), make_user()

    submit(client, strong, assessment.id, [(f"q{i}", f"right{i}") for i in range(1, 5)])
    submit(client, middle, assessment.id, [("q1", "right1"), ("q2", "right2")])
    submit(client, weak, assessment.id, [("q1", "right1")])

    response = client.get(f"/api/assessments/{assessment.id}/statistics", headers=auth(teacher))

    assert response.status_code == 200
    body = response.json()
    assert body["total_attempts"] == 3
    assert body["total_questions"] == 4
    assert body["average_score"] == 58  # (100 + 50 + 25) / 3
    assert body["score_distribution"] == {"literate": 1, "semi_literate": 1, "illiterate": 1}
    assert body["highest_score"] == 100
    assert body["lowest_score"] == 25
    assert len(body["recent_results"]) == 3
    assert body["recent_results"][0]["student_email"] == weak.email


def test_statistics_require_staff(client, student, make_assessment):
    assessment = make_assessment()

    response = client.get(f"/api/assessments/{assessment.id}/statistics", headers=auth(student))

    assert response.status_code == 403
