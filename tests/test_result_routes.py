"""
Pytest tests for recording and reporting quiz results
"""

from datetime import datetime, timedelta

from aptiquest.core.ids import new_id
from aptiquest.repositories.result_repository import ResultRepository


def _create_quiz(client, headers, count=3):
    response = client.post("/quizzes", json={"count": count}, headers=headers)
    assert response.status_code == 201
    return response.json()["id"]


class TestRecordResult:
    """Test POST /results"""

    def test_answers_are_scored_against_the_bank(self, client, make_question):
        q1 = make_question(answer="Paris", options=["Paris", "Rome"], text="Capital of France?")
        q2 = make_question(answer="4", options=["3", "4"], text="2+2?")

        response = client.post(
            "/results",
            json={
                "quiz_id": new_id(),
                "student_name": "Asha",
                "answers": {q1.id: "Paris", q2.id: "5"},
                "time_taken": 42,
            },
        )

        assert response.status_code == 201
        result = response.json()
        assert result["score"] == 1
        assert result["total_questions"] == 2
        assert result["correct_answers"] == 1
        assert result["wrong_answers"] == 1
        assert result["time_taken"] == 42
        assert result["student_name"] == "Asha"

        snapshots = {a["question_id"]: a for a in result["answers"]}
        assert snapshots[q1.id]["correct"] is True
        assert snapshots[q1.id]["question"] == "Capital of France?"
        assert snapshots[q1.id]["correct_answer"] == "Paris"
        assert snapshots[q2.id]["correct"] is False
        assert snapshots[q2.id]["chosen_answer"] == "5"

    def test_unknown_questions_are_kept_as_wrong(self, client, make_question):
        question = make_question(answer="B")
        missing = new_id()

        response = client.post(
            "/results",
            json={
                "quiz_id": new_id(),
                "answers": {question.id: "B", missing: "A", "bogus": "C"},
            },
        )

        assert response.status_code == 201
        result = response.json()
        assert result["total_questions"] == 3
        assert result["correct_answers"] == 1
        assert result["wrong_answers"] == 2
        unknown = [a for a in result["answers"] if a["question"] == "Unknown question"]
        assert {a["question_id"] for a in unknown} == {missing, "bogus"}
        assert all(a["correct"] is False for a in unknown)

    def test_unanswered_questions_count_as_wrong(self, client, make_question):
        answered = make_question(answer="B")
        skipped = make_question(answer="C")

        response = client.post(
            "/results",
            json={"quiz_id": new_id(), "answers": {answered.id: "B", skipped.id: None}},
        )

        assert response.status_code == 201
        result = response.json()
        assert result["correct_answers"] == 1
        assert result["wrong_answers"] == 1
        snapshot = {a["question_id"]: a for a in result["answers"]}
        assert snapshot[skipped.id]["chosen_answer"] is None
        assert snapshot[skipped.id]["correct"] is False
        assert snapshot[skipped.id]["correct_answer"] == "C"

    def test_missing_fields_are_rejected(self, client):
        assert client.post("/results", json={"answers": {"x": "y"}}).status_code == 400
        assert client.post("/results", json={"quiz_id": new_id()}).status_code == 400

        response = client.post("/results", json={"quiz_id": new_id(), "answers": {}})
        assert response.status_code == 400
        assert response.json()["detail"]["message"] == "Quiz ID and answers are required"

    def test_malformed_quiz_id_is_rejected(self, client):
        response = client.post(
            "/results", json={"quiz_id": "123", "answers": {"a": "b"}}
        )

        assert response.status_code == 400
        assert response.json()["detail"]["error"] == "invalid_id"

    def test_negative_time_is_rejected(self, client):
        response = client.post(
            "/results",
            json={"quiz_id": new_id(), "answers": {"a": "b"}, "time_taken": -1},
        )
        assert response.status_code == 400

    def test_question_order_defaults_to_answer_order(self, client, make_question):
        ids = [make_question().id for _ in range(3)]
        answers = {qid: "B" for qid in reversed(ids)}

        default = client.post(
            "/results", json={"quiz_id": new_id(), "answers": answers}
        ).json()
        explicit = client.post(
            "/results",
            json={"quiz_id": new_id(), "answers": answers, "question_order": ids},
        ).json()

        assert default["question_order"] == list(reversed(ids))
        assert explicit["question_order"] == ids

    def test_client_score_is_kept_when_supplied(self, client, make_question):
        question = make_question(answer="B")

        result = client.post(
            "/results",
            json={
                "quiz_id": new_id(),
                "answers": {question.id: "A"},
                "score": 7,
                "total": 10,
            },
        ).json()

        assert result["score"] == 7
        assert result["total_questions"] == 10
        assert result["correct_answers"] == 0

    def test_every_submission_creates_a_result(self, client, make_question):
        question = make_question()
        body = {"quiz_id": new_id(), "student_name": "Asha", "answers": {question.id: "B"}}

        first = client.post("/results", json=body).json()
        second = client.post("/results", json=body).json()

        assert first["id"] != second["id"]
        history = client.get("/results/student/Asha").json()["results"]
        assert len(history) == 2

    def test_respondent_comes_from_token(self, client, headers_for, make_question, make_user):
        user = make_user("bala")
        question = make_question()

        result = client.post(
            "/results",
            json={"quiz_id": new_id(), "answers": {question.id: "B"}},
            headers=headers_for("student", "bala", user.id),
        ).json()

        assert result["user_id"] == user.id
        assert result["student_name"] == "bala"

    def test_anonymous_respondent(self, client, make_question):
        question = make_question()

        result = client.post(
            "/results", json={"quiz_id": new_id(), "answers": {question.id: "B"}}
        ).json()

        assert result["student_name"] == "Anonymous"
        assert result["user_id"] is None


class TestResultReports:
    """Test the result listing and detail endpoints"""

    def _store(self, db_session, quiz_id, name, score, minutes_ago):
        return ResultRepository(db_session).create(
            {
                "quiz_id": quiz_id,
                "student_name": name,
                "question_order": [],
                "answers": [],
                "score": score,
                "total_questions": 10,
                "attempted_at": datetime(2024, 1, 1, 12, 0) - timedelta(minutes=minutes_ago),
            }
        )

    def test_quiz_results_are_ranked(self, client, staff_headers, db_session):
        quiz_id = new_id()
        low = self._store(db_session, quiz_id, "a", 3, 0)
        older_high = self._store(db_session, quiz_id, "b", 9, 30)
        newer_high = self._store(db_session, quiz_id, "c", 9, 10)
        self._store(db_session, new_id(), "d", 10, 0)

        response = client.get(f"/results/quiz/{quiz_id}", headers=staff_headers)

        assert response.status_code == 200
        ranked = [r["id"] for r in response.json()["results"]]
        assert ranked == [newer_high.id, older_high.id, low.id]

    def test_respondent_history_is_newest_first(self, client, db_session):
        old = self._store(db_session, new_id(), "Asha", 5, 60)
        new = self._store(db_session, new_id(), "Asha", 1, 5)
        self._store(db_session, new_id(), "Bala", 5, 0)

        history = client.get("/results/student/Asha").json()["results"]

        assert [r["id"] for r in history] == [new.id, old.id]

    def test_unknown_respondent_has_empty_history(self, client):
        response = client.get("/results/student/nobody")

        assert response.status_code == 200
        assert response.json() == {"results": []}

    def test_listings_require_staff(self, client, student_headers):
        assert client.get("/results").status_code == 401
        assert client.get("/results", headers=student_headers).status_code == 403
        assert client.get(f"/results/quiz/{new_id()}").status_code == 401

    def test_joins_survive_deleted_quiz(
        self, client, staff_headers, headers_for, make_question, make_user
    ):
        user = make_user("chitra")
        question = make_question()
        quiz_id = _create_quiz(client, staff_headers, count=1)
        client.post(
            "/results",
            json={"quiz_id": quiz_id, "answers": {question.id: "B"}},
            headers=headers_for("student", "chitra", user.id),
        )

        joined = client.get("/results", headers=staff_headers).json()["results"][0]
        assert joined["quiz"]["id"] == quiz_id
        assert joined["user"]["username"] == "chitra"

        client.delete(f"/quizzes/{quiz_id}", headers=staff_headers)
        orphaned = client.get("/results", headers=staff_headers).json()["results"]

        assert len(orphaned) == 1
        assert orphaned[0]["quiz"] is None
        assert orphaned[0]["quiz_id"] == quiz_id

    def test_detail_keeps_snapshot_after_bank_changes(
        self, client, staff_headers, make_question
    ):
        kept = make_question(answer="B", text="Original prompt?")
        removed = make_question(answer="C")
        recorded = client.post(
            "/results",
            json={
                "quiz_id": new_id(),
                "answers": {kept.id: "B", removed.id: "C"},
                "question_order": [removed.id, kept.id],
            },
        ).json()

        first = client.get(f"/results/{recorded['id']}").json()

        client.put(
            f"/questions/{kept.id}",
            json={"question": "Edited prompt?", "answer": "A"},
            headers=staff_headers,
        )
        client.delete(f"/questions/{removed.id}", headers=staff_headers)
        second = client.get(f"/results/{recorded['id']}").json()

        assert first["answers"] == second["answers"] == recorded["answers"]
        assert second["correct_answers"] == 2
        snapshot = {a["question_id"]: a for a in second["answers"]}
        assert snapshot[kept.id]["question"] == "Original prompt?"
        assert snapshot[kept.id]["correct_answer"] == "B"

        assert [q["id"] for q in first["questions"]] == [removed.id, kept.id]
        assert [q["id"] for q in second["questions"]] == [kept.id]
        assert second["questions"][0]["question"] == "Edited prompt?"

    def test_detail_errors(self, client):
        malformed = client.get("/results/xyz")
        missing = client.get(f"/results/{new_id()}")

        assert malformed.status_code == 400
        assert missing.status_code == 404
        assert missing.json()["detail"]["message"] == "No details found for this attempt"

    def test_delete_result(self, client, staff_headers, db_session):
        result = self._store(db_session, new_id(), "Asha", 5, 0)

        assert client.delete(f"/results/{result.id}").status_code == 401
        assert (
            client.delete(f"/results/{result.id}", headers=staff_headers).status_code
            == 200
        )
        assert client.get(f"/results/{result.id}").status_code == 404
