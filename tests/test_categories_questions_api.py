from fastapi import status

from quizapp.model.quizzes import QuizQuestion


def _question_body(category_id, correct=(1,), n=4, **extra):
    body = {
        "text": "What is the chemical symbol for water?",
        "options": [{"text": f"Option {i}", "isCorrect": i in correct} for i in range(n)],
        "explanation": "H2O is two hydrogens and an oxygen.",
        "category": category_id,
        "difficulty": "easy",
    }
    body.update(extra)
    return body


class TestCategories:

    def test_list_is_public_and_sorted(self, client, db_session, category):
        response = client.get("/categories")
        assert response.status_code == status.HTTP_200_OK
        assert [c["name"] for c in response.json()] == ["Science"]
        assert response.json()[0]["icon"] == "default-category-icon.png"

    def test_get_unknown(self, client, db_session):
        response = client.get("/categories/404")
        assert response.status_code == status.HTTP_404_NOT_FOUND
        assert response.json()["detail"] == "Category not found"

    def test_create_requires_admin(self, client, auth_headers):
        response = client.post("/categories", json={"name": "Art", "description": "Paintings"}, headers=auth_headers)
        assert response.status_code == status.HTTP_403_FORBIDDEN
        assert response.json()["detail"] == "Admin access required"

    def test_create_and_duplicate(self, client, admin_headers):
        body = {"name": "Art", "description": "Paintings", "color": "#FF0000"}
        response = client.post("/categories", json=body, headers=admin_headers)
        assert response.status_code == status.HTTP_201_CREATED
        assert response.json()["color"] == "#FF0000"

        again = client.post("/categories", json=body, headers=admin_headers)
        assert again.status_code == status.HTTP_400_BAD_REQUEST

    def test_update(self, client, category, admin_headers):
        response = client.put(f"/categories/{category.category_id}", json={"description": "Natural sciences"},
                              headers=admin_headers)
        assert response.status_code == status.HTTP_200_OK
        assert response.json()["description"] == "Natural sciences"
        assert response.json()["name"] == "Science"

    def test_delete_in_use_is_refused(self, client, make_quiz, category, admin_headers):
        make_quiz(n=1)
        response = client.delete(f"/categories/{category.category_id}", headers=admin_headers)
        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_delete_unused(self, client, category, admin_headers):
        response = client.delete(f"/categories/{category.category_id}", headers=admin_headers)
        assert response.status_code == status.HTTP_200_OK
        assert client.get(f"/categories/{category.category_id}").status_code == status.HTTP_404_NOT_FOUND


class TestQuestions:

    def test_create_question(self, client, category, admin_headers):
        response = client.post("/questions", json=_question_body(category.category_id), headers=admin_headers)
        assert response.status_code == status.HTTP_201_CREATED
        data = response.json()
        assert [o["isCorrect"] for o in data["options"]] == [False, True, False, False]
        assert data["category"] == {"id": category.category_id, "name": "Science"}
        assert data["difficulty"] == "easy"

    def test_create_requires_admin(self, client, category, auth_headers):
        response = client.post("/questions", json=_question_body(category.category_id), headers=auth_headers)
        assert response.status_code == status.HTTP_403_FORBIDDEN

    def test_wrong_option_count(self, client, category, admin_headers):
        response = client.post("/questions", json=_question_body(category.category_id, n=3), headers=admin_headers)
        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.json()["detail"] == "Each question must have exactly 4 options"

    def test_two_correct_options(self, client, category, admin_headers):
        response = client.post("/questions", json=_question_body(category.category_id, correct=(0, 2)),
                               headers=admin_headers)
        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.json()["detail"] == "Each question must have exactly one correct answer"

    def test_unknown_category(self, client, admin_headers, db_session):
        response = client.post("/questions", json=_question_body(999), headers=admin_headers)
        assert response.status_code == status.HTTP_404_NOT_FOUND

    def test_bad_difficulty(self, client, category, admin_headers):
        response = client.post("/questions", json=_question_body(category.category_id, difficulty="impossible"),
                               headers=admin_headers)
        assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY

    def test_list_filters(self, client, category, admin_headers):
        client.post("/questions", json=_question_body(category.category_id), headers=admin_headers)
        client.post("/questions", json=_question_body(category.category_id, difficulty="hard"), headers=admin_headers)

        response = client.get("/questions", params={"difficulty": "hard"}, headers=admin_headers)
        assert response.status_code == status.HTTP_200_OK
        assert [q["difficulty"] for q in response.json()] == ["hard"]

    def test_by_category_hides_answer_key(self, client, make_quiz, category, auth_headers):
        make_quiz(n=2)
        response = client.get(f"/questions/category/{category.category_id}", headers=auth_headers)
        assert response.status_code == status.HTTP_200_OK
        assert len(response.json()) == 2
        for question in response.json():
            assert all(set(o) == {"id", "text"} for o in question["options"])

    def test_update_options(self, client, category, admin_headers):
        created = client.post("/questions", json=_question_body(category.category_id), headers=admin_headers).json()
        options = [{"text": f"New {i}", "isCorrect": i == 3} for i in range(4)]
        response = client.put(f"/questions/{created['id']}", json={"options": options}, headers=admin_headers)
        assert response.status_code == status.HTTP_200_OK
        assert [o["isCorrect"] for o in response.json()["options"]] == [False, False, False, True]
        assert response.json()["text"] == created["text"]

    def test_delete_unlinks_from_quizzes(self, client, db_session, make_quiz, admin_headers, auth_headers):
        quiz = make_quiz(n=2)
        question_id = quiz.questions[0].question_id
        kept_id = quiz.questions[1].question_id

        response = client.delete(f"/questions/{question_id}", headers=admin_headers)
        assert response.status_code == status.HTTP_200_OK
        db_session.expire_all()

        assert db_session.query(QuizQuestion).filter(QuizQuestion.question_id == question_id).count() == 0
        assert client.get(f"/questions/{question_id}", headers=admin_headers).status_code == status.HTTP_404_NOT_FOUND
        detail = client.get(f"/quizzes/{quiz.quiz_id}").json()
        assert [q["id"] for q in detail["questions"]] == [str(kept_id)]

        submitted = client.post(f"/quizzes/{quiz.quiz_id}/submit",
                                json={"answers": [], "timeTaken": 5}, headers=auth_headers)
        assert submitted.status_code == status.HTTP_200_OK
        assert submitted.json()["totalQuestions"] == 1

    def test_delete_last_question_of_quiz_is_refused(self, client, db_session, make_quiz, admin_headers, auth_headers):
        quiz = make_quiz(n=1)
        question_id = quiz.questions[0].question_id

        response = client.delete(f"/questions/{question_id}", headers=admin_headers)
        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.json()["detail"] == "Question is the only question of a quiz"
        db_session.expire_all()

        assert client.get(f"/questions/{question_id}", headers=admin_headers).status_code == status.HTTP_200_OK
        submitted = client.post(f"/quizzes/{quiz.quiz_id}/submit",
                                json={"answers": [], "timeTaken": 5}, headers=auth_headers)
        assert submitted.status_code == status.HTTP_200_OK
        assert submitted.json()["totalQuestions"] == 1

    def test_delete_unlinked_question(self, client, category, admin_headers):
        created = client.post("/questions", json=_question_body(category.category_id), headers=admin_headers).json()
        response = client.delete(f"/questions/{created['id']}", headers=admin_headers)
        assert response.status_code == status.HTTP_200_OK
        assert response.json() == {"message": "Question removed"}
