from quizapp.model.quizzes import Quiz

PASSWORD = "testpassword123"


def answers_for(quiz: Quiz, correct: int) -> list:
    """Answer the first `correct` questions right and the rest wrong."""
    answers = []
    for i, question in enumerate(quiz.questions):
        right = next(o for o in question.options if o.is_correct)
        wrong = next(o for o in question.options if not o.is_correct)
        chosen = right if i < correct else wrong
        answers.append({"questionId": str(question.question_id), "selectedOption": str(chosen.option_id)})
    return answers
