"""Quick quiz over the bundled question bank."""
import json
import random
from pathlib import Path

from antigone_study.models import QuizResult
from antigone_study.progress import add_quiz_result, make_quiz_result, mark_section_visited

BUNDLED_QUIZ = Path(__file__).parent / "content" / "quiz.json"
CHOICES = ("a", "b", "c", "d")


def load_questions(path: Path | str = BUNDLED_QUIZ) -> list[dict]:
    data = json.loads(Path(path).read_text(encoding="utf-8"))
    return data["questions"]


def pick_questions(questions: list[dict], count: int = 10) -> list[dict]:
    if count >= len(questions):
        return random.sample(questions, len(questions))
    return random.sample(questions, count)


def check_answer(question: dict, answer: str) -> bool:
    return answer.lower().strip() == question["correct_answer"].lower().strip()


def finish_quiz(db_path: str, score: int, total_questions: int) -> QuizResult:
    """Record a finished quiz in the progress history."""
    result = make_quiz_result(score, total_questions)
    add_quiz_result(db_path, result)
    mark_section_visited(db_path, "quiz")
    return result
