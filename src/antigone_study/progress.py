"""Study progress tracking: visited sections, time spent and quiz history."""
import logging

from antigone_study.models import QuizResult, StudyProgress, now_iso
from antigone_study.store import STORAGE_KEYS, read_json, write_json

logger = logging.getLogger(__name__)

MAX_QUIZ_RESULTS = 50
RECENT_RESULTS = 5


def get_progress(db_path: str) -> StudyProgress:
    data = read_json(db_path, STORAGE_KEYS["progress"])
    if not data:
        return StudyProgress()
    try:
        return StudyProgress.from_dict(data)
    except (KeyError, TypeError, ValueError, AttributeError):
        logger.warning("Progress record is malformed, starting from an empty one")
        return StudyProgress()


def save_progress(db_path: str, progress: StudyProgress) -> None:
    write_json(db_path, STORAGE_KEYS["progress"], progress.to_dict())


def mark_section_visited(db_path: str, section_id: str) -> None:
    progress = get_progress(db_path)
    if section_id not in progress.sections_visited:
        progress.sections_visited.append(section_id)
    progress.last_visit[section_id] = now_iso()
    save_progress(db_path, progress)


def add_time_spent(db_path: str, section_id: str, minutes: float) -> None:
    progress = get_progress(db_path)
    progress.time_spent[section_id] = progress.time_spent.get(section_id, 0) + minutes
    save_progress(db_path, progress)


def add_quiz_result(db_path: str, result: QuizResult) -> None:
    """Append a quiz result, keeping only the most recent ``MAX_QUIZ_RESULTS``."""
    progress = get_progress(db_path)
    progress.quiz_results.append(result)
    if len(progress.quiz_results) > MAX_QUIZ_RESULTS:
        progress.quiz_results = progress.quiz_results[-MAX_QUIZ_RESULTS:]
    save_progress(db_path, progress)


def make_quiz_result(score: int, total_questions: int) -> QuizResult:
    if total_questions <= 0:
        raise ValueError("total_questions must be positive")
    if score < 0:
        raise ValueError("score cannot be negative")
    return QuizResult(
        date=now_iso(),
        score=score,
        total_questions=total_questions,
        percentage=score / total_questions * 100,
    )


def get_score_label(percentage: float) -> str:
    if percentage >= 80:
        return "excellent"
    elif percentage >= 50:
        return "average"
    return "weak"


def get_score_color(percentage: float) -> str:
    return {"excellent": "green", "average": "yellow", "weak": "red"}[get_score_label(percentage)]


def get_progress_summary(db_path: str) -> dict:
    progress = get_progress(db_path)
    results = progress.quiz_results
    percentages = [r.percentage for r in results]
    return {
        "sections_visited": len(progress.sections_visited),
        "total_time_spent": sum(progress.time_spent.values()),
        "quizzes_taken": len(results),
        "average_score": sum(percentages) / len(percentages) if percentages else 0.0,
        "best_score": max(percentages) if percentages else 0.0,
        "recent_results": list(reversed(results[-RECENT_RESULTS:])),
    }
