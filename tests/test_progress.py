# tests/test_progress.py
from unittest.mock import patch

import pytest

from antigone_study.db import init_db
from antigone_study.models import QuizResult, StudyProgress
from antigone_study.progress import (
    MAX_QUIZ_RESULTS, get_progress, save_progress, mark_section_visited, add_time_spent,
    add_quiz_result, make_quiz_result, get_progress_summary, get_score_label,
)
from antigone_study.store import STORAGE_KEYS, set_item


def _result(score, total=10, date="2024-01-01T00:00:00"):
    return QuizResult(date=date, score=score, total_questions=total, percentage=score / total * 100)


def test_get_progress_default(tmp_db):
    init_db(tmp_db)
    assert get_progress(tmp_db) == StudyProgress()


def test_save_and_get_progress(tmp_db):
    init_db(tmp_db)
    save_progress(tmp_db, StudyProgress(sections_visited=["home"]))
    assert get_progress(tmp_db).sections_visited == ["home"]


def test_mark_section_visited_is_idempotent(tmp_db):
    init_db(tmp_db)
    for section in ["themes", "quiz", "themes", "themes", "quiz"]:
        mark_section_visited(tmp_db, section)
    assert get_progress(tmp_db).sections_visited == ["themes", "quiz"]


def test_mark_section_visited_stamps_latest_visit(tmp_db):
    init_db(tmp_db)
    times = ["2024-01-01T10:00:00", "2024-01-01T11:00:00"]
    with patch("antigone_study.progress.now_iso", side_effect=times):
        mark_section_visited(tmp_db, "themes")
        assert get_progress(tmp_db).last_visit["themes"] == times[0]
        mark_section_visited(tmp_db, "themes")
    assert get_progress(tmp_db).last_visit["themes"] == times[1]


def test_add_time_spent_accumulates(tmp_db):
    init_db(tmp_db)
    add_time_spent(tmp_db, "characters", 5)
    add_time_spent(tmp_db, "characters", 2.5)
    add_time_spent(tmp_db, "themes", 1)
    progress = get_progress(tmp_db)
    assert progress.time_spent == {"characters": 7.5, "themes": 1}


def test_add_quiz_result_appends(tmp_db):
    init_db(tmp_db)
    add_quiz_result(tmp_db, _result(3))
    add_quiz_result(tmp_db, _result(7))
    assert [r.score for r in get_progress(tmp_db).quiz_results] == [3, 7]


def test_add_quiz_result_keeps_last_fifty(tmp_db):
    init_db(tmp_db)
    for i in range(1, 61):
        add_quiz_result(tmp_db, QuizResult(date=str(i), score=i, total_questions=60, percentage=i / 60 * 100))
    results = get_progress(tmp_db).quiz_results
    assert len(results) == MAX_QUIZ_RESULTS == 50
    assert [r.score for r in results] == list(range(11, 61))


def test_add_quiz_result_stores_percentage_verbatim(tmp_db):
    init_db(tmp_db)
    add_quiz_result(tmp_db, QuizResult(date="d", score=1, total_questions=2, percentage=99.0))
    assert get_progress(tmp_db).quiz_results[0].percentage == 99.0


def test_make_quiz_result():
    result = make_quiz_result(3, 4)
    assert result.percentage == 75.0
    assert result.score == 3
    assert result.total_questions == 4
    assert result.date


def test_make_quiz_result_rejects_empty_quiz():
    with pytest.raises(ValueError):
        make_quiz_result(0, 0)


def test_make_quiz_result_rejects_negative_score():
    with pytest.raises(ValueError):
        make_quiz_result(-1, 5)


def test_score_label():
    assert get_score_label(85) == "excellent"
    assert get_score_label(80) == "excellent"
    assert get_score_label(55) == "average"
    assert get_score_label(20) == "weak"


def test_progress_summary_empty(tmp_db):
    init_db(tmp_db)
    summary = get_progress_summary(tmp_db)
    assert summary["sections_visited"] == 0
    assert summary["total_time_spent"] == 0
    assert summary["quizzes_taken"] == 0
    assert summary["average_score"] == 0.0
    assert summary["best_score"] == 0.0
    assert summary["recent_results"] == []


def test_progress_summary_with_data(tmp_db):
    init_db(tmp_db)
    mark_section_visited(tmp_db, "themes")
    mark_section_visited(tmp_db, "quotes")
    add_time_spent(tmp_db, "themes", 10)
    add_time_spent(tmp_db, "quotes", 5)
    for score in [2, 4, 6, 8, 10, 5]:
        add_quiz_result(tmp_db, _result(score))
    summary = get_progress_summary(tmp_db)
    assert summary["sections_visited"] == 2
    assert summary["total_time_spent"] == 15
    assert summary["quizzes_taken"] == 6
    assert summary["average_score"] == pytest.approx(58.333, rel=1e-3)
    assert summary["best_score"] == 100.0
    # Last five, newest first
    assert [r.score for r in summary["recent_results"]] == [5, 10, 8, 6, 4]


# --- Edge case tests ---


def test_get_progress_corrupt_record_returns_default(tmp_db):
    init_db(tmp_db)
    set_item(tmp_db, STORAGE_KEYS["progress"], "{broken")
    assert get_progress(tmp_db) == StudyProgress()


def test_get_progress_malformed_quiz_result_returns_default(tmp_db):
    init_db(tmp_db)
    set_item(tmp_db, STORAGE_KEYS["progress"], '{"quizResults": [{"score": 1}]}')
    assert get_progress(tmp_db) == StudyProgress()


def test_mark_section_visited_after_corrupt_record_recovers(tmp_db):
    init_db(tmp_db)
    set_item(tmp_db, STORAGE_KEYS["progress"], "not json at all")
    mark_section_visited(tmp_db, "home")
    assert get_progress(tmp_db).sections_visited == ["home"]
