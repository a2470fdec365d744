"""Data classes for the study companion's persisted records.

Records are stored as JSON with camelCase keys; ``to_dict``/``from_dict``
translate between that form and the attribute names used in Python.
"""
import uuid
from dataclasses import dataclass, field
from datetime import datetime

THEMES = ("dark", "light")
LANGUAGES = ("ar", "fr")


def now_iso() -> str:
    return datetime.now().isoformat()


def new_id() -> str:
    return uuid.uuid4().hex


@dataclass
class QuizResult:
    date: str
    score: int
    total_questions: int
    percentage: float

    def to_dict(self) -> dict:
        return {
            "date": self.date,
            "score": self.score,
            "totalQuestions": self.total_questions,
            "percentage": self.percentage,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "QuizResult":
        return cls(
            date=data["date"],
            score=data["score"],
            total_questions=data["totalQuestions"],
            percentage=data["percentage"],
        )


@dataclass
class StudyProgress:
    sections_visited: list[str] = field(default_factory=list)
    last_visit: dict[str, str] = field(default_factory=dict)
    time_spent: dict[str, float] = field(default_factory=dict)  # minutes
    quiz_results: list[QuizResult] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "sectionsVisited": list(self.sections_visited),
            "lastVisit": dict(self.last_visit),
            "timeSpent": dict(self.time_spent),
            "quizResults": [r.to_dict() for r in self.quiz_results],
        }

    @classmethod
    def from_dict(cls, data: dict) -> "StudyProgress":
        return cls(
            sections_visited=list(data.get("sectionsVisited", [])),
            last_visit=dict(data.get("lastVisit", {})),
            time_spent=dict(data.get("timeSpent", {})),
            quiz_results=[QuizResult.from_dict(r) for r in data.get("quizResults", [])],
        )


@dataclass
class Note:
    id: str
    section: str
    content: str
    created_at: str
    updated_at: str

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "section": self.section,
            "content": self.content,
            "createdAt": self.created_at,
            "updatedAt": self.updated_at,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Note":
        return cls(
            id=data["id"],
            section=data["section"],
            content=data["content"],
            created_at=data["createdAt"],
            updated_at=data["updatedAt"],
        )


@dataclass
class Bookmark:
    id: str
    section: str
    title: str
    url: str
    created_at: str

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "section": self.section,
            "title": self.title,
            "url": self.url,
            "createdAt": self.created_at,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Bookmark":
        return cls(
            id=data["id"],
            section=data["section"],
            title=data["title"],
            url=data["url"],
            created_at=data["createdAt"],
        )


@dataclass
class Student:
    id: int
    name: str  # Arabic
    name_fr: str
    username: str
    password: str

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "nameFr": self.name_fr,
            "username": self.username,
            "password": self.password,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Student":
        return cls(
            id=int(data["id"]),
            name=data["name"],
            name_fr=data["nameFr"],
            username=data["username"],
            password=data["password"],
        )


@dataclass
class User:
    id: int
    username: str
    name: str
    name_fr: str
    login_time: str

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "username": self.username,
            "name": self.name,
            "nameFr": self.name_fr,
            "loginTime": self.login_time,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "User":
        return cls(
            id=int(data["id"]),
            username=data["username"],
            name=data["name"],
            name_fr=data["nameFr"],
            login_time=data["loginTime"],
        )


@dataclass
class Settings:
    theme: str = "dark"
    language: str = "ar"
    notifications: bool = True

    def __post_init__(self):
        if self.theme not in THEMES:
            raise ValueError(f"theme must be one of {THEMES}, got {self.theme!r}")
        if self.language not in LANGUAGES:
            raise ValueError(f"language must be one of {LANGUAGES}, got {self.language!r}")

    def to_dict(self) -> dict:
        return {
            "theme": self.theme,
            "language": self.language,
            "notifications": self.notifications,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Settings":
        notifications = data.get("notifications", True)
        return cls(
            theme=data.get("theme", "dark"),
            language=data.get("language", "ar"),
            notifications=notifications if isinstance(notifications, bool) else True,
        )
