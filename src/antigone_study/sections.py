"""Sections of the study guide and the paths that lead to them."""

SECTIONS = {
    "/": "home",
    "/personnages": "characters",
    "/oeuvre": "oeuvre",
    "/themes": "themes",
    "/citations": "quotes",
    "/fiche": "fiche",
    "/comparison": "comparison",
    "/glossary": "glossary",
    "/mindmaps": "mindmaps",
    "/howto": "howto",
    "/sample-answers": "sample_answers",
    "/quiz": "quiz_rapide",
    "/notes": "notes",
    "/bookmarks": "bookmarks",
    "/ecrits": "ecrits",
    "/audio": "audio",
    "/examen": "examen",
    "/search": "search",
    "/quick-review": "quick_review",
    "/progress": "progress",
    "/about": "about",
}

# Sections a note can be filed under.
NOTE_SECTIONS = ["characters", "themes", "quotes", "oeuvre", "comparison", "other"]


def section_for_path(path: str) -> str | None:
    return SECTIONS.get(path)


def path_for_section(section_id: str) -> str | None:
    return next((p for p, s in SECTIONS.items() if s == section_id), None)
