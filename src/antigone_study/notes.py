"""User notes tagged by section."""
import logging

from antigone_study.models import Note, new_id, now_iso
from antigone_study.store import STORAGE_KEYS, read_json, write_json

logger = logging.getLogger(__name__)


def get_notes(db_path: str) -> list[Note]:
    data = read_json(db_path, STORAGE_KEYS["notes"], [])
    try:
        return [Note.from_dict(n) for n in data]
    except (KeyError, TypeError):
        logger.warning("Notes record is malformed, ignoring it")
        return []


def _write_notes(db_path: str, notes: list[Note]) -> None:
    write_json(db_path, STORAGE_KEYS["notes"], [n.to_dict() for n in notes])


def save_note(db_path: str, note: Note) -> None:
    """Insert ``note``, or replace the stored note with the same id.

    A replaced note always gets a fresh ``updated_at``.
    """
    notes = get_notes(db_path)
    for index, existing in enumerate(notes):
        if existing.id == note.id:
            notes[index] = Note(
                id=note.id,
                section=note.section,
                content=note.content,
                created_at=note.created_at,
                updated_at=now_iso(),
            )
            break
    else:
        notes.append(note)
    _write_notes(db_path, notes)


def create_note(db_path: str, section: str, content: str) -> Note:
    timestamp = now_iso()
    note = Note(id=new_id(), section=section, content=content,
                created_at=timestamp, updated_at=timestamp)
    save_note(db_path, note)
    return note


def delete_note(db_path: str, note_id: str) -> None:
    notes = [n for n in get_notes(db_path) if n.id != note_id]
    _write_notes(db_path, notes)


def get_notes_by_section(db_path: str, section_id: str) -> list[Note]:
    return [n for n in get_notes(db_path) if n.section == section_id]
