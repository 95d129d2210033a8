"""
Owner-scoped note storage.

Every lookup filters on both note id and owner id, so a note belonging to
someone else looks exactly like a note that does not exist.
"""
from typing import Callable, List, Optional

from sqlalchemy.orm import Session

from .models import Note, utcnow

# SQLite INTEGER range; ids outside it cannot name a stored note.
MIN_NOTE_ID = -(2 ** 63)
MAX_NOTE_ID = 2 ** 63 - 1


# PUBLIC_INTERFACE
class NoteStore:
    """Notes of a single SQLAlchemy session; ``clock`` supplies timestamps."""

    def __init__(self, session: Session, clock: Callable = utcnow):
        self.session = session
        self._clock = clock

    def _owned(self, note_id: int, owner_id: int):
        return self.session.query(Note).filter(Note.id == note_id, Note.user_id == owner_id)

    def list_by_owner(self, owner_id: int) -> List[Note]:
        """All notes of ``owner_id``, most recently updated first."""
        return (
            self.session.query(Note)
            .filter(Note.user_id == owner_id)
            .order_by(Note.updated_at.desc(), Note.id.desc())
            .all()
        )

    def get_owned(self, note_id: int, owner_id: int) -> Optional[Note]:
        if not MIN_NOTE_ID <= note_id <= MAX_NOTE_ID:
            return None
        return self._owned(note_id, owner_id).first()

    def create(self, owner_id: int, title: str, content: str, tags: str = "") -> Note:
        now = self._clock()
        note = Note(
            user_id=owner_id,
            title=title,
            content=content,
            tags=tags or "",
            created_at=now,
            updated_at=now,
        )
        self.session.add(note)
        self.session.commit()
        self.session.refresh(note)
        return note

    def update(self, note_id: int, owner_id: int, title: str, content: str, tags: str = "") -> Optional[Note]:
        """
        Overwrite title, content and tags and refresh ``updated_at``.
        Returns None when the note is missing or owned by someone else.
        """
        note = self.get_owned(note_id, owner_id)
        if note is None:
            return None
        note.title = title
        note.content = content
        note.tags = tags or ""
        note.updated_at = self._clock()
        self.session.commit()
        self.session.refresh(note)
        return note

    def delete(self, note_id: int, owner_id: int) -> bool:
        """True only if a note matching both id and owner was removed."""
        note = self.get_owned(note_id, owner_id)
        if note is None:
            return False
        self.session.delete(note)
        self.session.commit()
        return True
