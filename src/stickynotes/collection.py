"""Provides the :class:`NoteCollection` class."""

from __future__ import annotations
import logging
from typing import Iterable, Iterator, List, Optional, Set

from stickynotes.models import Note, NoteSummary, new_note_id


logger = logging.getLogger(__name__)


class NoteCollection:
    """The ordered set of notes held in memory.

    Notes are kept in creation order and are never re-sorted. The collection is never empty once a public method
    returns: deleting the last note creates a fresh default one in its place.

    Ids are unique across every note the instance has ever held, including deleted ones.

    .. attribute:: bootstrapped_note_id
       :type: Optional[str]

       Set by :meth:`bootstrap` when it had to create a default note, which should be opened for editing right
       away. None when existing notes were adopted.
    """
    def __init__(self, notes: Iterable[Note] = ()):
        self._notes: List[Note] = []
        self._seen_ids: Set[str] = set()
        self.bootstrapped_note_id: Optional[str] = None
        for note in notes:
            if note.id in self._seen_ids:
                fresh = self._fresh_id()
                logger.warning('Duplicate note id %s; assigning new id %s', note.id, fresh)
                note.id = fresh
            self._seen_ids.add(note.id)
            self._notes.append(note)
        if not self._notes:
            self.bootstrapped_note_id = self._append_default().id

    @classmethod
    def bootstrap(cls, loaded: Iterable[Note]) -> NoteCollection:
        """Builds a collection from notes loaded from storage.

        If there are none, the collection gets one default note and :attr:`bootstrapped_note_id` is set to it.
        """
        return cls(loaded)

    def _fresh_id(self) -> str:
        note_id = new_note_id()
        while note_id in self._seen_ids:
            note_id = new_note_id()
        return note_id

    def _append_default(self) -> Note:
        note = Note.create(note_id=self._fresh_id())
        self._seen_ids.add(note.id)
        self._notes.append(note)
        return note

    def add_note(self) -> Note:
        """Appends a new note titled "New Note" with empty content, and returns it."""
        return self._append_default()

    def delete_note(self, note_id: str) -> None:
        """Removes the note with the given id. Does nothing if there is no such note.

        If that was the last note, a new default note is created so the collection stays non-empty.
        """
        self._notes = [n for n in self._notes if n.id != note_id]
        if not self._notes:
            self._append_default()

    def find(self, note_id: Optional[str]) -> Optional[Note]:
        """Returns the note with the given id, or None.

        The returned instance is the one held by the collection, not a copy.
        """
        if note_id is None:
            return None
        for note in self._notes:
            if note.id == note_id:
                return note
        return None

    def update(self, note_id: str, title: Optional[str] = None, content: Optional[str] = None) -> bool:
        """Sets the title and/or content of a note. Fields passed as None are left alone.

        Returns False if there is no note with the given id.
        """
        note = self.find(note_id)
        if not note:
            return False
        if title is not None:
            note.title = title
        if content is not None:
            note.content = content
        return True

    def summaries(self) -> List[NoteSummary]:
        """Returns the id and display title of each note, in order."""
        return [note.summary() for note in self._notes]

    def snapshot(self) -> List[Note]:
        """Returns copies of the notes, in order, which later edits will not affect."""
        return [Note(n.id, n.title, n.content) for n in self._notes]

    def ids(self) -> List[str]:
        return [n.id for n in self._notes]

    def __iter__(self) -> Iterator[Note]:
        return iter(list(self._notes))

    def __len__(self) -> int:
        return len(self._notes)

    def __contains__(self, note_id) -> bool:
        return self.find(note_id) is not None
