"""Defines the classes for representing notes and the state of the note views.

The most important class is :class:`Note`.
"""

from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from typing import Optional

import shortuuid


DEFAULT_TITLE = 'New Note'
"""Title given to notes created by :meth:`Note.create` and by bootstrapping an empty collection."""

UNTITLED = 'Untitled'
"""Shown in place of an empty title. It is never written into the note itself."""


def new_note_id() -> str:
    """Returns a random UUID (version 4), encoded compactly by shortuuid."""
    return shortuuid.uuid()


@dataclass
class Note:
    """A single note.

    Instances are owned by a :class:`stickynotes.collection.NoteCollection`. The instance returned by
    :meth:`stickynotes.collection.NoteCollection.find` is the canonical one, so assigning to its
    :attr:`title` or :attr:`content` is immediately visible to later lookups and is captured by the next save.
    """

    id: str
    """Opaque unique identifier. It should never be changed after the note is created."""

    title: str = DEFAULT_TITLE
    """Free-form title. May be empty; see :meth:`display_title`."""

    content: str = ''
    """Free-form body text."""

    @classmethod
    def create(cls, title: str = DEFAULT_TITLE, content: str = '', note_id: Optional[str] = None) -> Note:
        """Creates a note with a freshly generated id, unless one is given."""
        return cls(note_id or new_note_id(), title, content)

    @classmethod
    def from_json(cls, obj) -> Note:
        """Builds a note from a decoded JSON object.

        Raises :exc:`ValueError` if the object is not a dict or if ``id``, ``title`` or ``content`` is missing or
        is not a string. Any other keys are ignored.
        """
        if not isinstance(obj, dict):
            raise ValueError(f'Expected a JSON object for a note, got: {type(obj).__name__}')
        for key in ('id', 'title', 'content'):
            if not isinstance(obj.get(key), str):
                raise ValueError(f'Note field [{key}] is missing or is not a string: {obj!r}')
        return cls(obj['id'], obj['title'], obj['content'])

    def as_json(self) -> dict:
        """Returns a dict representing the instance, suitable for serializing as json."""
        return {
            'id': self.id,
            'title': self.title,
            'content': self.content
        }

    def display_title(self) -> str:
        """Returns the title, or :data:`UNTITLED` if the title is empty."""
        return self.title or UNTITLED

    def summary(self) -> NoteSummary:
        return NoteSummary(self.id, self.display_title())


@dataclass(frozen=True)
class NoteSummary:
    """One row of the note list, as handed to whatever renders it."""

    id: str

    title: str
    """The display title, i.e. already falls back to :data:`UNTITLED`."""


class ViewMode(Enum):
    LIST = 'list'
    EDITOR = 'editor'


@dataclass
class EditorFields:
    """Text currently held by an editor surface, which may not have been copied onto the note yet.

    See :attr:`stickynotes.controller.ViewController.editor_source`.
    """

    title: Optional[str] = None
    """New title, or None to leave the title alone."""

    content: Optional[str] = None
    """New content, or None to leave the content alone."""
