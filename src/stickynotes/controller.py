"""Provides the :class:`ViewController` class, which decides which note (if any) is being edited.

A presentation layer should call the event methods (:meth:`ViewController.select`, :meth:`ViewController.add`,
:meth:`ViewController.delete`, :meth:`ViewController.back`, :meth:`ViewController.edit_title`,
:meth:`ViewController.edit_content`, :meth:`ViewController.close`) from its widget callbacks, and re-render from
the query methods whenever a subscribed listener fires. Nothing here depends on a particular UI toolkit.
"""

from __future__ import annotations
import logging
from typing import Callable, List, Optional

from stickynotes.collection import NoteCollection
from stickynotes.models import EditorFields, Note, NoteSummary, ViewMode
from stickynotes.store import NoteStore


logger = logging.getLogger(__name__)

Listener = Callable[['ViewController'], None]


class ViewController:
    """Two-state machine over a :class:`stickynotes.collection.NoteCollection`: listing notes, or editing one.

    The initial state is editing the bootstrapped default note if the collection just created one, and the list
    otherwise.

    The collection is saved through the :class:`stickynotes.store.NoteStore` only at checkpoints: leaving the
    editor (:meth:`back`), :meth:`close`, and :meth:`teardown`. Edits themselves never trigger a save.

    .. attribute:: editor_source
       :type: Optional[Callable[[], EditorFields]]

       Set this if the editor widgets hold text that has not been passed to :meth:`edit_title` or
       :meth:`edit_content` yet. It is called whenever pending edits are flushed, and the fields it returns are
       copied onto the active note.

    .. attribute:: last_save_ok
       :type: Optional[bool]

       Result of the most recent checkpoint save, or None if none has happened yet. With background saves it is
       True while a save is queued, and is updated with the real result once the save finishes.
    """
    def __init__(self, collection: NoteCollection, store: NoteStore, *, background: bool = False):
        self.collection = collection
        self.store = store
        self.background = background
        self.editor_source: Optional[Callable[[], EditorFields]] = None
        self.last_save_ok: Optional[bool] = None
        self._listeners: List[Listener] = []
        self._torn_down = False
        self._mode = ViewMode.LIST
        self._active_note_id: Optional[str] = None
        if collection.bootstrapped_note_id:
            self._open(collection.bootstrapped_note_id)

    @property
    def mode(self) -> ViewMode:
        return self._mode

    @property
    def active_note_id(self) -> Optional[str]:
        """Id of the note being edited, or None in list mode."""
        return self._active_note_id if self._mode == ViewMode.EDITOR else None

    def active_note(self) -> Optional[Note]:
        """Returns the note being edited, or None in list mode.

        If the active note no longer exists, this switches back to list mode and returns None.
        """
        if self._mode != ViewMode.EDITOR:
            return None
        note = self.collection.find(self._active_note_id)
        if not note:
            logger.warning('Active note %s no longer exists; returning to list', self._active_note_id)
            self._show_list()
        return note

    def summaries(self) -> List[NoteSummary]:
        return self.collection.summaries()

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Registers a callable to be invoked with this controller after the mode or the set of notes changes.

        Returns a function that removes the listener.
        """
        self._listeners.append(listener)

        def unsubscribe():
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _notify(self) -> None:
        for listener in list(self._listeners):
            try:
                listener(self)
            except Exception:
                logger.exception('Error in view listener %r', listener)

    def _open(self, note_id: str) -> bool:
        if not self.collection.find(note_id):
            return False
        self._mode = ViewMode.EDITOR
        self._active_note_id = note_id
        return True

    def _show_list(self) -> None:
        self._mode = ViewMode.LIST
        self._active_note_id = None
        self._notify()

    def flush(self) -> None:
        """Copies any text pending in :attr:`editor_source` onto the active note."""
        if self._mode != ViewMode.EDITOR or self.editor_source is None:
            return
        fields = self.editor_source()
        if fields and not self.collection.update(self._active_note_id, fields.title, fields.content):
            logger.warning('Discarding pending edits for missing note %s', self._active_note_id)

    def checkpoint(self) -> bool:
        """Flushes pending edits and saves the whole collection. Returns whether the save succeeded."""
        self.flush()
        if self.background:
            self.last_save_ok = True
            self.store.submit(self.collection).add_done_callback(self._record_background_save)
        else:
            self.last_save_ok = self.store.save(self.collection.snapshot())
        return self.last_save_ok

    def _record_background_save(self, future) -> None:
        error = future.exception()
        if error is not None:
            logger.error('Background save failed', exc_info=error)
            self.last_save_ok = False
        else:
            self.last_save_ok = future.result()

    def select(self, note_id: str) -> bool:
        """Starts editing the given note.

        Returns False, changing nothing, if there is no such note.
        """
        if not self.collection.find(note_id):
            logger.debug('Ignoring selection of unknown note %s', note_id)
            return False
        self.flush()
        self._open(note_id)
        self._notify()
        return True

    def add(self) -> Note:
        """Creates a new note at the end of the list and starts editing it."""
        self.flush()
        note = self.collection.add_note()
        self._open(note.id)
        self._notify()
        return note

    def delete(self, note_id: str) -> None:
        """Deletes the given note, if it exists, and shows the list."""
        self.flush()
        self.collection.delete_note(note_id)
        self._show_list()

    def back(self) -> bool:
        """Leaves the editor for the list, saving the collection.

        Returns False without saving if the list is already shown.
        """
        if self._mode != ViewMode.EDITOR:
            return False
        self.checkpoint()
        self._show_list()
        return True

    def edit_title(self, title: str) -> None:
        """Sets the title of the note being edited. Ignored in list mode."""
        note = self.active_note()
        if note:
            note.title = title

    def edit_content(self, content: str) -> None:
        """Sets the content of the note being edited. Ignored in list mode."""
        note = self.active_note()
        if note:
            note.content = content

    def close(self) -> bool:
        """Call when the notes surface is hidden. Saves the collection but leaves the mode as it is."""
        return self.checkpoint()

    def teardown(self) -> bool:
        """Performs the final save. Later calls do nothing and return the result of the first."""
        if self._torn_down:
            return self.last_save_ok
        self._torn_down = True
        return self.checkpoint()
