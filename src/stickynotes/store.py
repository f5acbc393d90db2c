"""Reads and writes the note collection to a JSON file.

The file holds a JSON array of objects, each with exactly the keys ``id``, ``title`` and ``content``.
The most important class is :class:`NoteStore`.
"""

from __future__ import annotations
from concurrent.futures import Future, ThreadPoolExecutor
import json
import logging
import os
import os.path
from tempfile import mkstemp
import threading
from typing import Iterable, List, Optional

from stickynotes.models import Note


logger = logging.getLogger(__name__)


class ParseError(Exception):
    """Raised when the contents of a notes file cannot be understood."""
    def __init__(self, message: str, path: Optional[str] = None, cause: BaseException = None):
        super().__init__(message)
        self.message = message
        self.path = path
        self.cause = cause


def parse_notes(text: str, path: Optional[str] = None) -> List[Note]:
    """Decodes the notes in the given JSON text, preserving their order.

    Raises :exc:`ParseError` if the text is not a JSON array of note objects.
    ``path`` is only used for error reporting.
    """
    try:
        data = json.loads(text)
    except (ValueError, RecursionError) as e:
        raise ParseError('Invalid JSON', path, e)
    if not isinstance(data, list):
        raise ParseError(f'Expected a JSON array, got: {type(data).__name__}', path)
    notes = []
    for i, obj in enumerate(data):
        try:
            notes.append(Note.from_json(obj))
        except ValueError as e:
            raise ParseError(f'Invalid note at index {i}', path, e)
    return notes


def dump_notes(notes: Iterable[Note]) -> str:
    """Encodes the notes as a JSON array, in the given order."""
    return json.dumps([note.as_json() for note in notes], indent=2, ensure_ascii=False)


class NoteStore:
    """Persists notes to a single file.

    Neither :meth:`load` nor :meth:`save` raise for I/O problems: load falls back to an empty list, and save
    reports failure through its return value and the log. The caller's in-memory notes remain authoritative.

    Writes go to a temporary file in the same directory which then replaces the target, so readers never see a
    partially written file.

    .. attribute:: path
       :type: str
    """
    def __init__(self, path: str):
        self.path = path
        self._lock = threading.Lock()
        self._executor = None
        self._closed = False

    def load(self) -> List[Note]:
        """Returns the notes in the file, or an empty list if it is missing, unreadable, or malformed."""
        try:
            with open(self.path, 'r', encoding='utf-8-sig') as file:
                text = file.read()
        except FileNotFoundError:
            logger.debug('No notes file at %s', self.path)
            return []
        except (OSError, UnicodeDecodeError) as e:
            logger.warning('Could not read notes file %s: %s', self.path, e)
            return []
        try:
            notes = parse_notes(text, self.path)
        except ParseError as e:
            logger.warning('Ignoring malformed notes file %s: %s (%s)', self.path, e.message, e.cause)
            return []
        logger.debug('Loaded %d notes from %s', len(notes), self.path)
        return notes

    def save(self, notes: Iterable[Note]) -> bool:
        """Replaces the file's contents with the given notes.

        Returns True on success. On failure, logs the error and returns False; any previous contents of the file
        are left in place. Text that cannot be encoded as UTF-8 (such as lone surrogates) counts as a failure.
        """
        text = dump_notes(notes)
        with self._lock:
            try:
                self._write(text)
            except (OSError, ValueError):
                logger.exception('Error saving notes to %s', self.path)
                return False
        logger.debug('Saved notes to %s', self.path)
        return True

    def _write(self, text: str) -> None:
        parent = os.path.dirname(os.path.abspath(self.path))
        os.makedirs(parent, exist_ok=True)
        fd, tmp = mkstemp(prefix=f'.{os.path.basename(self.path)}.', suffix='.tmp', dir=parent)
        try:
            with os.fdopen(fd, 'w', encoding='utf-8') as file:
                file.write(text)
                file.flush()
                os.fsync(file.fileno())
            os.replace(tmp, self.path)
        except BaseException:
            if os.path.exists(tmp):
                os.remove(tmp)
            raise

    def submit(self, notes: Iterable[Note]) -> Future:
        """Queues a save of the notes as they are right now, and returns a Future for the result of :meth:`save`.

        Queued saves run one at a time in the order they were submitted, so the last one submitted wins.
        After :meth:`close`, the save happens before this returns and the Future is already done.
        """
        snapshot = [Note(n.id, n.title, n.content) for n in notes]
        if self._closed:
            logger.debug('Store for %s is closed; saving synchronously', self.path)
            future = Future()
            future.set_result(self.save(snapshot))
            return future
        if self._executor is None:
            self._executor = ThreadPoolExecutor(max_workers=1, thread_name_prefix='stickynotes-save')
        return self._executor.submit(self.save, snapshot)

    def close(self) -> None:
        """Waits for any queued saves to finish. Should be called when you're done with an instance.

        Later calls to :meth:`submit` still save, but without a background thread.
        """
        self._closed = True
        if self._executor is not None:
            self._executor.shutdown(wait=True)
            self._executor = None
