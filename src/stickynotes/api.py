"""Provides the main entry point for using the library, :class:`StickyNotes`"""

from __future__ import annotations
import logging

from stickynotes.collection import NoteCollection
from stickynotes.conf import StickyNotesConf
from stickynotes.controller import ViewController
from stickynotes.store import NoteStore


logger = logging.getLogger(__name__)


class Error(Exception):
    pass


class StickyNotes:
    """Wires the storage, the in-memory collection, and the view controller together.

    Create one instance when the host application starts, and call :meth:`close` (or use the instance as a
    context manager) when it shuts down, which performs the final save.

    .. attribute:: conf
       :type: stickynotes.conf.StickyNotesConf

    .. attribute:: store
       :type: stickynotes.store.NoteStore

    .. attribute:: collection
       :type: stickynotes.collection.NoteCollection

    .. attribute:: controller
       :type: stickynotes.controller.ViewController

    Here's how a presentation layer might drive it:

    .. code-block:: python

       from stickynotes.api import StickyNotes
       from stickynotes.conf import StickyNotesConf
       with StickyNotesConf(store_path='~/notes.json').instantiate() as sn:
           sn.controller.subscribe(lambda ctl: print(ctl.mode, ctl.summaries()))
           note = sn.controller.add()
           sn.controller.edit_content('Call Bob')
           sn.controller.back()
    """

    @staticmethod
    def for_user() -> StickyNotes:
        """Creates an instance using the user's ``~/.stickynotes.conf.py`` file.

        Raises :exc:`Exception` if it does not exist or does not define configuration.
        """
        return StickyNotesConf.for_user().instantiate()

    def __init__(self, conf: StickyNotesConf):
        if not conf.store_path:
            raise Error('`store_path` must be set in StickyNotesConf.')
        self.conf = conf
        conf.configure_logging()
        self.store = NoteStore(conf.store_path)
        self.collection = NoteCollection.bootstrap(self.store.load())
        self.controller = ViewController(self.collection, self.store, background=conf.background_saves)
        logger.info('Opened %d notes from %s', len(self.collection), conf.store_path)
        self._closed = False

    def close(self) -> bool:
        """Saves the notes for the last time and waits for any queued saves to finish.

        Returns whether the final save succeeded (or, with background saves, was queued).
        """
        if self._closed:
            return bool(self.controller.last_save_ok)
        self._closed = True
        try:
            return self.controller.teardown()
        finally:
            self.store.close()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
