from __future__ import annotations
from dataclasses import dataclass, replace
import logging
from logging.handlers import RotatingFileHandler
import os.path
from typing import Optional


LOG_FORMAT = '%(asctime)s [%(levelname)s] %(name)s: %(message)s'
LOG_DATE_FORMAT = '%Y-%m-%d %H:%M:%S'


def user_conf_path() -> str:
    return os.path.expanduser(os.path.join('~', '.stickynotes.conf.py'))


@dataclass
class StickyNotesConf:
    store_path: str
    """Path of the JSON file the notes are kept in.

    The file and its parent directories are created on the first save if they do not exist.
    """

    log_path: Optional[str] = None
    """If set, log messages from the ``stickynotes`` loggers are also written to this file, which is rotated
    when it reaches 1 MiB.

    When this is None, the library leaves logging configuration entirely to the host application.
    """

    background_saves: bool = False
    """If True, checkpoints queue their saves on a background thread instead of writing before returning.

    Queued saves still happen one at a time and in order. :meth:`stickynotes.api.StickyNotes.close` waits for
    them to finish.
    """

    @classmethod
    def for_user(cls) -> StickyNotesConf:
        """Loads the config from ``~/.stickynotes.conf.py``, which must assign an instance to the variable ``conf``.

        For example:

        .. code-block:: python

           from stickynotes.conf import *
           conf = StickyNotesConf(store_path='~/.local/share/stickynotes/notes.json')
        """
        path = user_conf_path()
        if not os.path.exists(path):
            raise Exception(f'You need to create the config file: {path}')
        with open(path, 'r') as file:
            conf_script = file.read()
        context = {}
        exec(conf_script, context)
        if 'conf' not in context or not isinstance(context['conf'], cls):
            raise Exception('You need to assign an instance of StickyNotesConf to the variable `conf` '
                            f'in your config file: {path}')
        return context['conf']

    def standardize(self):
        return replace(
            self,
            store_path=os.path.abspath(os.path.expanduser(self.store_path)),
            log_path=os.path.abspath(os.path.expanduser(self.log_path)) if self.log_path else None
        )

    def configure_logging(self) -> Optional[logging.Handler]:
        """Attaches a rotating file handler for :attr:`log_path` to the ``stickynotes`` logger.

        Does nothing if :attr:`log_path` is unset or a handler for that file is already attached.
        Returns the handler in use, if any.
        """
        if not self.log_path:
            return None
        path = os.path.abspath(os.path.expanduser(self.log_path))
        logger = logging.getLogger('stickynotes')
        for handler in logger.handlers:
            if isinstance(handler, RotatingFileHandler) and handler.baseFilename == path:
                return handler
        os.makedirs(os.path.dirname(path), exist_ok=True)
        handler = RotatingFileHandler(path, maxBytes=1_048_576, backupCount=5, encoding='utf-8')
        handler.setFormatter(logging.Formatter(fmt=LOG_FORMAT, datefmt=LOG_DATE_FORMAT))
        logger.addHandler(handler)
        if logger.level == logging.NOTSET:
            logger.setLevel(logging.INFO)
        return handler

    def instantiate(self):
        from stickynotes.api import StickyNotes
        return StickyNotes(self.standardize())
