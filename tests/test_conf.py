import logging
import os.path
from logging.handlers import RotatingFileHandler
import pytest
from stickynotes.conf import StickyNotesConf, user_conf_path


@pytest.fixture
def clean_logger():
    logger = logging.getLogger('stickynotes')
    handlers = list(logger.handlers)
    level = logger.level
    yield logger
    for handler in logger.handlers:
        if handler not in handlers:
            handler.close()
            logger.removeHandler(handler)
    logger.setLevel(level)


def test_user_conf_path():
    assert user_conf_path() == os.path.expanduser('~/.stickynotes.conf.py')


def test_for_user_no_file(fs):
    with pytest.raises(Exception, match=r'You need to create the config file: .*\.stickynotes\.conf\.py'):
        StickyNotesConf.for_user()


def test_for_user_no_conf_variable(fs):
    fs.create_file(user_conf_path(), contents='store_path = "/notes.json"')
    with pytest.raises(Exception, match=r'assign an instance of StickyNotesConf'):
        StickyNotesConf.for_user()


def test_for_user(fs):
    confpy = """from stickynotes.conf import *
conf = StickyNotesConf(store_path='/data/notes.json', background_saves=True)"""
    fs.create_file(user_conf_path(), contents=confpy)
    assert StickyNotesConf.for_user() == StickyNotesConf(store_path='/data/notes.json', background_saves=True)


def test_standardize(fs):
    fs.cwd = '/cwd'
    conf = StickyNotesConf(store_path='notes.json', log_path='~/logs/stickynotes.log').standardize()
    assert conf.store_path == '/cwd/notes.json'
    assert conf.log_path == os.path.expanduser('~/logs/stickynotes.log')
    assert StickyNotesConf(store_path='~/notes.json').standardize().log_path is None


def test_configure_logging_disabled(clean_logger):
    assert StickyNotesConf(store_path='/data/notes.json').configure_logging() is None


def test_configure_logging(fs, clean_logger):
    conf = StickyNotesConf(store_path='/data/notes.json', log_path='/logs/stickynotes.log')
    handler = conf.configure_logging()
    assert isinstance(handler, RotatingFileHandler)
    assert conf.configure_logging() is handler
    assert sum(1 for h in clean_logger.handlers if h is handler) == 1
    logging.getLogger('stickynotes.store').warning('Something happened')
    handler.flush()
    with open('/logs/stickynotes.log', encoding='utf-8') as file:
        text = file.read()
    assert '[WARNING] stickynotes.store: Something happened' in text
