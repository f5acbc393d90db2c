import json
import os.path
from pathlib import Path
import pytest
from stickynotes.api import Error, StickyNotes
from stickynotes.conf import StickyNotesConf, user_conf_path
from stickynotes.models import ViewMode


PATH = '/data/notes.json'


def config(**kwargs):
    return StickyNotesConf(store_path=PATH, **kwargs)


def test_for_user_no_file(fs):
    with pytest.raises(Exception, match=r'You need to create the config file'):
        StickyNotes.for_user()


def test_for_user(fs):
    confpy = """from stickynotes.conf import *
conf = StickyNotesConf(store_path='~/notes.json')"""
    fs.create_file(user_conf_path(), contents=confpy)
    sn = StickyNotes.for_user()
    assert sn.conf == StickyNotesConf(store_path=os.path.expanduser('~/notes.json'))
    sn.close()
    assert Path(os.path.expanduser('~/notes.json')).is_file()


def test_requires_store_path():
    with pytest.raises(Error):
        StickyNotes(StickyNotesConf(store_path=''))


def test_first_run(fs):
    with config().instantiate() as sn:
        assert sn.controller.mode == ViewMode.EDITOR
        note = sn.controller.active_note()
        sn.controller.edit_title('Groceries')
        sn.controller.edit_content('Milk')
    assert json.loads(Path(PATH).read_text(encoding='utf-8')) == [
        {'id': note.id, 'title': 'Groceries', 'content': 'Milk'}]


def test_second_run_starts_in_list(fs):
    with config().instantiate() as sn:
        first_id = sn.controller.active_note_id
        sn.controller.add()
    with config().instantiate() as sn:
        assert sn.controller.mode == ViewMode.LIST
        assert [s.title for s in sn.controller.summaries()] == ['New Note', 'New Note']
        assert sn.collection.ids()[0] == first_id


def test_malformed_file_bootstraps(fs):
    fs.create_file(PATH, contents='{"oops"')
    with config().instantiate() as sn:
        assert len(sn.collection) == 1
        assert sn.controller.mode == ViewMode.EDITOR


def test_close_twice(fs):
    sn = config(background_saves=True).instantiate()
    sn.controller.edit_content('Milk')
    assert sn.close()
    assert sn.close()
    assert json.loads(Path(PATH).read_text(encoding='utf-8'))[0]['content'] == 'Milk'


def test_close_with_unencodable_text(fs):
    sn = config().instantiate()
    sn.controller.edit_content('bad \ud800')
    assert not sn.close()
    assert not Path(PATH).exists()
    assert os.listdir('/data') == []


def test_checkpoint_after_close_saves_without_thread(fs):
    sn = config(background_saves=True).instantiate()
    sn.close()
    sn.controller.edit_content('Late edit')
    assert sn.controller.close()
    assert sn.store._executor is None
    assert json.loads(Path(PATH).read_text(encoding='utf-8'))[0]['content'] == 'Late edit'
