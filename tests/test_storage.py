import json
import logging

import pytest

import storage
from models import Task
from storage import CorruptDataError, Storage, StorageWriteError


def test_missing_file_is_empty(tmp_path):
    assert Storage(tmp_path / 'nope' / 'tasks.json').load_tasks() == []


def test_default_path_follows_module_constant(tasks_file):
    assert Storage().path == tasks_file


def test_save_then_load_round_trip(tasks_file):
    tasks = [Task('Buy milk'), Task('Write report', 'due Friday', completed=True)]
    Storage().save_tasks(t.to_dict() for t in tasks)
    loaded = Storage().load_tasks()
    assert [(t.title, t.description, t.completed, t.created_at) for t in loaded] == \
        [(t.title, t.description, t.completed, t.created_at) for t in tasks]


def test_save_writes_pretty_json_list(tasks_file):
    Storage().save_tasks([Task('a').to_dict()])
    text = tasks_file.read_text(encoding='utf-8')
    assert text.startswith('[\n    {')
    assert json.loads(text)[0]['title'] == 'a'
    assert [p.name for p in tasks_file.parent.iterdir()] == ['tasks.json']


@pytest.mark.parametrize('content', ['{not json', '{"title": "x"}', '[{"title": "x", "completed": "no"}]'])
def test_unreadable_file_raises_corrupt(tasks_file, content):
    tasks_file.parent.mkdir(parents=True)
    tasks_file.write_text(content, encoding='utf-8')
    with pytest.raises(CorruptDataError):
        Storage().load_tasks()


def test_directory_creation_failure_is_reported(tmp_path):
    blocker = tmp_path / 'blocker'
    blocker.write_text('a file, not a directory')
    with pytest.raises(StorageWriteError):
        Storage(blocker / 'tasks.json').save_tasks([])


def test_failed_write_keeps_old_file_and_cleans_up(tasks_file, monkeypatch):
    Storage().save_tasks([Task('keep me').to_dict()])
    original = tasks_file.read_bytes()

    def fail_replace(src, dst):
        raise OSError('disk full (simulated)')

    monkeypatch.setattr(storage.os, 'replace', fail_replace)
    with pytest.raises(StorageWriteError, match='simulated'):
        Storage().save_tasks([Task('lost').to_dict()])
    assert tasks_file.read_bytes() == original
    assert [p.name for p in tasks_file.parent.iterdir()] == ['tasks.json']


def test_quarantine_moves_file_aside(tasks_file):
    tasks_file.parent.mkdir(parents=True)
    tasks_file.write_text('garbage')
    first = Storage().quarantine()
    tasks_file.write_text('more garbage')
    second = Storage().quarantine()
    assert not tasks_file.exists()
    assert first.name == 'tasks.json.corrupt'
    assert second.name == 'tasks.json.corrupt.1'
    assert first.read_text() == 'garbage'


def test_non_utf8_file_raises_corrupt(tasks_file):
    tasks_file.parent.mkdir(parents=True)
    tasks_file.write_bytes(b'[{"title": "caf\xe9"}]')
    with pytest.raises(CorruptDataError, match='UTF-8'):
        Storage().load_tasks()


def test_failed_write_is_left_to_the_caller_to_report(tasks_file, monkeypatch, caplog):
    def fail_replace(src, dst):
        raise OSError('read-only file system (simulated)')

    monkeypatch.setattr(storage.os, 'replace', fail_replace)
    with pytest.raises(StorageWriteError):
        Storage().save_tasks([])
    assert [r for r in caplog.records if r.levelno >= logging.ERROR] == []
