import os

# theme decides on color at import time; keep output plain for assertions
os.environ['NO_COLOR'] = '1'

import pytest

import storage
from models import Task
from store import TaskStore


@pytest.fixture
def tasks_file(tmp_path, monkeypatch):
    path = tmp_path / 'data' / 'tasks.json'
    monkeypatch.setattr(storage, 'TASKS_FILE', path)
    return path


@pytest.fixture
def three_tasks():
    return TaskStore([Task('Buy milk'), Task('Write report', 'due Friday'), Task('Call mum')])
