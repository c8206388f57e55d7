import json
import os

from jobboard.storage import JsonDocument


def test_missing_file_is_created_empty(tmp_path):
    path = tmp_path / 'nested' / 'users.txt'
    assert JsonDocument(str(path)).load() == []
    assert json.loads(path.read_text()) == []


def test_corrupt_file_is_reset(tmp_path):
    path = tmp_path / 'users.txt'
    path.write_text('{not json')
    assert JsonDocument(str(path)).load() == []
    assert json.loads(path.read_text()) == []


def test_non_array_document_is_reset(tmp_path):
    path = tmp_path / 'users.txt'
    path.write_text('{"email": "a@b.c"}')
    assert JsonDocument(str(path)).load() == []


def test_empty_file_reads_as_empty(tmp_path):
    path = tmp_path / 'messages.txt'
    path.write_text('')
    assert JsonDocument(str(path)).load() == []


def test_save_replaces_whole_document(tmp_path):
    path = tmp_path / 'users.txt'
    doc = JsonDocument(str(path))
    doc.save([{'email': 'a'}, {'email': 'b'}])
    doc.save([{'email': 'c'}])

    assert JsonDocument(str(path)).load() == [{'email': 'c'}]
    # two-space indentation, no leftover temp files
    assert '\n  {' in path.read_text()
    assert os.listdir(tmp_path) == ['users.txt']
