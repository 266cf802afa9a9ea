"""
Integration tests for the Flask routes.
"""

import io
import shutil
from pathlib import Path

import pytest

from app import app as flask_app
from src.chat_import import FileTooLargeError
from src.config import Config
from src.web.services import conversation_loader


FIXTURES = Path(__file__).parent.parent / "fixtures"


@pytest.fixture
def client():
    flask_app.config['TESTING'] = True
    with flask_app.test_client() as client:
        yield client


@pytest.fixture
def texts(tmp_path, monkeypatch):
    monkeypatch.setattr(Config, 'TEXTS_DIR', str(tmp_path))
    conversation_loader.clear_cache()
    for name in ("vscode_chat.json", "conversations.json", "empty_export.json"):
        shutil.copy(FIXTURES / name, tmp_path / name)
    (tmp_path / "notes.txt").write_text("ignored", encoding="utf-8")
    yield tmp_path
    conversation_loader.clear_cache()


def _upload(client, url, raw, filename):
    return client.post(
        url,
        data={'file': (io.BytesIO(raw), filename)},
        content_type='multipart/form-data',
    )


class TestUploadApi:
    def test_upload_tagged_export(self, client):
        raw = (FIXTURES / "vscode_chat.json").read_bytes()
        resp = _upload(client, '/api/upload', raw, 'chat.json')

        assert resp.status_code == 200
        data = resp.get_json()
        assert data['success'] is True
        assert data['file_name'] == 'chat.json'
        assert data['conversation_count'] == 3
        assert [e['number'] for e in data['exchanges']] == [1, 2, 3]
        assert data['exchanges'][0]['label'] == '1. How do I reverse a list in Python?'
        assert data['exchanges'][0]['source_kind'] == 'tagged'
        assert data['exchanges'][0]['request_id'] == 'request_1'

    def test_response_keys_keep_document_order(self, client):
        raw = b'{"messages": [{"role": "user", "content": "Q"}, {"role": "assistant", "z": 1, "a": 2}]}'
        resp = _upload(client, '/api/upload', raw, 'chat.json')

        response = resp.get_json()['exchanges'][0]['response']
        assert list(response) == ['role', 'z', 'a']

    def test_long_prompt_is_truncated_in_label(self, client):
        prompt = 'x' * 150
        raw = ('{"messages": [{"role": "user", "content": "%s"}]}' % prompt).encode()
        entry = _upload(client, '/api/upload', raw, 'chat.json').get_json()['exchanges'][0]

        assert entry['label'] == '1. ' + 'x' * Config.PROMPT_LABEL_MAX_CHARS + '...'
        assert entry['prompt'] == prompt
        assert entry['response_json'] == 'null'

    def test_wrong_file_type(self, client):
        resp = _upload(client, '/api/upload', b'{}', 'chat.txt')
        assert resp.status_code == 400
        assert resp.get_json()['kind'] == 'UNSUPPORTED_FILE_TYPE'
        assert resp.get_json()['error'] == 'Please select a JSON file.'

    def test_malformed_json(self, client):
        resp = _upload(client, '/api/upload', (FIXTURES / "broken.json").read_bytes(), 'broken.json')
        assert resp.status_code == 400
        assert resp.get_json()['kind'] == 'MALFORMED_INPUT'

    def test_no_conversations(self, client):
        resp = _upload(client, '/api/upload', b'{}', 'empty.json')
        assert resp.status_code == 422
        data = resp.get_json()
        assert data['success'] is False
        assert data['error'] == 'No valid conversations found in the JSON file.'

    def test_missing_file_field(self, client):
        resp = client.post('/api/upload')
        assert resp.status_code == 400


class TestViewPage:
    def test_index(self, client):
        resp = client.get('/')
        assert resp.status_code == 200
        assert b'Chat Prompt Viewer' in resp.data

    def test_view_renders_accordion(self, client):
        raw = (FIXTURES / "conversations.json").read_bytes()
        resp = _upload(client, '/view', raw, 'conversations.json')

        assert resp.status_code == 200
        html = resp.get_data(as_text=True)
        assert 'Conversations found:</strong> 2' in html
        assert '1. What is 2+2?' in html
        assert '3. Bonjour' in html
        assert html.count('class="accordion-item"') == 3

    def test_accordion_opens_one_item_at_a_time(self, client):
        raw = (FIXTURES / "conversations.json").read_bytes()
        html = _upload(client, '/view', raw, 'conversations.json').get_data(as_text=True)

        assert html.count('<details class="accordion-item" name="exchange">') == 3
        assert "addEventListener('toggle'" in html

    def test_view_shows_error_banner(self, client):
        resp = _upload(client, '/view', b'not json', 'chat.json')

        assert resp.status_code == 400
        html = resp.get_data(as_text=True)
        assert 'Invalid JSON file. Please check the file format.' in html
        assert 'class="accordion-item"' not in html


class TestTextsApi:
    def test_list_files(self, client, texts):
        data = client.get('/api/files').get_json()
        assert data['success'] is True
        assert sorted(f['name'] for f in data['files']) == ['conversations.json', 'empty_export.json', 'vscode_chat.json']

    def test_load_file(self, client, texts):
        resp = client.post('/api/load', json={'filename': 'conversations.json'})
        assert resp.status_code == 200

        data = resp.get_json()
        assert data['success'] is True
        assert data['file_name'] == 'conversations.json'
        assert data['conversation_count'] == 2
        assert data['exchange_count'] == 3
        assert len(data['warnings']) == 1
        assert 'exchanges' not in data

    def test_load_file_errors(self, client, texts):
        assert client.post('/api/load', json={}).status_code == 400
        assert client.post('/api/load', json={'filename': 'notes.txt'}).status_code == 400
        assert client.post('/api/load', json={'filename': '../escape.json'}).status_code == 400
        assert client.post('/api/load', json={'filename': 'missing.json'}).status_code == 404

    def test_load_file_without_conversations(self, client, texts):
        resp = client.post('/api/load', json={'filename': 'empty_export.json'})
        assert resp.status_code == 422
        assert resp.get_json()['kind'] == 'NO_CONVERSATIONS_FOUND'

    def test_oversized_texts_file_is_rejected(self, client, texts, monkeypatch):
        monkeypatch.setattr(Config, 'MAX_FILE_SIZE_MB', 1)
        padding = 'x' * (1024 * 1024 + 10)
        (texts / 'big.json').write_text(
            '{"messages": [{"role": "user", "content": "Hi"}], "pad": "' + padding + '"}',
            encoding='utf-8',
        )

        for resp in (
            client.get('/api/exchanges/big.json'),
            client.post('/api/load', json={'filename': 'big.json'}),
        ):
            assert resp.status_code == 413
            data = resp.get_json()
            assert data['success'] is False
            assert data['kind'] == 'FILE_TOO_LARGE'
            assert data['error'] == 'File is too large.'

        with pytest.raises(FileTooLargeError):
            conversation_loader.load_texts_file('big.json')

    def test_exchanges_paginated(self, client, texts):
        data = client.get('/api/exchanges/conversations.json?page=2&page_size=2').get_json()

        assert data['success'] is True
        assert data['conversation_count'] == 2
        assert data['total'] == 3
        assert data['total_pages'] == 2
        assert [e['number'] for e in data['exchanges']] == [3]
        assert data['exchanges'][0]['conversation_index'] == 1
        assert len(data['warnings']) == 1

    def test_exchanges_page_is_clamped(self, client, texts):
        data = client.get('/api/exchanges/conversations.json?page=0&page_size=-5').get_json()

        assert data['success'] is True
        assert data['page'] == 1
        assert data['page_size'] == 1
        assert data['total_pages'] == 3
        assert [e['number'] for e in data['exchanges']] == [1]

    def test_exchanges_non_integer_page(self, client, texts):
        for query in ('page=abc', 'page_size=1.5'):
            resp = client.get(f'/api/exchanges/conversations.json?{query}')
            assert resp.status_code == 400
            assert resp.get_json()['success'] is False

    def test_exchanges_without_responses(self, client, texts):
        data = client.get('/api/exchanges/vscode_chat.json?include_responses=false').get_json()
        assert 'response' not in data['exchanges'][0]
        assert 'response_json' not in data['exchanges'][0]

    def test_exchanges_errors(self, client, texts):
        assert client.get('/api/exchanges/missing.json').status_code == 404
        assert client.get('/api/exchanges/notes.txt').status_code == 400

        resp = client.get('/api/exchanges/empty_export.json')
        assert resp.status_code == 422
        assert resp.get_json()['kind'] == 'NO_CONVERSATIONS_FOUND'

    def test_texts_file_is_cached(self, client, texts):
        first = conversation_loader.load_texts_file('conversations.json')
        assert conversation_loader.load_texts_file('conversations.json') is first


class TestSystemApi:
    def test_system_info(self, client):
        data = client.get('/api/system/info').get_json()
        assert data['success'] is True
        assert data['max_file_size_mb'] == Config.MAX_FILE_SIZE_MB

    def test_unknown_route(self, client):
        resp = client.get('/api/does-not-exist')
        assert resp.status_code == 404
        assert resp.get_json()['success'] is False
