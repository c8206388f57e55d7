"""Shared fixtures: every test gets its own data files and uploads folder."""

import pytest

from jobboard import create_app
from jobboard.listings import ListingStore
from jobboard.messaging import MessageStore
from jobboard.storage import JsonDocument
from jobboard.users import CredentialStore

PASSWORD = 'Abcd123!'


@pytest.fixture
def data_dir(tmp_path):
    return tmp_path


@pytest.fixture
def upload_folder(data_dir):
    folder = data_dir / 'uploads'
    folder.mkdir()
    return folder


@pytest.fixture
def users(data_dir) -> CredentialStore:
    return CredentialStore(JsonDocument(str(data_dir / 'users.txt')))


@pytest.fixture
def listings(users, upload_folder) -> ListingStore:
    return ListingStore(users, str(upload_folder))


@pytest.fixture
def messages(data_dir, users) -> MessageStore:
    return MessageStore(JsonDocument(str(data_dir / 'messages.txt')), users)


@pytest.fixture
def alice(users) -> int:
    users.create_account(PASSWORD, 'alice@example.com', 'Alice', 'Smith', 'Duluth')
    return users.authenticate('alice@example.com', PASSWORD)


@pytest.fixture
def static_folder(data_dir):
    folder = data_dir / 'static'
    folder.mkdir()
    (folder / 'login.html').write_text('<h1>Login</h1>')
    (folder / 'app.js').write_text('console.log("hi");')
    (folder / 'style.css').write_text('body {}')
    return folder


@pytest.fixture
def app(data_dir, static_folder):
    return create_app({
        'TESTING': True,
        'USERS_FILE': str(data_dir / 'users.txt'),
        'MESSAGES_FILE': str(data_dir / 'messages.txt'),
        'UPLOAD_FOLDER': str(data_dir / 'app_uploads'),
        'STATIC_FOLDER': str(static_folder),
    })


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def post(client):
    """POST a command and return (status, json)."""
    def _post(cmd, **fields):
        resp = client.post('/', json={'cmd': cmd, **fields})
        return resp.status_code, resp.get_json()
    return _post


@pytest.fixture
def signed_up(post):
    """Sign up alice and bob through the HTTP surface."""
    for email, first in (('alice@example.com', 'Alice'), ('bob@example.com', 'Bob')):
        status, _ = post('sign_up', email=email, password=PASSWORD,
                         first_name=first, last_name='Smith', location='Duluth')
        assert status == 200
    return {
        'alice': {'email': 'alice@example.com', 'password': PASSWORD},
        'bob': {'email': 'bob@example.com', 'password': PASSWORD},
    }
