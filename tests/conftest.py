"""
Pytest fixtures and configuration for GameShelf tests
"""
import pytest

from gameshelf.app import create_app
from gameshelf.db import db
from gameshelf.sessions import MemorySessionStore

TEST_PASSWORD = 'secret123'


@pytest.fixture(scope='session')
def app_config():
    """App configuration for tests"""
    return {
        'TESTING': True,
        'SECRET_KEY': 'test-secret-key',
        'SQLALCHEMY_DATABASE_URI': 'sqlite://',
        'RATELIMIT_ENABLED': False,
        'SEED_SAMPLE_DATA': False,
    }


@pytest.fixture
def session_store():
    """In-memory session store shared with the app under test"""
    return MemorySessionStore()


@pytest.fixture
def app(app_config, session_store):
    """Flask app on a fresh in-memory database"""
    _app = create_app(config=app_config, session_store=session_store)
    # Requests push their own app context, so g and db.session stay per request
    yield _app
    with _app.app_context():
        db.session.remove()
        db.drop_all()


@pytest.fixture
def client(app):
    """Anonymous test client"""
    yield app.test_client()


def register_user(client, username='tester', email='tester@example.com', password=TEST_PASSWORD, confirm=None):
    return client.post('/api/auth/register', json={
        'username': username,
        'email': email,
        'password': password,
        'confirmPassword': password if confirm is None else confirm,
    })


def login_user(client, username='tester', password=TEST_PASSWORD):
    return client.post('/api/auth/login', json={'username': username, 'password': password})


@pytest.fixture
def auth_client(app):
    """Test client with a registered and logged-in user"""
    client = app.test_client()
    assert register_user(client).status_code == 201
    assert login_user(client).status_code == 200
    yield client


@pytest.fixture
def create_genre(auth_client):
    """Factory creating a genre through the API and returning its JSON"""
    def _create(name='Action', description=None):
        response = auth_client.post('/api/genres', json={'name': name, 'description': description})
        assert response.status_code == 201, response.get_json()
        return response.get_json()['genre']
    return _create


@pytest.fixture
def create_platform(auth_client):
    """Factory creating a platform through the API and returning its JSON"""
    def _create(name='PC', manufacturer=None, releaseYear=None):
        response = auth_client.post('/api/platforms', json={
            'name': name,
            'manufacturer': manufacturer,
            'releaseYear': releaseYear,
        })
        assert response.status_code == 201, response.get_json()
        return response.get_json()['platform']
    return _create


@pytest.fixture
def create_game(auth_client):
    """Factory creating a game through the API and returning its JSON"""
    def _create(genre, platform, name='Test Game', **fields):
        payload = {'name': name, 'genreId': genre['id'], 'platformId': platform['id']}
        payload.update(fields)
        response = auth_client.post('/api/games', json=payload)
        assert response.status_code == 201, response.get_json()
        return response.get_json()['game']
    return _create


@pytest.fixture
def genre(create_genre):
    return create_genre('Action', 'High-energy games')


@pytest.fixture
def platform(create_platform):
    return create_platform('Nintendo Switch', 'Nintendo', 2017)


@pytest.fixture
def register():
    """Helper posting a registration form"""
    return register_user


@pytest.fixture
def login():
    """Helper posting login credentials"""
    return login_user
