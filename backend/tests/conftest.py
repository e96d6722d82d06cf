# backend/tests/conftest.py
import pytest

from app import create_app
from models import db as _db

TEST_EMAIL = 'painter@example.com'
TEST_PASSWORD = 'brush-strokes'


@pytest.fixture
def app():
    app = create_app('testing')
    yield app
    with app.app_context():
        _db.session.remove()
        _db.drop_all()


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def auth_client(client):
    """A test client with a signed-in user"""
    response = client.post('/api/auth/signup', json={
        'email': TEST_EMAIL,
        'password': TEST_PASSWORD
    })
    assert response.status_code == 201
    return client


@pytest.fixture
def make_customer(auth_client):
    def _make(name='Dana Whitfield', **fields):
        payload = dict(fields, name=name)
        response = auth_client.post('/api/customers', json=payload)
        assert response.status_code == 201
        return response.get_json()
    return _make


@pytest.fixture
def make_estimate(auth_client, make_customer):
    def _make(items=None, customer_id=None):
        if customer_id is None:
            customer_id = make_customer()['id']
        if items is None:
            items = [
                {'label': 'Walls', 'quantity': 2, 'rate': 50},
                {'label': 'Trim', 'quantity': 1, 'rate': 10},
            ]
        response = auth_client.post('/api/estimates', json={
            'customer_id': customer_id,
            'items': items
        })
        assert response.status_code == 201
        return response.get_json()
    return _make
