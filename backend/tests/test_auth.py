from models import db, User
from routes.auth import generate_confirmation_token
from conftest import TEST_EMAIL, TEST_PASSWORD


def test_signup_signs_in(auth_client):
    response = auth_client.get('/api/auth/me')
    assert response.status_code == 200
    body = response.get_json()
    assert body['authenticated'] is True
    assert body['user']['email'] == TEST_EMAIL


def test_signup_rejects_duplicate_email(auth_client):
    response = auth_client.post('/api/auth/signup', json={
        'email': TEST_EMAIL.upper(),
        'password': TEST_PASSWORD
    })
    assert response.status_code == 400
    assert response.get_json()['error'] == 'User already registered'


def test_signup_validation(client):
    response = client.post('/api/auth/signup', json={'email': 'a@example.com', 'password': '123'})
    assert response.status_code == 400
    assert 'at least 6 characters' in response.get_json()['error']

    response = client.post('/api/auth/signup', json={'email': 'not-an-email', 'password': 'secret123'})
    assert response.status_code == 400

    response = client.post('/api/auth/signup', json={'email': 'a@example.com'})
    assert response.status_code == 400


def test_login_with_wrong_password(auth_client):
    auth_client.post('/api/auth/logout')
    response = auth_client.post('/api/auth/login', json={'email': TEST_EMAIL, 'password': 'wrong-one'})
    assert response.status_code == 401
    assert response.get_json()['error'] == 'Invalid login credentials'


def test_logout_then_login(auth_client):
    response = auth_client.post('/api/auth/logout')
    assert response.status_code == 200
    assert response.get_json()['was_authenticated'] is True

    assert auth_client.get('/api/auth/me').status_code == 401
    assert auth_client.get('/api/auth/session').get_json()['authenticated'] is False

    response = auth_client.post('/api/auth/login', json={'email': TEST_EMAIL, 'password': TEST_PASSWORD})
    assert response.status_code == 200
    assert response.get_json()['user']['last_login'] is not None
    assert auth_client.get('/api/auth/me').status_code == 200


def test_logout_when_signed_out_still_succeeds(client):
    response = client.post('/api/auth/logout')
    assert response.status_code == 200
    assert response.get_json()['was_authenticated'] is False


def test_protected_endpoints_require_login(client):
    for path in ['/api/customers', '/api/jobs', '/api/calendar', '/api/estimates',
                 '/api/quotes', '/api/dashboard']:
        response = client.get(path)
        assert response.status_code == 401, path
        assert response.get_json()['code'] == 'UNAUTHORIZED'


def test_email_confirmation_flow(app, client):
    app.config['AUTH_REQUIRE_EMAIL_CONFIRMATION'] = True

    response = client.post('/api/auth/signup', json={'email': 'new@example.com', 'password': 'secret123'})
    assert response.status_code == 201
    assert response.get_json()['status'] == 'pending_confirmation'
    assert client.get('/api/auth/me').status_code == 401

    response = client.post('/api/auth/login', json={'email': 'new@example.com', 'password': 'secret123'})
    assert response.status_code == 401
    assert response.get_json()['error'] == 'Email not confirmed'

    with app.test_request_context():
        user = User.query.filter_by(email='new@example.com').first()
        token = generate_confirmation_token(user)
        db.session.remove()

    assert client.get('/api/auth/confirm/not-a-token').status_code == 400
    response = client.get(f'/api/auth/confirm/{token}')
    assert response.status_code == 200
    assert response.get_json()['user']['email_confirmed'] is True

    response = client.post('/api/auth/login', json={'email': 'new@example.com', 'password': 'secret123'})
    assert response.status_code == 200
