def test_health_check(client):
    response = client.get('/api/health')
    assert response.status_code == 200
    body = response.get_json()
    assert body['status'] == 'healthy'
    assert body['checks']['database']['type'] == 'SQLite'
    assert body['checks']['application']['missing_critical'] == []


def test_simple_health_check(client):
    assert client.get('/api/health/simple').get_json()['status'] == 'healthy'


def test_public_config_needs_no_login(client):
    body = client.get('/api/config/public').get_json()
    assert body['timezone'] == 'America/Los_Angeles'
    assert body['default_quote_valid_days'] == 30
    assert body['address_autocomplete_enabled'] in (True, False)


def test_unknown_api_route_is_json_404(client):
    response = client.get('/api/nothing-here')
    assert response.status_code == 404
    assert response.get_json()['code'] == 'NOT_FOUND'


def test_api_responses_are_not_cached(client):
    response = client.get('/api/health')
    assert response.headers['Cache-Control'] == 'no-cache, no-store, must-revalidate'
    assert response.headers['X-Content-Type-Options'] == 'nosniff'
