from datetime import timedelta

import pytest
import pytz

from services.date_utils import today_in_business_tz


def _today():
    return today_in_business_tz(pytz.timezone('America/Los_Angeles'))


def test_create_quote_from_estimate(auth_client, make_estimate):
    estimate = make_estimate()
    response = auth_client.post('/api/quotes', json={
        'estimate_id': estimate['id'],
        'tax_rate': 8,
        'valid_days': 30,
        'notes': 'Includes primer'
    })
    assert response.status_code == 201
    quote = response.get_json()

    assert quote['quote_number'] == 1
    assert quote['status'] == 'draft'
    assert quote['subtotal'] == pytest.approx(110.0)
    assert quote['tax_amount'] == pytest.approx(8.8)
    assert quote['total'] == pytest.approx(118.8)
    assert quote['customer_id'] == estimate['customer_id']
    assert quote['customer_details']['name'] == 'Dana Whitfield'
    assert quote['valid_until'] == (_today() + timedelta(days=30)).isoformat()
    assert quote['terms'].startswith('Payment due within 30 days')

    second = auth_client.post('/api/quotes', json={'estimate_id': estimate['id']}).get_json()
    assert second['quote_number'] == 2
    assert second['tax_amount'] == 0

    listed = auth_client.get('/api/quotes').get_json()
    assert [q['quote_number'] for q in listed] == [2, 1]


def test_quote_preview(auth_client, make_estimate):
    estimate = make_estimate()
    response = auth_client.post('/api/quotes/preview', json={'estimate_id': estimate['id'], 'tax_rate': 8})
    body = response.get_json()
    assert response.status_code == 200
    assert body['total'] == pytest.approx(118.8)

    body = auth_client.post('/api/quotes/preview', json={'subtotal': 200, 'tax_rate': 10}).get_json()
    assert body['total'] == pytest.approx(220.0)
    assert body['estimate_id'] is None

    assert auth_client.get('/api/quotes').get_json() == []


def test_quote_validation(auth_client, make_estimate):
    estimate = make_estimate()
    assert auth_client.post('/api/quotes', json={}).status_code == 400
    assert auth_client.post('/api/quotes', json={'estimate_id': 999}).status_code == 404
    assert auth_client.post('/api/quotes', json={'estimate_id': estimate['id'], 'tax_rate': -5}).status_code == 400
    assert auth_client.post('/api/quotes', json={'estimate_id': estimate['id'], 'valid_days': 'soon'}).status_code == 400


def test_quote_status_changes(auth_client, make_estimate):
    quote = auth_client.post('/api/quotes', json={'estimate_id': make_estimate()['id']}).get_json()
    url = f"/api/quotes/{quote['id']}/status"

    response = auth_client.put(url, json={'status': 'accepted'})
    assert response.status_code == 200
    assert response.get_json()['status_label'] == 'Accepted'

    # any status may follow any other
    assert auth_client.put(url, json={'status': 'draft'}).get_json()['status'] == 'draft'
    assert auth_client.put(url, json={'status': 'lost'}).status_code == 400


def test_quote_detail_lists_estimate_items(auth_client, make_estimate):
    estimate = make_estimate()
    quote = auth_client.post('/api/quotes', json={'estimate_id': estimate['id']}).get_json()

    detail = auth_client.get(f"/api/quotes/{quote['id']}").get_json()
    assert [item['label'] for item in detail['items']] == ['Walls', 'Trim']

    auth_client.delete(f"/api/estimates/{estimate['id']}")
    detail = auth_client.get(f"/api/quotes/{quote['id']}").get_json()
    assert detail['estimate_id'] is None
    assert detail['items'] == []
    assert detail['total'] == pytest.approx(110.0)


def test_quote_pdf(auth_client, make_estimate):
    quote = auth_client.post('/api/quotes', json={'estimate_id': make_estimate()['id'], 'tax_rate': 8}).get_json()

    response = auth_client.get(f"/api/quotes/{quote['id']}/pdf")
    assert response.status_code == 200
    assert response.mimetype == 'application/pdf'
    assert response.data.startswith(b'%PDF')
    assert 'quote_1.pdf' in response.headers['Content-Disposition']


def test_delete_quote(auth_client, make_estimate):
    quote = auth_client.post('/api/quotes', json={'estimate_id': make_estimate()['id']}).get_json()
    assert auth_client.delete(f"/api/quotes/{quote['id']}").status_code == 200
    assert auth_client.get(f"/api/quotes/{quote['id']}").status_code == 404


def test_quote_limits(auth_client, make_estimate):
    estimate = make_estimate()

    response = auth_client.post('/api/quotes', json={'estimate_id': estimate['id'], 'tax_rate': 250})
    assert response.status_code == 400
    response = auth_client.post('/api/quotes', json={'estimate_id': estimate['id'], 'valid_days': 0})
    assert response.status_code == 400

    for path in ['/api/quotes/preview', '/api/quotes']:
        response = auth_client.post(path, json={'estimate_id': estimate['id'], 'valid_days': 5000000})
        assert response.status_code == 400, path
        assert 'valid_days' in response.get_json()['error']

    assert auth_client.get('/api/quotes').get_json() == []
