LIST_PATHS = [
    '/api/customers',
    '/api/customers/options',
    '/api/jobs',
    '/api/calendar/events?year=2025&month=0',
    '/api/estimates',
    '/api/quotes',
]


def test_lists_are_stable_across_fetches(auth_client, make_customer, make_estimate):
    first = make_customer('Sam Reed')
    second = make_customer('Sam Reed')
    make_customer('Alex Moore')
    for day in ['2030-01-02', '2030-01-02', '2030-01-01']:
        auth_client.post('/api/jobs', json={'date': day, 'customer_id': first['id']})
    for start in ['09:00', '09:00', '08:00']:
        auth_client.post('/api/calendar/events', json={'title': 'Walkthrough', 'date': '2025-01-10', 'start_time': start})
    estimate = make_estimate(customer_id=second['id'])
    make_estimate(customer_id=first['id'])
    auth_client.post('/api/quotes', json={'estimate_id': estimate['id']})
    auth_client.post('/api/quotes', json={'estimate_id': estimate['id']})

    for path in LIST_PATHS:
        once = auth_client.get(path).get_json()
        again = auth_client.get(path).get_json()
        assert once == again, path


def test_customer_options_break_name_ties_by_id(auth_client, make_customer):
    first = make_customer('Sam Reed')
    second = make_customer('Sam Reed')

    options = auth_client.get('/api/customers/options').get_json()
    assert [option['id'] for option in options] == [first['id'], second['id']]
