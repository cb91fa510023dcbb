import pytest

EVENT_PAYLOAD = {
    'title': 'Basement Jazz Night',
    'description': 'Trio plus open jam',
    'location': 'The Cellar',
    'date': '2026-11-20',
}


@pytest.fixture()
def submitted_event(logged_in_client):
    response = logged_in_client.post('/api/events/submit', json=EVENT_PAYLOAD)
    assert response.status_code == 201
    return response.get_json()['event']


def test_submit_requires_session(client):
    response = client.post('/api/events/submit', json=EVENT_PAYLOAD)

    assert response.status_code == 403
    assert response.get_json()['error'] == 'NotAuthenticated'


def test_submit_stamps_submitter_and_pending_status(logged_in_client, registered_user):
    response = logged_in_client.post('/api/events/submit', json=dict(EVENT_PAYLOAD, user_id=999, status='approved'))

    assert response.status_code == 201
    event = response.get_json()['event']
    assert event['user_id'] == registered_user['id']
    assert event['status'] == 'pending'
    assert event['date'] == '2026-11-20'


def test_submit_requires_title(logged_in_client):
    response = logged_in_client.post('/api/events/submit', json={'location': 'Nowhere'})

    assert response.status_code == 400
    assert response.get_json()['error'] == 'MissingField'


def test_submit_rejects_bad_date(logged_in_client):
    response = logged_in_client.post('/api/events/submit', json=dict(EVENT_PAYLOAD, date='20/11/2026'))

    assert response.status_code == 400
    assert response.get_json()['error'] == 'ValidationError'


def test_review_lists_only_pending(client, logged_in_client, submitted_event):
    logged_in_client.post('/api/events/submit', json=dict(EVENT_PAYLOAD, title='Second'))
    client.put(f"/api/events/review/{submitted_event['id']}", json={'isApproved': False})

    pending = client.get('/api/events/review').get_json()

    assert [event['title'] for event in pending] == ['Second']


def test_approving_event_is_reflected_on_fetch(client, submitted_event):
    response = client.put(f"/api/events/review/{submitted_event['id']}", json={'isApproved': True})

    assert response.status_code == 200
    assert response.get_json()['event']['status'] == 'approved'
    fetched = client.get(f"/api/events/{submitted_event['id']}").get_json()['event']
    assert fetched['status'] == 'approved'


def test_denying_event_and_re_reviewing(client, submitted_event):
    client.put(f"/api/events/review/{submitted_event['id']}", json={'isApproved': False})
    assert client.get(f"/api/events/{submitted_event['id']}").get_json()['event']['status'] == 'denied'

    client.put(f"/api/events/review/{submitted_event['id']}", json={'isApproved': True})
    assert client.get(f"/api/events/{submitted_event['id']}").get_json()['event']['status'] == 'approved'


def test_review_requires_boolean(client, submitted_event):
    response = client.put(f"/api/events/review/{submitted_event['id']}", json={'isApproved': 'maybe'})

    assert response.status_code == 400


def test_review_unknown_event_is_not_found(client):
    response = client.put('/api/events/review/9999', json={'isApproved': True})

    assert response.status_code == 404


def test_update_event_replaces_fields_but_not_status(client, logged_in_client, submitted_event):
    client.put(f"/api/events/review/{submitted_event['id']}", json={'isApproved': True})

    response = logged_in_client.put(
        f"/api/events/{submitted_event['id']}",
        json={'title': 'Renamed', 'location': 'Rooftop', 'date': '2026-12-01', 'status': 'pending'},
    )

    assert response.status_code == 200
    event = response.get_json()['event']
    assert event['title'] == 'Renamed'
    assert event['location'] == 'Rooftop'
    assert event['description'] is None
    assert event['status'] == 'approved'


def test_update_requires_session(app, submitted_event):
    response = app.test_client().put(f"/api/events/{submitted_event['id']}", json=EVENT_PAYLOAD)

    assert response.status_code == 403


def test_update_unknown_event_is_not_found(logged_in_client):
    response = logged_in_client.put('/api/events/9999', json=EVENT_PAYLOAD)

    assert response.status_code == 404


def test_fetch_unknown_event_is_not_found(client):
    response = client.get('/api/events/9999')

    assert response.status_code == 404
    assert response.get_json()['error'] == 'NotFound'


def test_list_all_events(client, logged_in_client, submitted_event):
    logged_in_client.post('/api/events/submit', json=dict(EVENT_PAYLOAD, title='Second'))

    events = client.get('/api/events/').get_json()

    assert [event['title'] for event in events] == ['Basement Jazz Night', 'Second']


@pytest.mark.parametrize('flag, status', [('true', 'approved'), ('False', 'denied')])
def test_review_accepts_form_encoded_boolean(client, submitted_event, flag, status):
    response = client.put(f"/api/events/review/{submitted_event['id']}", data={'isApproved': flag})

    assert response.status_code == 200
    assert response.get_json()['event']['status'] == status


def test_submit_with_json_array_body_is_validation_error(logged_in_client):
    response = logged_in_client.post('/api/events/submit', json=[EVENT_PAYLOAD])

    assert response.status_code == 400
    assert response.get_json()['error'] == 'ValidationError'
