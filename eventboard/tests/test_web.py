from eventboard.web.api import EventAPIError


def _sign_in(client, user_id='abc'):
    with client.session_transaction() as session:
        session['uid'] = user_id


def test_dashboard_redirects_anonymous_visitors(web_client, fake_api):
    response = web_client.get('/dashboard')

    assert response.status_code == 302
    assert response.headers['Location'].endswith('/login')
    assert fake_api.calls == []


def test_dashboard_lists_own_events(web_client):
    _sign_in(web_client)

    html = web_client.get('/dashboard').get_data(as_text=True)

    assert 'Spring Gala' in html
    assert 'Jazz Night' in html
    assert 'Other Party' not in html
    assert 'https://cdn.example.com/jazz.jpg' in html


def test_dashboard_opens_edit_modal(web_client):
    _sign_in(web_client)

    html = web_client.get('/dashboard?edit=1').get_data(as_text=True)

    assert 'Edit Event' in html
    assert 'value="Spring Gala"' in html


def test_dashboard_fetch_failure_still_renders(web_client, fake_api):
    _sign_in(web_client)
    fake_api.fail['list'] = EventAPIError("down")

    response = web_client.get('/dashboard')

    assert response.status_code == 200
    assert 'Failed to fetch events' in response.get_data(as_text=True)


def test_edit_submit_success_redirects(web_client, fake_api):
    _sign_in(web_client)

    response = web_client.post('/dashboard/events/1', data={'title': 'Summer Gala', 'price': '15'})

    assert response.status_code == 302
    update = next(call for call in fake_api.calls if call[0] == 'update')
    assert update[2]['title'] == 'Summer Gala'
    assert update[2]['price'] == '15'
    assert update[2]['location'] == 'Town Hall'


def test_edit_submit_failure_keeps_form(web_client, fake_api):
    _sign_in(web_client)
    fake_api.fail['update'] = EventAPIError("Invalid event payload", status_code=422)

    response = web_client.post('/dashboard/events/1', data={'title': 'Typed title', 'price': 'oops'})

    html = response.get_data(as_text=True)
    assert response.status_code == 200
    assert 'Edit Event' in html
    assert 'value="Typed title"' in html
    assert 'Update failed' in html


def test_edit_submit_blank_optional_fields_become_none(web_client, fake_api):
    _sign_in(web_client)

    web_client.post('/dashboard/events/1', data={
        'title': 'Spring Gala',
        'price': '10',
        'location': '',
        'priority': '   ',
    })

    update = next(call for call in fake_api.calls if call[0] == 'update')
    assert update[2]['location'] is None
    assert update[2]['priority'] is None
    assert update[2]['title'] == 'Spring Gala'


def test_dashboard_links_to_new_event_form(web_client):
    _sign_in(web_client)

    html = web_client.get('/dashboard').get_data(as_text=True)

    assert 'href="/dashboard/events/new"' in html


def test_new_event_form_is_rendered(web_client, fake_api):
    _sign_in(web_client)

    html = web_client.get('/dashboard/events/new').get_data(as_text=True)

    assert 'New Event' in html
    assert 'action="/dashboard/events/new"' in html
    assert not any(call[0] == 'create' for call in fake_api.calls)


def test_new_event_requires_sign_in(web_client, fake_api):
    response = web_client.post('/dashboard/events/new', data={'title': 'Sneaky', 'price': '1'})

    assert response.status_code == 302
    assert response.headers['Location'].endswith('/login')
    assert fake_api.calls == []


def test_new_event_submit_success_redirects(web_client, fake_api):
    _sign_in(web_client)

    response = web_client.post('/dashboard/events/new', data={
        'title': 'Poetry Slam',
        'price': '5',
        'location': '',
    })

    assert response.status_code == 302
    assert response.headers['Location'].endswith('/dashboard')
    create = next(call for call in fake_api.calls if call[0] == 'create')
    assert create[1]['title'] == 'Poetry Slam'
    assert create[1]['price'] == '5'
    assert create[1]['location'] is None
    assert create[2] == 'abc'


def test_new_event_submit_failure_keeps_form(web_client, fake_api):
    _sign_in(web_client)
    fake_api.fail['create'] = EventAPIError("Invalid event payload", status_code=422)

    response = web_client.post('/dashboard/events/new', data={'title': 'Typed title', 'price': 'oops'})

    html = response.get_data(as_text=True)
    assert response.status_code == 200
    assert 'New Event' in html
    assert 'value="Typed title"' in html
    assert 'Create failed' in html


def test_delete_requires_confirmation(web_client, fake_api):
    _sign_in(web_client)

    web_client.post('/dashboard/events/1/delete', data={})
    assert not any(call[0] == 'delete' for call in fake_api.calls)

    response = web_client.post('/dashboard/events/1/delete', data={'confirm': 'yes'})

    assert response.status_code == 302
    assert ('delete', '1', 'abc') in fake_api.calls


def test_delete_confirmation_step_is_rendered(web_client):
    _sign_in(web_client)

    html = web_client.get('/dashboard?confirm_delete=2').get_data(as_text=True)

    assert 'Delete this event?' in html
    assert '/dashboard/events/2/delete' in html


def test_event_detail_and_booking(web_client, fake_api):
    html = web_client.get('/events/1').get_data(as_text=True)
    assert 'Book Now for &#34;Spring Gala&#34;' in html

    calls_before = list(fake_api.calls)
    booked = web_client.post('/events/1/book').get_data(as_text=True)

    assert 'Booked ✓' in booked
    # Booking only reads the event
    assert [call[0] for call in fake_api.calls[len(calls_before):]] == ['get']


def test_unknown_event_is_404(web_client):
    assert web_client.get('/events/999').status_code == 404
