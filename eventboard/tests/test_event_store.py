from datetime import datetime, timedelta, timezone

import pytest

from eventboard.db import EventNotFoundError
from eventboard.db import event_store as event_store_module
from eventboard.utils.timezone import now_utc

from .helpers import make_draft


def _wire(draft):
    """Map a model-keyed draft onto the wire keys the store returns."""
    return {
        'title': draft['title'],
        'shortDescription': draft['short_description'],
        'fullDescription': draft['full_description'],
        'date': draft['date'],
        'time': draft['time'],
        'location': draft['location'],
        'category': draft['category'],
        'image': draft['image'],
        'price': draft['price'],
        'priority': draft['priority'],
    }


def test_insert_assigns_new_identifier_and_creation_time(store):
    before = now_utc()
    first = store.insert(make_draft(), owner_id='abc')
    second = store.insert(make_draft(title='Second'), owner_id='abc')
    after = now_utc()

    assert first['id'] and second['id']
    assert first['id'] != second['id']
    assert first['userId'] == 'abc'
    assert before - timedelta(seconds=1) <= first['createdAt'] <= after + timedelta(seconds=1)
    assert first['createdAt'].tzinfo is not None


def test_insert_ignores_store_owned_fields_in_draft(store):
    stale = datetime(2000, 1, 1, tzinfo=timezone.utc)
    record = store.insert(make_draft(id=999, created_at=stale, owner_id='mallory'), owner_id='abc')

    assert record['id'] != 999
    assert record['createdAt'] != stale
    assert record['userId'] == 'abc'


def test_insert_then_get_round_trips_draft_fields(store):
    draft = make_draft()
    record = store.insert(draft, owner_id='abc')

    fetched = store.get(record['id'])

    assert {key: fetched[key] for key in _wire(draft)} == _wire(draft)
    assert fetched['createdAt'] == record['createdAt']


def test_insert_coerces_price_string(store):
    record = store.insert(make_draft(price='19.99'), owner_id='abc')

    assert store.get(record['id'])['price'] == 19.99
    assert isinstance(record['price'], float)


@pytest.mark.parametrize('price', ['free', '', None, -1, float('nan')])
def test_insert_rejects_invalid_price(store, price):
    with pytest.raises(ValueError):
        store.insert(make_draft(price=price), owner_id='abc')

    assert store.list() == []


def test_list_orders_newest_first(store, monkeypatch):
    base = datetime(2026, 1, 1, tzinfo=timezone.utc)
    stamps = iter([base + timedelta(minutes=2), base, base + timedelta(minutes=5)])
    monkeypatch.setattr(event_store_module, 'now_utc', lambda: next(stamps))

    for title in ('middle', 'oldest', 'newest'):
        store.insert(make_draft(title=title), owner_id='abc')

    records = store.list()

    assert [record['title'] for record in records] == ['newest', 'middle', 'oldest']
    for earlier, later in zip(records, records[1:]):
        assert earlier['createdAt'] >= later['createdAt']


def test_list_filters_by_owner(store):
    store.insert(make_draft(title='mine'), owner_id='abc')
    store.insert(make_draft(title='theirs'), owner_id='xyz')

    assert [record['title'] for record in store.list(owner_id='abc')] == ['mine']
    assert len(store.list()) == 2


def test_replace_overwrites_mutable_fields_only(store):
    record = store.insert(make_draft(), owner_id='abc')

    updated = store.replace(record['id'], {'title': 'Renamed', 'price': '5'})

    assert updated['title'] == 'Renamed'
    assert updated['price'] == 5.0
    # Full replace: absent optional fields are cleared
    assert updated['location'] is None
    assert updated['id'] == record['id']
    assert updated['userId'] == 'abc'
    assert updated['createdAt'] == record['createdAt']


def test_replace_missing_event_leaves_store_unchanged(store):
    record = store.insert(make_draft(), owner_id='abc')
    snapshot = store.list()

    with pytest.raises(EventNotFoundError):
        store.replace(record['id'] + 100, {'title': 'Nope', 'price': 1})

    assert store.list() == snapshot


@pytest.mark.parametrize('event_id', ['not-a-number', '0', -3, None])
def test_malformed_identifiers_are_not_found(store, event_id):
    with pytest.raises(EventNotFoundError):
        store.get(event_id)


def test_delete_removes_event_from_list(store):
    keep = store.insert(make_draft(title='keep'), owner_id='abc')
    gone = store.insert(make_draft(title='gone'), owner_id='abc')

    store.delete(str(gone['id']))

    assert [record['id'] for record in store.list()] == [keep['id']]
    with pytest.raises(EventNotFoundError):
        store.delete(gone['id'])
