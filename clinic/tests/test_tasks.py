import json
from unittest import mock

import pytest
from django.db import DatabaseError

from clinic.cache import CachePrefix, CacheService, CacheUnavailable, MalformedCachePayload
from clinic.repositories import UpdateRepository
from clinic.services import tasks
from clinic.services.tasks import PersistenceFailure, run_last_connected_sync, sync_last_connected


def record(pk, ts):
    return json.dumps({'id': pk, 'last_connected_at': ts})


@pytest.fixture
def cache():
    return mock.Mock(spec=CacheService)


@pytest.fixture
def users():
    repo = mock.Mock(spec=UpdateRepository)
    repo.update.return_value = 1
    return repo


def scan(cache, *batches):
    cache.scan_last_connected.return_value = iter([list(b) for b in batches])


def test_all_updates_succeed(cache, users):
    scan(cache, ['last_connected_at:1'], ['last_connected_at:2'])
    cache.find_last_connected.side_effect = [record(1, 1000), record(2, 2000)]

    assert sync_last_connected(cache, users) is True
    assert users.update.call_args_list == [
        mock.call(1, {'last_connected_at': 1000}),
        mock.call(2, {'last_connected_at': 2000}),
    ]


def test_no_keys_returns_none_without_writes(cache, users):
    scan(cache)
    assert sync_last_connected(cache, users) is None
    users.update.assert_not_called()
    cache.find_last_connected.assert_not_called()


def test_empty_batches_are_skipped(cache, users):
    scan(cache, [], ['last_connected_at:1'], [])
    cache.find_last_connected.return_value = record(1, 1000)
    assert sync_last_connected(cache, users) is True
    cache.find_last_connected.assert_called_once_with('last_connected_at:1')


def test_only_empty_batches_returns_none(cache, users):
    scan(cache, [], [])
    assert sync_last_connected(cache, users) is None
    users.update.assert_not_called()


def test_first_key_of_each_batch_is_used(cache, users):
    scan(cache, ['last_connected_at:1', 'last_connected_at:2'])
    cache.find_last_connected.return_value = record(1, 1000)
    assert sync_last_connected(cache, users) is True
    cache.find_last_connected.assert_called_once_with('last_connected_at:1')
    users.update.assert_called_once_with(1, {'last_connected_at': 1000})


def test_zero_rows_marks_run_false_but_keeps_going(cache, users):
    scan(cache, ['last_connected_at:1'], ['last_connected_at:2'], ['last_connected_at:3'])
    cache.find_last_connected.side_effect = [record(1, 10), record(2, 20), record(3, 30)]
    users.update.side_effect = [0, 1, 1]

    assert sync_last_connected(cache, users) is False
    assert users.update.call_count == 3


def test_vanished_key_aborts_run_with_none(cache, users):
    scan(cache, ['last_connected_at:1'])
    cache.find_last_connected.return_value = None
    assert sync_last_connected(cache, users) is None
    users.update.assert_not_called()


def test_vanished_key_stops_remaining_batches(cache, users):
    scan(cache, ['last_connected_at:1'], ['last_connected_at:2'], ['last_connected_at:3'])
    cache.find_last_connected.side_effect = [record(1, 10), None, record(3, 30)]
    assert sync_last_connected(cache, users) is None
    users.update.assert_called_once_with(1, {'last_connected_at': 10})
    assert cache.find_last_connected.call_count == 2


@pytest.mark.parametrize('payload', ['not-json', '[1, 2]', '{"id": 1}'])
def test_malformed_payload_raises_before_any_write(cache, users, payload):
    scan(cache, ['last_connected_at:1'])
    cache.find_last_connected.return_value = payload
    with pytest.raises(MalformedCachePayload) as exc_info:
        sync_last_connected(cache, users)
    assert isinstance(exc_info.value, ValueError)
    assert exc_info.value.key == 'last_connected_at:1'
    users.update.assert_not_called()


def test_database_error_raises_persistence_failure(cache, users):
    scan(cache, ['last_connected_at:1'], ['last_connected_at:2'])
    cache.find_last_connected.side_effect = [record(1, 10), record(2, 20)]
    users.update.side_effect = DatabaseError('database connection failed')
    with pytest.raises(PersistenceFailure):
        sync_last_connected(cache, users)
    assert users.update.call_count == 1


def test_cache_outage_propagates(cache, users):
    cache.scan_last_connected.side_effect = CacheUnavailable('redis connection failed')
    with pytest.raises(CacheUnavailable):
        sync_last_connected(cache, users)


def test_scheduled_run_reports_outcome(cache, users):
    scan(cache, ['last_connected_at:1'])
    cache.find_last_connected.return_value = record(1, 1000)
    assert run_last_connected_sync(cache, users) is True


def test_scheduled_run_swallows_errors(cache, users):
    cache.scan_last_connected.side_effect = CacheUnavailable('down')
    assert run_last_connected_sync(cache, users) is None
    # the guard is released after a failure
    scan(cache)
    cache.scan_last_connected.side_effect = None
    assert run_last_connected_sync(cache, users) is None
    cache.scan_last_connected.assert_called()


def test_overlapping_tick_is_skipped(cache, users):
    assert tasks._running.acquire(blocking=False)
    try:
        assert run_last_connected_sync(cache, users) is None
    finally:
        tasks._running.release()
    cache.scan_last_connected.assert_not_called()


def test_cached_user_reads_dropped_after_each_touched_row(cache, users):
    scan(cache, ['last_connected_at:1'], ['last_connected_at:2'])
    cache.find_last_connected.side_effect = [record(1, 10), record(2, 20)]
    users.update.side_effect = [1, 0]

    assert sync_last_connected(cache, users) is False
    cache.remove_user.assert_called_once_with(1)
    cache.remove_collection.assert_called_once_with(CachePrefix.USERS)
