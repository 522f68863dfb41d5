from unittest import mock

import pytest
from redis import exceptions as redis_exceptions

from clinic.cache import CacheUnavailable, RedisRepository


@pytest.fixture
def client():
    return mock.MagicMock()


@pytest.fixture
def repo(client):
    return RedisRepository(client)


def test_get_decodes_bytes_and_returns_none_when_absent(repo, client):
    client.get.return_value = b'{"id": 1}'
    assert repo.get('user:1') == '{"id": 1}'
    client.get.return_value = None
    assert repo.get('user:2') is None


def test_set_has_no_expiry(repo, client):
    repo.set('k', 'v')
    client.set.assert_called_once_with('k', 'v')


def test_set_with_expiry_passes_seconds(repo, client):
    repo.set_with_expiry('user:1', '{}', 60)
    client.set.assert_called_once_with('user:1', '{}', ex=60)


@pytest.mark.parametrize('ttl', [0, -5, 1.5])
def test_set_with_expiry_rejects_non_positive_or_fractional_ttl(repo, client, ttl):
    with pytest.raises(ValueError):
        repo.set_with_expiry('k', 'v', ttl)
    client.set.assert_not_called()


def test_delete_returns_count(repo, client):
    client.delete.return_value = 0
    assert repo.delete('missing') == 0
    client.delete.assert_called_once_with('missing')


def test_scan_yields_one_batch_per_round_trip(repo, client):
    client.scan.side_effect = [
        (17, [b'last_connected_at:1']),
        (42, []),
        (0, [b'last_connected_at:2', b'last_connected_at:3']),
    ]
    batches = repo.scan_by_prefix('last_connected_at:*')
    client.scan.assert_not_called()
    assert list(batches) == [
        ['last_connected_at:1'],
        [],
        ['last_connected_at:2', 'last_connected_at:3'],
    ]
    assert client.scan.call_args_list == [
        mock.call(cursor=0, match='last_connected_at:*', count=100),
        mock.call(cursor=17, match='last_connected_at:*', count=100),
        mock.call(cursor=42, match='last_connected_at:*', count=100),
    ]


def test_scan_count_is_configurable(client):
    client.scan.return_value = (0, [])
    list(RedisRepository(client, scan_count=10).scan_by_prefix('x:*'))
    client.scan.assert_called_once_with(cursor=0, match='x:*', count=10)


@pytest.mark.parametrize('error', [redis_exceptions.ConnectionError('refused'), redis_exceptions.TimeoutError('slow')])
def test_connection_failures_raise_cache_unavailable(repo, client, error):
    client.get.side_effect = error
    with pytest.raises(CacheUnavailable):
        repo.get('k')


def test_scan_failure_raises_cache_unavailable(repo, client):
    client.scan.side_effect = redis_exceptions.ConnectionError('refused')
    with pytest.raises(CacheUnavailable):
        next(repo.scan_by_prefix('k:*'))


def test_ping_reports_false_when_down(repo, client):
    client.ping.side_effect = redis_exceptions.ConnectionError('refused')
    assert repo.ping() is False


def test_close_releases_client(repo, client):
    repo.close()
    client.close.assert_called_once_with()
