"""
Last-connected synchronisation.

Logins buffer ``{"id", "last_connected_at"}`` records in the cache store
under ``last_connected_at:<id>``.  :func:`sync_last_connected` copies
them onto ``User.last_connected_at``; :func:`run_last_connected_sync`
is what the scheduler calls.

Outcome of one run:

* ``True``  every update touched a row;
* ``False`` at least one update touched no row (the others still ran);
* ``None``  nothing was written, either because no key was found or
  because a scanned key had already vanished, which stops the run.

Buffered ``last_connected_at`` entries are never deleted here; they expire
through their TTL and a later run simply writes the same value again.  The
cached ``user:<id>`` and ``users`` reads are dropped after each write that
touched a row.
"""
from __future__ import annotations

import json
import logging
import threading
from typing import Optional

from django.db import DatabaseError

from clinic.cache import CachePrefix, CacheService, MalformedCachePayload
from clinic.repositories import UpdateRepository

logger = logging.getLogger(__name__)


class PersistenceFailure(Exception):
    """Writing a last-connected value to the database failed."""


def _parse(key: str, payload: str) -> dict:
    try:
        record = json.loads(payload)
        return {'id': record['id'], 'last_connected_at': record['last_connected_at']}
    except (ValueError, TypeError, KeyError) as exc:
        raise MalformedCachePayload(key, payload, str(exc)) from exc


def sync_last_connected(cache: CacheService, users: UpdateRepository) -> Optional[bool]:
    result: Optional[bool] = None
    for batch in cache.scan_last_connected():
        if not batch:
            continue
        # one key per scan batch
        key = batch[0]
        payload = cache.find_last_connected(key)
        if payload is None:
            logger.info("last connected key %s vanished, stopping run", key)
            return None
        record = _parse(key, payload)
        try:
            updated = users.update(record['id'], {'last_connected_at': record['last_connected_at']})
        except DatabaseError as exc:
            raise PersistenceFailure(f"user {record['id']}: {exc}") from exc
        if updated:
            cache.remove_user(record['id'])
            cache.remove_collection(CachePrefix.USERS)
        else:
            logger.warning("last connected sync: user %s not found", record['id'])
        result = result is not False and updated > 0
    return result


_running = threading.Lock()


def run_last_connected_sync(cache: Optional[CacheService] = None,
                            users: Optional[UpdateRepository] = None) -> Optional[bool]:
    """Scheduler entry point.

    Skips the tick when a previous run is still in progress and never
    raises: failures are logged and reported as ``None``.
    """
    if not _running.acquire(blocking=False):
        logger.warning("last connected sync still running, tick skipped")
        return None
    try:
        if cache is None or users is None:
            from clinic.services import registry
            cache = cache or registry.cache_service()
            users = users or registry.user_repository()
        result = sync_last_connected(cache, users)
        logger.info("last connected sync finished: %s", result)
        return result
    except Exception:
        logger.exception("last connected sync failed")
        return None
    finally:
        _running.release()
