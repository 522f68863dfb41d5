import json
import signal
import threading
import time
from io import StringIO
from unittest import mock

import pytest
from django.core.management import call_command

from clinic.models import Doctor, User

pytestmark = pytest.mark.django_db


def test_sync_last_connected_command_runs_once(installed_cache):
    alice = User.objects.create_user(username='alice', password='Clinic#2024')
    bob = User.objects.create_user(username='bob', password='Clinic#2024')
    installed_cache.set_with_expiry(f'last_connected_at:{alice.id}',
                                    json.dumps({'id': alice.id, 'last_connected_at': 1000}), 3600)
    installed_cache.set_with_expiry(f'last_connected_at:{bob.id}',
                                    json.dumps({'id': bob.id, 'last_connected_at': 2000}), 3600)

    out = StringIO()
    call_command('sync_last_connected', '--interval', '0', stdout=out)

    alice.refresh_from_db()
    bob.refresh_from_db()
    assert (alice.last_connected_at, bob.last_connected_at) == (1000, 2000)
    assert 'last connected sync: True' in out.getvalue()
    # entries stay in the cache until their TTL runs out
    assert f'last_connected_at:{alice.id}' in installed_cache.data
    # the command releases the store on exit
    assert installed_cache.closed


def test_sync_last_connected_command_for_unknown_user(installed_cache):
    installed_cache.set_with_expiry('last_connected_at:999', json.dumps({'id': 999, 'last_connected_at': 5}), 3600)
    out = StringIO()
    call_command('sync_last_connected', stdout=out)
    assert 'last connected sync: False' in out.getvalue()


def test_refresh_caches_warms_entities(installed_cache):
    user = User.objects.create_user(username='carol', password='Clinic#2024')
    doctor = Doctor.objects.create(first_name='John', last_name='Carter', email='carter@clinic.example')

    call_command('refresh_caches', stdout=StringIO())

    assert json.loads(installed_cache.data[f'user:{user.id}'])['username'] == 'carol'
    assert [d['id'] for d in json.loads(installed_cache.data['doctors'])] == [doctor.id]
    assert json.loads(installed_cache.data['patients']) == []


def test_populate_data_creates_demo_records():
    call_command('populate_data', stdout=StringIO())
    assert Doctor.objects.count() == 4
    assert User.objects.filter(username='admin1').exists()


def test_sync_last_connected_stops_without_waiting_out_the_interval():
    from clinic.management.commands.sync_last_connected import Command

    command = Command()
    runs = []

    def fake_run(cache, users):
        runs.append(cache)
        command._request_stop(signal.SIGTERM, None)
        return None

    out = StringIO()
    started = time.monotonic()
    with mock.patch('clinic.management.commands.sync_last_connected.run_last_connected_sync', fake_run):
        call_command(command, '--interval', '3600', stdout=out)

    assert len(runs) == 1
    assert time.monotonic() - started < 60
    assert 'last connected sync stopped' in out.getvalue()


def test_sync_last_connected_restores_sigterm_handler():
    previous = signal.getsignal(signal.SIGTERM)
    with mock.patch('clinic.management.commands.sync_last_connected.Command._loop'):
        call_command('sync_last_connected', '--interval', '5', stdout=StringIO())
    assert signal.getsignal(signal.SIGTERM) == previous


def test_sync_last_connected_runs_outside_the_main_thread(installed_cache):
    out = StringIO()
    errors = []

    def target():
        try:
            with mock.patch('clinic.management.commands.sync_last_connected.Command._loop'):
                call_command('sync_last_connected', '--interval', '5', stdout=out)
        except Exception as exc:
            errors.append(exc)

    worker = threading.Thread(target=target)
    worker.start()
    worker.join(timeout=30)

    assert errors == []
    assert 'last connected sync stopped' in out.getvalue()
