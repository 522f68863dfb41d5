from datetime import timedelta

import pytest
from django.utils import timezone

from clinic.models import Doctor, User
from clinic.repositories import ModelRepository

pytestmark = pytest.mark.django_db


def test_update_returns_row_count_and_stamps_modified_at():
    user = User.objects.create_user(username='alice', password='Clinic#2024')
    stale = timezone.now() - timedelta(days=1)
    User.objects.filter(pk=user.pk).update(modified_at=stale)

    repo = ModelRepository(User)
    assert repo.update(user.pk, {'last_connected_at': 1234}) == 1
    assert repo.update(user.pk + 1000, {'last_connected_at': 1234}) == 0

    user.refresh_from_db()
    assert user.last_connected_at == 1234
    assert user.modified_at > stale


def test_find_paginates_and_counts():
    for i in range(3):
        Doctor.objects.create(first_name=f'D{i}', last_name='Doe', email=f'd{i}@clinic.example')
    items, total = ModelRepository(Doctor, ordering=('id',)).find(page=2, page_size=2)
    assert total == 3
    assert [d.first_name for d in items] == ['D2']


def test_remove_returns_deleted_count():
    doctor = Doctor.objects.create(first_name='Lisa', last_name='Cuddy', email='cuddy@clinic.example')
    repo = ModelRepository(Doctor)
    assert repo.remove(doctor.pk) == 1
    assert repo.remove(doctor.pk) == 0
