import pytest

from clinic.serializers._clean import clean_text
from clinic.serializers.doctor import DoctorSerializer


@pytest.mark.parametrize('raw, expected', [
    (' <b>Meredith</b> ', 'Meredith'),
    ('<a href="http://x">click</a>', 'click'),
    ('<em>Grey</em>', 'Grey'),
    (None, ''),
])
def test_clean_text_strips_every_tag(raw, expected):
    assert clean_text(raw) == expected


@pytest.mark.django_db
def test_doctor_serializer_stores_plain_text_names():
    s = DoctorSerializer(data={
        'first_name': '<a href="http://x">John</a>', 'last_name': '<i>Carter</i>',
        'email': 'carter@clinic.example',
    })
    assert s.is_valid(), s.errors
    assert (s.validated_data['first_name'], s.validated_data['last_name']) == ('John', 'Carter')
