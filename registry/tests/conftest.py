import pytest
from django.utils import timezone
from rest_framework.test import APIClient

from registry.conf import get_config
from registry.models import Hospital, HospitalVisit, PatientRecord
from registry.services.tokens import HospitalTokenService


@pytest.fixture(autouse=True)
def media_root(settings, tmp_path):
    settings.MEDIA_ROOT = tmp_path / 'media'
    return settings.MEDIA_ROOT


@pytest.fixture
def client():
    return APIClient()


@pytest.fixture
def hospital(db):
    return Hospital.objects.create(
        name='General Hospital',
        reg_id='H1',
        hospital_type='General',
        contact_email='admin@general.example',
        address='1 Main Street',
    )


@pytest.fixture
def other_hospital(db):
    return Hospital.objects.create(
        name='St. Mary Clinic',
        reg_id='H2',
        hospital_type='Clinic',
        contact_email='desk@stmary.example',
        address='22 Church Road',
    )


@pytest.fixture
def token_for():
    def _issue(h):
        return HospitalTokenService(get_config()).issue(h)
    return _issue


@pytest.fixture
def auth_client(hospital, token_for):
    c = APIClient()
    c.credentials(HTTP_AUTHORIZATION=f'Bearer {token_for(hospital)}')
    return c


@pytest.fixture
def patient_payload():
    return {
        'fullName': 'Ada Lovelace',
        'address': '1 Mayfair',
        'gender': 'Female',
        'genotype': 'AA',
        'bloodGroup': 'O+',
        'phoneNumber': '555-0100',
        'dateOfBirth': '1815-12-10',
    }


@pytest.fixture
def make_record(db):
    def _make(hospital_name='General Hospital', **overrides):
        fields = {
            'full_name': 'Ada Lovelace',
            'address': '1 Mayfair',
            'gender': 'Female',
            'genotype': 'AA',
            'blood_group': 'O+',
            'phone_number': '555-0100',
            'date_of_birth': '1815-12-10',
        }
        fields.update(overrides)
        record = PatientRecord.objects.create(**fields)
        HospitalVisit.objects.create(record=record, hospital_name=hospital_name, date_visited=timezone.now())
        return record
    return _make
