from io import StringIO

import pytest
from django.core.management import call_command

from registry.conf import get_config
from registry.exceptions import flatten_errors
from registry.models import Hospital
from registry.services.tokens import HospitalTokenService

pytestmark = pytest.mark.django_db


def test_healthz(client):
    r = client.get('/healthz')
    assert r.status_code == 200
    assert r.json() == {'message': 'ok', 'db': True}


def test_ensure_demo_hospital_is_idempotent():
    out = StringIO()
    call_command('ensure_demo_hospital', '--reg-id', 'DEMO', stdout=out)
    call_command('ensure_demo_hospital', '--reg-id', 'DEMO', stdout=out)
    assert Hospital.objects.filter(reg_id='DEMO').count() == 1
    lines = out.getvalue().splitlines()
    assert lines[0].startswith('created:')
    assert lines[2].startswith('exists:')
    assert HospitalTokenService(get_config()).decode(lines[-1]) == 'DEMO'


def test_flatten_errors_keeps_field_order():
    detail = {
        'fullName': ['Full Name is required.'],
        'previousIllnesses': [{}, {'illness': ['This field is required.']}],
        'gender': ['Gender is required.'],
    }
    assert flatten_errors(detail) == [
        'Full Name is required.',
        'This field is required.',
        'Gender is required.',
    ]


def test_unhandled_error_is_reported_as_500(client, monkeypatch):
    from registry.services import hospitals as hospital_service

    def boom():
        raise RuntimeError('disk on fire')
    monkeypatch.setattr(hospital_service, 'list_hospitals', boom)
    r = client.get('/hospital')
    assert r.status_code == 500
    assert r.data == {'message': 'Internal server error', 'error': 'disk on fire'}


def test_api_settings_resolve_registry_classes():
    from rest_framework.settings import api_settings

    from registry.authentication import HospitalTokenAuthentication
    from registry.handlers import api_exception_handler

    assert api_settings.DEFAULT_AUTHENTICATION_CLASSES == [HospitalTokenAuthentication]
    assert api_settings.EXCEPTION_HANDLER is api_exception_handler


def test_system_checks_pass():
    # raises SystemCheckError on any error-level finding
    call_command('check', stdout=StringIO())
