import pytest
from django.urls import reverse

from registry.models import AuditEvent, Hospital

pytestmark = pytest.mark.django_db

HOSPITAL = {
    'name': 'General Hospital',
    'regId': 'H1',
    'hospitalType': 'General',
    'contactEmail': 'admin@general.example',
    'address': '1 Main Street',
}


def test_create_hospital(client):
    r = client.post(reverse('hospital_create'), HOSPITAL, format='json')
    assert r.status_code == 201, r.data
    assert r.data['message'] == 'Hospital created successfully'
    assert r.data['hospital']['regId'] == 'H1'
    assert r.data['hospital']['hospitalType'] == 'General'
    assert Hospital.objects.filter(reg_id='H1').exists()
    assert AuditEvent.objects.filter(action='hospital_create', object_id='H1').exists()


def test_create_hospital_requires_every_field(client):
    r = client.post(reverse('hospital_create'), {}, format='json')
    assert r.status_code == 400
    assert r.data['message'] == 'All fields are required.'
    assert len(r.data['errors']) == 5


def test_create_hospital_missing_one_field(client):
    payload = {k: v for k, v in HOSPITAL.items() if k != 'hospitalType'}
    r = client.post(reverse('hospital_create'), payload, format='json')
    assert r.status_code == 400
    assert r.data['errors'] == ['Hospital type is required.']


def test_create_hospital_duplicate_reg_id(client, hospital):
    r = client.post(reverse('hospital_create'), HOSPITAL, format='json')
    assert r.status_code == 400
    assert r.data['message'] == 'A hospital with this registration ID already exists.'
    assert Hospital.objects.count() == 1


def test_list_and_fetch_hospitals(client, hospital, other_hospital):
    r = client.get('/hospital')
    assert r.status_code == 200
    assert [h['regId'] for h in r.data['hospitals']] == ['H1', 'H2']

    r = client.get('/hospital/H2')
    assert r.status_code == 200
    assert r.data['hospital']['name'] == 'St. Mary Clinic'


def test_fetch_unknown_hospital_is_404(client):
    r = client.get('/hospital/NOPE')
    assert r.status_code == 404
    assert r.data == {'message': 'Hospital not found'}


def test_clear_hospitals(client, hospital, other_hospital):
    r = client.delete('/hospital')
    assert r.status_code == 200
    assert r.data['message'] == 'All hospitals have been cleared successfully.'
    assert client.get('/hospital').data['hospitals'] == []


def test_login_issues_token_usable_for_patient_create(client, hospital, patient_payload):
    r = client.post(reverse('hospital_login'), {'regId': 'H1', 'contactEmail': 'ADMIN@general.example'},
                    format='json')
    assert r.status_code == 200, r.data
    assert r.data['hospital']['regId'] == 'H1'
    token = r.data['token']

    client.credentials(HTTP_AUTHORIZATION=f'Bearer {token}')
    created = client.post('/users/create', patient_payload, format='json')
    assert created.status_code == 201
    assert created.data['user']['previousHospitals'][0]['hospitalName'] == 'General Hospital'


def test_login_with_wrong_email_is_401(client, hospital):
    r = client.post(reverse('hospital_login'), {'regId': 'H1', 'contactEmail': 'someone@else.example'},
                    format='json')
    assert r.status_code == 401
    assert r.data['message'] == 'Invalid hospital credentials.'


def test_login_requires_fields(client):
    r = client.post(reverse('hospital_login'), {}, format='json')
    assert r.status_code == 400
    assert r.data['errors'] == ['Registration ID is required.', 'Contact email is required.']


def test_verify_token_from_body(client, hospital, token_for):
    r = client.post(reverse('hospital_verify'), {'token': token_for(hospital)}, format='json')
    assert r.status_code == 200
    assert r.data['message'] == 'Token is valid'
    assert r.data['hospital']['regId'] == 'H1'


def test_verify_token_from_header(auth_client):
    r = auth_client.post(reverse('hospital_verify'), {}, format='json')
    assert r.status_code == 200
    assert r.data['hospital']['regId'] == 'H1'


def test_verify_rejects_bad_token(client):
    r = client.post(reverse('hospital_verify'), {'token': 'abc.def.ghi'}, format='json')
    assert r.status_code == 401


def test_verify_without_token_is_400(client):
    r = client.post(reverse('hospital_verify'), {}, format='json')
    assert r.status_code == 400
    assert r.data['errors'] == ['Token is required.']


def test_hospital_reads_ignore_bad_token(client, hospital):
    client.credentials(HTTP_AUTHORIZATION='Bearer not-a-token')
    assert client.get('/hospital').status_code == 200
    assert client.get('/hospital/H1').status_code == 200
    r = client.post(reverse('hospital_login'), {'regId': 'H1', 'contactEmail': 'admin@general.example'},
                    format='json')
    assert r.status_code == 200
