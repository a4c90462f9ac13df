"""
URL mappings for the registry API.

Hospital endpoints live under ``hospital/`` and patient record endpoints
under ``users/``.  Trailing slashes are omitted; fixed paths such as
``create`` and ``search`` are listed before the parameterised ones so
they are not captured as identifiers.
"""
from django.urls import path, include

from .views import health
from .views.hospitals import create_hospital, login_hospital, verify_hospital, hospitals, hospital_detail
from .views.patients import create_record, records, search_records, record_detail, update_record


urlpatterns = [
    path('', include('django_prometheus.urls')),
    path('healthz', health.healthz),
    # Hospitals
    path('hospital/create', create_hospital, name='hospital_create'),
    path('hospital/login', login_hospital, name='hospital_login'),
    path('hospital/verify', verify_hospital, name='hospital_verify'),
    path('hospital', hospitals, name='hospital_list'),
    path('hospital/<str:reg_id>', hospital_detail, name='hospital_detail'),
    # Patient records
    path('users/create', create_record, name='user_create'),
    path('users/search', search_records, name='user_search'),
    path('users/update/<int:record_id>', update_record, name='user_update'),
    path('users', records, name='user_list'),
    path('users/<int:record_id>', record_detail, name='user_detail'),
]
