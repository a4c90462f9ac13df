"""
Patient record service functions.

Records are shared by every hospital.  Create and update are attributed to
the calling hospital through the record's visit list; reads, search and
deletion are not.  Profile pictures live in the default file storage under
``uploads/`` with their MIME type kept on the record.
"""
import logging
import os
import uuid
from datetime import date
from typing import Optional

from django.db import DatabaseError, transaction
from django.db.models import QuerySet
from django.utils import timezone
from django.utils.dateparse import parse_date, parse_datetime

from registry.conf import RegistryConfig
from registry.exceptions import NotFoundError, ValidationError
from registry.models import Hospital, HospitalVisit, IllnessEntry, PatientRecord
from registry.services.audit import log_action

logger = logging.getLogger(__name__)

# Substring filters are case-insensitive; the rest must match exactly.
SEARCH_LOOKUPS = {
    'full_name': 'full_name__icontains',
    'address': 'address__icontains',
    'gender': 'gender',
    'genotype': 'genotype',
    'blood_group': 'blood_group',
    'illness': 'previous_illnesses__illness__icontains',
    'hospital_name': 'previous_hospitals__hospital_name__icontains',
    'phone_number': 'phone_number__icontains',
    'disability': 'disability__icontains',
}


def _records() -> QuerySet:
    return PatientRecord.objects.prefetch_related('previous_hospitals', 'previous_illnesses')


def list_records() -> QuerySet:
    return _records().order_by('id')


def get_record(record_id) -> PatientRecord:
    record = _records().filter(pk=record_id).first()
    if not record:
        raise NotFoundError('User not found')
    return record


def validate_upload(upload, config: RegistryConfig) -> None:
    errors = []
    if upload.size > config.upload_max_bytes:
        errors.append(f'File too large (limit {config.upload_max_mb} MB).')
    content_type = getattr(upload, 'content_type', '') or ''
    if not any(content_type.startswith(t) for t in config.allowed_upload_types):
        errors.append(f'Unsupported file type: {content_type or "unknown"}.')
    if errors:
        raise ValidationError('Error uploading file', errors=errors)


def _store_picture(record: PatientRecord, upload) -> Optional[str]:
    """Attach ``upload`` to ``record`` and return the name of the file it replaces.

    The replaced file stays on disk; callers remove it with
    :func:`_discard_picture` once the new reference is committed.
    """
    replaced = record.profile_picture.name if record.profile_picture else None
    ext = os.path.splitext(upload.name or '')[1].lower()
    record.profile_picture.save(f"{uuid.uuid4().hex}{ext}", upload, save=False)
    record.profile_picture_type = getattr(upload, 'content_type', '') or ''
    return replaced


def _discard_picture(name: Optional[str]) -> None:
    if name:
        PatientRecord._meta.get_field('profile_picture').storage.delete(name)


def _replace_illnesses(record: PatientRecord, illnesses: list[dict]) -> None:
    record.previous_illnesses.all().delete()
    IllnessEntry.objects.bulk_create([
        IllnessEntry(record=record, illness=item['illness'], date_diagnosed=item.get('date_diagnosed'))
        for item in illnesses
    ])


def create_record(hospital: Hospital, *, data: dict, picture=None, config: RegistryConfig) -> PatientRecord:
    """Persist a new record whose only visit entry is ``hospital``."""
    if picture is not None:
        validate_upload(picture, config)
    data = dict(data)
    illnesses = data.pop('previous_illnesses', None)
    record = PatientRecord(**data)
    if picture is not None:
        _store_picture(record, picture)
    try:
        with transaction.atomic():
            record.save()
            HospitalVisit.objects.create(record=record, hospital_name=hospital.name, date_visited=timezone.now())
            if illnesses:
                _replace_illnesses(record, illnesses)
    except DatabaseError:
        if picture is not None:
            _discard_picture(record.profile_picture.name)
        raise
    log_action(hospital=hospital, action='patient_create', object_type='patient', object_id=record.id)
    logger.info('patient record %s created by %s', record.id, hospital.reg_id)
    return get_record(record.id)


def update_record(hospital: Hospital, record_id, *, data: dict, picture=None,
                  config: RegistryConfig) -> PatientRecord:
    """Shallow-merge ``data`` onto the record and note the hospital's visit.

    The visit list is never taken from ``data``; a hospital already on the
    list (same name) is not appended again.  The visit, field changes and
    illness list are written in one transaction, and a replaced picture is
    only deleted after that transaction commits.
    """
    record = get_record(record_id)
    if picture is not None:
        validate_upload(picture, config)
    data = dict(data)
    data.pop('previous_hospitals', None)
    illnesses = data.pop('previous_illnesses', None)

    for field, value in data.items():
        setattr(record, field, value)
    replaced = _store_picture(record, picture) if picture is not None else None

    appended = False
    try:
        with transaction.atomic():
            if not record.has_visit_from(hospital.name):
                HospitalVisit.objects.create(record=record, hospital_name=hospital.name,
                                             date_visited=timezone.now())
                appended = True
            record.save()
            if illnesses is not None:
                _replace_illnesses(record, illnesses)
            transaction.on_commit(lambda: _discard_picture(replaced))
    except DatabaseError:
        if picture is not None:
            _discard_picture(record.profile_picture.name)
        raise

    log_action(hospital=hospital, action='patient_update', object_type='patient', object_id=record.id,
               detail={'fields': sorted(data.keys()), 'visitAppended': appended})
    return get_record(record.id)


def _parse_search_date(value: str) -> Optional[date]:
    try:
        parsed = parse_date(value)
        if parsed is None:
            dt = parse_datetime(value)
            parsed = dt.date() if dt else None
    except ValueError:
        return None
    return parsed


def search_records(criteria: dict) -> QuerySet:
    """AND together every supplied filter; raise when nothing matches."""
    qs = _records()
    for key, lookup in SEARCH_LOOKUPS.items():
        value = (criteria.get(key) or '').strip()
        if value:
            qs = qs.filter(**{lookup: value})

    dob = (criteria.get('date_of_birth') or '').strip()
    if dob:
        parsed = _parse_search_date(dob)
        qs = qs.filter(date_of_birth=parsed) if parsed else qs.none()

    qs = qs.distinct().order_by('id')
    if not qs.exists():
        raise NotFoundError('No users found matching your search.')
    return qs


def delete_record(record_id) -> QuerySet:
    """Delete the record if it exists and return the remaining records."""
    deleted, _ = PatientRecord.objects.filter(pk=record_id).delete()
    if deleted:
        log_action(hospital=None, action='patient_delete', object_type='patient', object_id=record_id)
        logger.info('patient record %s deleted', record_id)
    return list_records()


def clear_records() -> int:
    deleted, _ = PatientRecord.objects.all().delete()
    log_action(hospital=None, action='patient_clear', object_type='patient', detail={'deleted': deleted})
    logger.info('cleared %d patient rows', deleted)
    return deleted
