"""Hospital registry: registration, login and lookups by registration ID."""
import logging

from django.db import IntegrityError, transaction

from registry.exceptions import AuthError, NotFoundError, ValidationError
from registry.models import Hospital
from registry.services.audit import log_action

logger = logging.getLogger(__name__)


def resolve_hospital(reg_id: str) -> Hospital:
    hospital = Hospital.objects.filter(reg_id=reg_id).first()
    if not hospital:
        raise NotFoundError('Invalid hospital authorization.')
    return hospital


def list_hospitals():
    return Hospital.objects.order_by('id')


def get_hospital(reg_id: str) -> Hospital:
    hospital = Hospital.objects.filter(reg_id=reg_id).first()
    if not hospital:
        raise NotFoundError('Hospital not found')
    return hospital


def create_hospital(*, name, reg_id, hospital_type, contact_email, address) -> Hospital:
    # regId uniqueness is enforced by the table constraint
    try:
        with transaction.atomic():
            hospital = Hospital.objects.create(
                name=name,
                reg_id=reg_id,
                hospital_type=hospital_type,
                contact_email=contact_email,
                address=address,
            )
    except IntegrityError:
        raise ValidationError('A hospital with this registration ID already exists.')
    log_action(hospital=hospital, action='hospital_create', object_type='hospital', object_id=hospital.reg_id)
    logger.info('hospital %s registered', hospital.reg_id)
    return hospital


def authenticate_hospital(*, reg_id: str, contact_email: str) -> Hospital:
    """Match login credentials against a registered hospital."""
    hospital = Hospital.objects.filter(reg_id=reg_id, contact_email__iexact=contact_email).first()
    if not hospital:
        raise AuthError('Invalid hospital credentials.')
    log_action(hospital=hospital, action='login', object_type='hospital', object_id=hospital.reg_id)
    return hospital


def clear_hospitals() -> int:
    deleted, _ = Hospital.objects.all().delete()
    log_action(hospital=None, action='hospital_clear', object_type='hospital', detail={'deleted': deleted})
    logger.info('cleared %d hospital rows', deleted)
    return deleted
