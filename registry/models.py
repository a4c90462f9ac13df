"""
Database models for the patient record registry.

Hospitals are the registering facilities; each is identified externally by
its registration ID, which is also the value carried in the bearer tokens
hospitals authenticate with.  Patient records hold a person's medical
identity together with two ordered child lists: the hospitals that have
handled the patient and the illnesses recorded for them.
"""
from __future__ import annotations

from django.db import models
from django.utils import timezone


class Hospital(models.Model):
    """A registered care facility.

    Instances double as the authenticated principal of API requests (see
    :mod:`registry.authentication`), hence the ``is_authenticated`` flag
    DRF permission classes look for.
    """
    name = models.CharField(max_length=255)
    reg_id = models.CharField(
        max_length=64,
        unique=True,
        help_text="Registration identifier used as the external lookup key",
    )
    hospital_type = models.CharField(max_length=100)
    contact_email = models.EmailField()
    address = models.CharField(max_length=500)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    is_authenticated = True
    is_anonymous = False

    class Meta:
        ordering = ['id']

    def __str__(self) -> str:
        return f"{self.name} ({self.reg_id})"


class PatientRecord(models.Model):
    """A person's medical identity record."""
    GENDER_CHOICES = [
        ('Male', 'Male'),
        ('Female', 'Female'),
        ('Other', 'Other'),
    ]
    full_name = models.CharField(max_length=255, db_index=True)
    address = models.CharField(max_length=500)
    gender = models.CharField(max_length=10, choices=GENDER_CHOICES, db_index=True)
    genotype = models.CharField(max_length=10)
    blood_group = models.CharField(max_length=10)
    # Null when the patient has no recorded disability
    disability = models.TextField(null=True, blank=True)
    phone_number = models.CharField(max_length=32)
    date_of_birth = models.DateField()
    profile_picture = models.FileField(upload_to='uploads/', null=True, blank=True)
    profile_picture_type = models.CharField(max_length=100, blank=True)
    additional_notes = models.TextField(null=True, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ['id']

    def __str__(self) -> str:
        return f"{self.full_name} ({self.id})"

    def has_visit_from(self, hospital_name: str) -> bool:
        """Exact-name check used to keep one visit entry per hospital."""
        return self.previous_hospitals.filter(hospital_name=hospital_name).exists()


class HospitalVisit(models.Model):
    """One entry of a record's visit history, kept in insertion order."""
    record = models.ForeignKey(PatientRecord, on_delete=models.CASCADE, related_name='previous_hospitals')
    hospital_name = models.CharField(max_length=255, db_index=True)
    date_visited = models.DateTimeField(default=timezone.now)

    class Meta:
        ordering = ['id']

    def __str__(self) -> str:
        return f"{self.hospital_name} @ {self.date_visited:%Y-%m-%d}"


class IllnessEntry(models.Model):
    """One entry of a record's illness history."""
    record = models.ForeignKey(PatientRecord, on_delete=models.CASCADE, related_name='previous_illnesses')
    illness = models.CharField(max_length=255)
    date_diagnosed = models.DateField(null=True, blank=True)

    class Meta:
        ordering = ['id']
        verbose_name_plural = 'illness entries'

    def __str__(self) -> str:
        return self.illness


class AuditEvent(models.Model):
    """Append-only trail of mutating API operations."""
    hospital = models.ForeignKey(Hospital, null=True, blank=True, on_delete=models.SET_NULL, related_name='audit_events')
    action = models.CharField(max_length=50, db_index=True)
    object_type = models.CharField(max_length=50, blank=True, null=True)
    object_id = models.CharField(max_length=64, blank=True, null=True)
    detail = models.JSONField(default=dict, blank=True)
    created_at = models.DateTimeField(auto_now_add=True, db_index=True)

    class Meta:
        ordering = ['-created_at', '-id']

    def __str__(self) -> str:
        return f"{self.action} {self.object_type}:{self.object_id}"
