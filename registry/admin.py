"""
Django admin registrations for the registry models.

Lets superusers inspect hospitals, patient records and the audit trail
under ``/admin/``.  Visit and illness entries are edited inline on their
patient record.
"""

from django.contrib import admin

from .models import AuditEvent, Hospital, HospitalVisit, IllnessEntry, PatientRecord


@admin.register(Hospital)
class HospitalAdmin(admin.ModelAdmin):
    list_display = ('reg_id', 'name', 'hospital_type', 'contact_email', 'created_at')
    list_filter = ('hospital_type',)
    search_fields = ('reg_id', 'name', 'contact_email')


class HospitalVisitInline(admin.TabularInline):
    model = HospitalVisit
    extra = 0


class IllnessEntryInline(admin.TabularInline):
    model = IllnessEntry
    extra = 0


@admin.register(PatientRecord)
class PatientRecordAdmin(admin.ModelAdmin):
    list_display = ('id', 'full_name', 'gender', 'blood_group', 'genotype', 'date_of_birth', 'created_at')
    list_filter = ('gender', 'blood_group', 'genotype')
    search_fields = ('full_name', 'phone_number', 'address')
    inlines = [HospitalVisitInline, IllnessEntryInline]


@admin.register(AuditEvent)
class AuditEventAdmin(admin.ModelAdmin):
    list_display = ('action', 'object_type', 'object_id', 'hospital', 'created_at')
    list_filter = ('action', 'object_type')
    search_fields = ('object_id', 'hospital__reg_id')
