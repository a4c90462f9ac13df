# registry/management/commands/ensure_demo_hospital.py
from django.core.management.base import BaseCommand

from registry.conf import get_config
from registry.models import Hospital
from registry.services.tokens import HospitalTokenService


class Command(BaseCommand):
    help = "Ensure a demo hospital exists and print a bearer token for it (idempotent)."

    def add_arguments(self, parser):
        parser.add_argument('--reg-id', default='H1')
        parser.add_argument('--name', default='General Hospital')
        parser.add_argument('--email', default='admin@general.example')

    def handle(self, *args, **opts):
        hospital, created = Hospital.objects.get_or_create(
            reg_id=opts['reg_id'],
            defaults={
                'name': opts['name'],
                'hospital_type': 'General',
                'contact_email': opts['email'],
                'address': '1 Main Street',
            },
        )
        state = 'created' if created else 'exists'
        self.stdout.write(self.style.SUCCESS(f"{state}: {hospital}"))
        token = HospitalTokenService(get_config()).issue(hospital)
        self.stdout.write(token)
