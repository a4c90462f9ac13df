"""Registry application for the patient record backend.

This package contains the hospital and patient record models, their
serializers, service functions, views and route registrations.
"""
