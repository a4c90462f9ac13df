"""
End-to-end flow through the registry API.

Two hospitals register, log in, and share one patient record: the first
creates it, the second updates it, and the record then shows up in a
search by either hospital's name before being deleted.
"""

from django.urls import reverse
from rest_framework import status
from rest_framework.test import APIClient, APITestCase

from registry.models import AuditEvent, HospitalVisit, PatientRecord


class RegistryFlowTests(APITestCase):
    def setUp(self) -> None:
        self.general = {
            "name": "General Hospital",
            "regId": "H1",
            "hospitalType": "General",
            "contactEmail": "admin@general.example",
            "address": "1 Main Street",
        }
        self.clinic = {
            "name": "St. Mary Clinic",
            "regId": "H2",
            "hospitalType": "Clinic",
            "contactEmail": "desk@stmary.example",
            "address": "22 Church Road",
        }
        for payload in (self.general, self.clinic):
            response = self.client.post(reverse("hospital_create"), payload, format="json")
            self.assertEqual(response.status_code, status.HTTP_201_CREATED)

    def login(self, hospital: dict) -> APIClient:
        """Log ``hospital`` in and return a client carrying its bearer token."""
        response = self.client.post(
            reverse("hospital_login"),
            {"regId": hospital["regId"], "contactEmail": hospital["contactEmail"]},
            format="json",
        )
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        client = APIClient()
        client.credentials(HTTP_AUTHORIZATION=f"Bearer {response.data['token']}")
        return client

    def test_record_is_shared_between_hospitals(self):
        general = self.login(self.general)
        clinic = self.login(self.clinic)

        created = general.post(
            "/users/create",
            {
                "fullName": "Grace Hopper",
                "address": "7 Harbor Road",
                "gender": "Female",
                "genotype": "AA",
                "bloodGroup": "AB+",
                "phoneNumber": "555-0142",
                "dateOfBirth": "1906-12-09",
                "previousIllnesses": [{"illness": "Influenza"}],
            },
            format="json",
        )
        self.assertEqual(created.status_code, status.HTTP_201_CREATED)
        record_id = created.data["user"]["id"]

        # The clinic sees the patient for the first time
        updated = clinic.put(f"/users/update/{record_id}", {"phoneNumber": "555-0143"}, format="json")
        self.assertEqual(updated.status_code, status.HTTP_200_OK)
        self.assertEqual(
            [v["hospitalName"] for v in updated.data["user"]["previousHospitals"]],
            ["General Hospital", "St. Mary Clinic"],
        )
        self.assertEqual(updated.data["user"]["previousIllnesses"][0]["illness"], "Influenza")

        # A repeat visit does not add another entry
        clinic.put(f"/users/update/{record_id}", {"additionalNotes": "Follow-up"}, format="json")
        self.assertEqual(HospitalVisit.objects.filter(record_id=record_id).count(), 2)

        for name in ("general", "clinic"):
            found = self.client.get("/users/search", {"hospitalName": name})
            self.assertEqual(found.status_code, status.HTTP_200_OK)
            self.assertEqual([u["id"] for u in found.data["users"]], [record_id])

        deleted = self.client.delete(f"/users/{record_id}")
        self.assertEqual(deleted.status_code, status.HTTP_200_OK)
        self.assertEqual(deleted.data["users"], [])
        self.assertFalse(PatientRecord.objects.exists())
        self.assertFalse(HospitalVisit.objects.exists())

        actions = set(AuditEvent.objects.values_list("action", flat=True))
        self.assertTrue({"hospital_create", "login", "patient_create", "patient_update"} <= actions)

    def test_token_stops_working_once_hospitals_are_cleared(self):
        general = self.login(self.general)
        self.assertEqual(self.client.delete("/hospital").status_code, status.HTTP_200_OK)
        response = general.post(reverse("hospital_verify"), {}, format="json")
        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)
        self.assertEqual(response.data["message"], "Invalid hospital authorization.")
