"""Integration tests for the public lead intake endpoint.

Run with: pytest tests/integration/api/test_intake_flow.py -v
"""

from uuid import UUID

INTAKE_URL = "/api/v1/get-started"


class TestIntakeFlow:
    """Tests for POST /api/v1/get-started."""

    def test_matched_lead(self, client, form_data, submission_store):
        """Test that a lead is analyzed, stored and answered."""
        response = client.post(INTAKE_URL, json=form_data)

        assert response.status_code == 201
        body = response.json()
        assert body["success"] is True
        assert body["primaryCategory"] == "Mobile App Development"
        assert body["confidenceScore"] == 0.9
        assert body["detectedKeywords"] == ["ios"]
        assert body["assignedStaff"] == [{
            "id": "staff_003",
            "name": "Marcus Johnson",
            "role": "Mobile Lead",
            "email": "mobile@forgerdigital.com",
        }]

        stored = submission_store[UUID(body["submissionId"])]
        assert stored.phone == "+15550102030"
        assert stored.contact_method == "phone"
        assert stored.assignment_data["analysisLog"][0].startswith("Starting analysis for 1 services")

    def test_unmatched_lead(self, client, form_data):
        form_data["serviceInterests"] = ["Branding"]
        form_data["projectDescription"] = "Looking forward to chatting soon"

        response = client.post(INTAKE_URL, json=form_data)

        assert response.status_code == 201
        body = response.json()
        assert body["assignedStaff"] == []
        assert body["confidenceScore"] == 0.1
        assert body["primaryCategory"] == "Branding"

    def test_multiple_signals(self, client, form_data):
        form_data["serviceInterests"] = ["AI Integration", "Cloud Infrastructure & DevOps"]
        form_data["projectDescription"] = "An LLM assistant hosted on AWS"

        body = client.post(INTAKE_URL, json=form_data).json()

        assert [s["id"] for s in body["assignedStaff"]] == ["staff_005", "staff_004"]
        assert body["detectedKeywords"] == ["aws", "llm"]

    def test_validation_error(self, client, form_data, submission_store):
        form_data["projectDescription"] = "Too short"

        response = client.post(INTAKE_URL, json=form_data)

        assert response.status_code == 422
        body = response.json()
        assert body["success"] is False
        assert body["error_code"] == "VALIDATION_ERROR"
        assert body["details"][0]["field"] == "projectDescription"
        assert submission_store == {}

    def test_invalid_email(self, client, form_data):
        form_data["email"] = "dana-at-acme"

        response = client.post(INTAKE_URL, json=form_data)

        assert response.status_code == 422
        assert "Invalid email address" in response.json()["details"][0]["message"]

    def test_rate_limited(self, client, form_data):
        for _ in range(5):
            assert client.post(INTAKE_URL, json=form_data).status_code == 201

        response = client.post(INTAKE_URL, json=form_data)

        assert response.status_code == 429
        assert response.json()["error_code"] == "RATE_LIMIT_EXCEEDED"
        assert int(response.headers["Retry-After"]) >= 1


class TestHealth:
    def test_health(self, client):
        response = client.get("/health")

        assert response.status_code == 200
        assert response.json()["status"] == "healthy"
