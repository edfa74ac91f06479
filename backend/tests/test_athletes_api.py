"""API tests for athlete profiles."""

from stridelab.services.trimp_service import trimp_service


class TestAthletesAPI:

    def test_create_athlete(self, client):
        response = client.post("/api/athletes/", json={
            "email": "alex@example.com",
            "first_name": "Alex",
            "max_hr": 188,
            "resting_hr": 52,
            "sex": "female",
        })

        assert response.status_code == 201
        data = response.json()
        assert data["id"] > 0
        assert data["sex"] == "female"
        assert data["max_hr"] == 188

    def test_duplicate_email_conflicts(self, client, athlete):
        response = client.post("/api/athletes/", json={"email": athlete.email})

        assert response.status_code == 409
        assert response.json()["error_code"] == "CONFLICT"

    def test_max_hr_must_exceed_resting(self, client):
        response = client.post("/api/athletes/", json={"max_hr": 60, "resting_hr": 60})
        assert response.status_code == 422

    def test_unknown_sex_rejected(self, client):
        response = client.post("/api/athletes/", json={"sex": "other"})
        assert response.status_code == 422

    def test_get_athlete(self, client, athlete):
        response = client.get(f"/api/athletes/{athlete.id}")

        assert response.status_code == 200
        assert response.json()["email"] == "runner@example.com"

    def test_get_missing_athlete(self, client):
        response = client.get("/api/athletes/999")

        assert response.status_code == 404
        assert response.json()["error_code"] == "NOT_FOUND"

    def test_partial_update(self, client, athlete):
        response = client.patch(f"/api/athletes/{athlete.id}", json={"sex": "male", "max_hr": 185})

        assert response.status_code == 200
        data = response.json()
        assert data["sex"] == "male"
        assert data["max_hr"] == 185
        assert data["resting_hr"] == 60
        assert data["first_name"] == "Sam"

    def test_update_checks_stored_resting_hr(self, client, athlete):
        """max_hr alone is compared against the stored resting_hr."""
        response = client.patch(f"/api/athletes/{athlete.id}", json={"max_hr": 55})

        assert response.status_code == 422
        assert response.json()["error_code"] == "VALIDATION_ERROR_MAX_HR"

    def test_update_email_conflict(self, client, athlete):
        other = client.post("/api/athletes/", json={"email": "other@example.com"}).json()

        response = client.patch(f"/api/athletes/{other['id']}", json={"email": athlete.email})

        assert response.status_code == 409

    def test_health(self, client):
        assert client.get("/health").json() == {"status": "healthy"}
        assert client.get("/api/health").status_code == 200

    def test_heart_rate_change_rescores_workouts(self, client, athlete):
        url = f"/api/athletes/{athlete.id}"
        created = client.post(f"{url}/workouts/", json={
            "title": "Threshold",
            "date": "2024-01-15T07:30:00",
            "duration_seconds": 3600,
            "avg_heart_rate": 160,
        }).json()

        client.patch(url, json={"max_hr": 175})
        rescored = client.get(f"{url}/workouts/{created['id']}").json()

        assert rescored["trimp"] > created["trimp"]
        assert rescored["trimp"] == trimp_service.score_heart_rate(60, 160, 175, 60)

    def test_name_change_keeps_stored_trimp(self, client, athlete, make_workout):
        workout = make_workout(avg_heart_rate=160)
        workout.trimp = 7
        client.patch(f"/api/athletes/{athlete.id}", json={"first_name": "Kim"})

        response = client.get(f"/api/athletes/{athlete.id}/workouts/{workout.id}")

        assert response.json()["trimp"] == 7
