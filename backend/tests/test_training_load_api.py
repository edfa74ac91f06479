"""API tests for the training load endpoints."""

from datetime import date, timedelta

from stridelab.services.training_load_service import ZONE_DESCRIPTIONS, TrainingLoadZone


class TestAthleteTrainingLoadAPI:

    def test_window_of_daily_values(self, client, athlete, make_workout):
        make_workout(days_ago=0)
        make_workout(days_ago=1, duration_seconds=1500, distance_km=4.0)
        make_workout(days_ago=30)

        response = client.get(f"/api/athletes/{athlete.id}/training-load/", params={"days": 7})

        assert response.status_code == 200
        data = response.json()
        assert len(data["days"]) == 7
        assert data["days"][-1]["date"] == date.today().isoformat()
        assert data["days"][-1]["daily_load"] == 24
        assert data["days"][-2]["daily_load"] == 10
        assert data["total_load"] == 34
        assert data["training_days"] == 2
        assert data["workout_scores"] == [10, 24]

    def test_default_window_from_settings(self, client, athlete):
        response = client.get(f"/api/athletes/{athlete.id}/training-load/")
        assert len(response.json()["days"]) == 60

    def test_reference_date(self, client, athlete, make_workout):
        make_workout(days_ago=10)
        reference = date.today() - timedelta(days=10)

        response = client.get(
            f"/api/athletes/{athlete.id}/training-load/",
            params={"days": 5, "reference_date": reference.isoformat()},
        )

        assert response.json()["days"][-1]["daily_load"] == 24

    def test_window_out_of_range(self, client, athlete):
        response = client.get(f"/api/athletes/{athlete.id}/training-load/", params={"days": 0})
        assert response.status_code == 422

    def test_status(self, client, athlete, make_workout):
        make_workout(days_ago=0)

        response = client.get(f"/api/athletes/{athlete.id}/training-load/status")

        data = response.json()
        assert data["zone"] == "Detraining"
        assert data["zone_description"] == ZONE_DESCRIPTIONS[TrainingLoadZone.DETRAINING]
        assert data["atl"] > data["ctl"] > 0
        assert data["tsb"] < 0

    def test_unknown_athlete(self, client):
        response = client.get("/api/athletes/999/training-load/status")

        assert response.status_code == 404
        assert response.json()["error_code"] == "NOT_FOUND"

    def test_recalculate_and_history(self, client, athlete, make_workout):
        make_workout(days_ago=2)
        url = f"/api/athletes/{athlete.id}/training-load"

        first = client.post(f"{url}/recalculate", params={"days": 10}).json()
        second = client.post(f"{url}/recalculate", params={"days": 10}).json()

        assert first["days_calculated"] == 10
        assert first["records_created"] == 10
        assert second["records_created"] == 0
        assert second["records_updated"] == 10

        history = client.get(f"{url}/history", params={"limit": 5}).json()

        assert len(history) == 5
        assert [r["date"] for r in history] == sorted(r["date"] for r in history)
        assert history[-1]["date"] == date.today().isoformat()
        assert history[-3]["daily_load"] == 24

    def test_history_date_range(self, client, athlete):
        url = f"/api/athletes/{athlete.id}/training-load"
        client.post(f"{url}/recalculate", params={"days": 10})

        history = client.get(f"{url}/history", params={
            "from_date": (date.today() - timedelta(days=4)).isoformat(),
            "to_date": (date.today() - timedelta(days=2)).isoformat(),
        }).json()

        assert len(history) == 3

    def test_history_rejects_inverted_range(self, client, athlete):
        response = client.get(
            f"/api/athletes/{athlete.id}/training-load/history",
            params={"from_date": "2024-02-01", "to_date": "2024-01-01"},
        )

        assert response.status_code == 422
        assert response.json()["error_code"] == "VALIDATION_ERROR_FROM_DATE"


class TestComputeAPI:
    """Stateless computation from workouts in the request body."""

    def test_compute_window(self, client):
        response = client.post("/api/training-load/compute", json={
            "workouts": [
                {"date": "2024-03-31T07:00:00", "duration_seconds": 1500, "distance_km": 4.0},
                {"date": "2024-03-31T18:00:00", "duration_seconds": 3000, "distance_km": 5.0},
                {"date": "2024-03-20T18:00:00", "duration_seconds": 3600, "distance_km": 10.0},
            ],
            "window_days": 10,
            "reference_date": "2024-03-31",
        })

        assert response.status_code == 200
        data = response.json()
        assert len(data["days"]) == 10
        assert data["days"][0]["date"] == "2024-03-22"
        assert data["days"][-1]["daily_load"] == 25
        assert data["workout_scores"] == [10, 15, 24]
        assert data["total_load"] == 25
        assert data["status"]["date"] == "2024-03-31"

    def test_compute_uses_profile(self, client):
        workout = {"date": "2024-03-31T07:00:00", "duration_seconds": 3600, "avg_heart_rate": 160}

        male = client.post("/api/training-load/compute", json={
            "workouts": [workout],
            "profile": {"max_heart_rate": 190, "resting_heart_rate": 60, "sex": "male"},
            "window_days": 1,
            "reference_date": "2024-03-31",
        }).json()
        female = client.post("/api/training-load/compute", json={
            "workouts": [workout],
            "profile": {"max_heart_rate": 190, "resting_heart_rate": 60, "sex": "female"},
            "window_days": 1,
            "reference_date": "2024-03-31",
        }).json()

        assert female["workout_scores"][0] < male["workout_scores"][0]

    def test_compute_without_workouts(self, client):
        response = client.post("/api/training-load/compute", json={"window_days": 14})

        data = response.json()
        assert len(data["days"]) == 14
        assert data["status"]["zone"] == "Detraining"
        assert data["status"]["ramp_rate"] == 0

    def test_compute_rejects_empty_window(self, client):
        response = client.post("/api/training-load/compute", json={"window_days": 0})
        assert response.status_code == 422

    def test_compute_zero_heart_rate_scores_pace(self, client):
        response = client.post("/api/training-load/compute", json={
            "workouts": [{
                "date": "2024-03-31T07:00:00",
                "duration_seconds": 3600,
                "distance_km": 10.0,
                "avg_heart_rate": 0,
            }],
            "window_days": 7,
            "reference_date": "2024-03-31",
        })

        assert response.json()["workout_scores"] == [24]

    def test_compute_profile_without_max_uses_session_max(self, client):
        workout = {
            "date": "2024-03-31T07:00:00",
            "duration_seconds": 3600,
            "avg_heart_rate": 150,
            "max_heart_rate": 170,
        }

        with_profile = client.post("/api/training-load/compute", json={
            "workouts": [workout],
            "profile": {"resting_heart_rate": 60},
            "window_days": 1,
            "reference_date": "2024-03-31",
        }).json()
        without_profile = client.post("/api/training-load/compute", json={
            "workouts": [workout],
            "window_days": 1,
            "reference_date": "2024-03-31",
        }).json()

        assert with_profile["workout_scores"] == without_profile["workout_scores"]
