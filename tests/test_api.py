"""
Integration tests for the local HTTP API.
"""

import pytest
from fastapi.testclient import TestClient

from healthapp.main import app


@pytest.fixture
def client():
    # Entering the client runs the lifespan: state is created and loaded
    with TestClient(app) as test_client:
        yield test_client


class TestRootEndpoints:

    def test_root(self, client):
        response = client.get("/")
        assert response.status_code == 200
        assert response.json()["status"] == "running"

    def test_health(self, client):
        response = client.get("/health")
        assert response.status_code == 200
        assert response.json()["status"] == "healthy"


class TestMetricsAPI:
    """Tests for the metrics endpoints."""

    def test_today_is_camel_case(self, client):
        data = client.get("/metrics/today").json()
        assert data["steps"] == 5420
        assert data["bloodPressure"] == "120/80"

    def test_add_steps_then_log_day(self, client):
        response = client.post("/metrics/today/steps", json={"amount": 500})
        assert response.json()["steps"] == 5920

        response = client.post("/metrics/log-day")
        assert response.status_code == 200
        data = response.json()
        assert data["outcome"] == "none"
        assert data["state"]["history"][0]["steps"] == 5920
        assert data["state"]["today"]["steps"] == 5420

    def test_patch_today(self, client):
        response = client.patch("/metrics/today", json={"bloodSugar": 120, "sleep": 6.5})
        assert response.status_code == 200
        assert response.json()["bloodSugar"] == 120

    def test_unknown_metric_is_400(self, client):
        response = client.put("/metrics/today/heartRate", json={"value": 70})
        assert response.status_code == 400
        assert "heartRate" in response.json()["detail"]

    def test_bad_value_is_400(self, client):
        response = client.put("/metrics/today/steps", json={"value": "lots"})
        assert response.status_code == 400

    def test_water_floored(self, client):
        response = client.post("/metrics/today/water", json={"amount": -1000})
        assert response.json()["water"] == 0

    def test_recommendations_and_stats(self, client):
        assert 1 <= len(client.get("/metrics/recommendations").json()) <= 4
        weekly = client.get("/metrics/weekly").json()
        assert set(weekly) == {"avgSteps", "avgSleep", "avgWater"}
        long_term = client.get("/metrics/long-term").json()
        assert "bestStepsDay" in long_term
        assert isinstance(client.get("/metrics/history").json(), list)


class TestGoalsAPI:

    def test_partial_update(self, client):
        response = client.patch("/goals", json={"steps": 12000})
        assert response.status_code == 200
        assert response.json()["steps"] == 12000
        assert client.get("/goals").json()["steps"] == 12000

    def test_negative_goal_rejected(self, client):
        assert client.patch("/goals", json={"water": -5}).status_code == 422


class TestProfileAPI:

    def test_get_includes_bmi(self, client):
        data = client.get("/profile").json()
        assert "bmi" in data
        assert data["bmiCategory"] in {"Underweight", "Normal", "Overweight", "Obese"}

    def test_update_weight_syncs_today(self, client):
        response = client.patch("/profile", json={"weight": 180, "height": 70})
        assert response.status_code == 200
        assert response.json()["weight"] == 180
        assert client.get("/metrics/today").json()["weight"] == 180

    def test_non_positive_height_rejected(self, client):
        before = client.get("/profile").json()
        assert client.patch("/profile", json={"height": 0}).status_code == 422
        assert client.get("/profile").json()["height"] == before["height"]

    def test_replace(self, client):
        response = client.put("/profile", json={"name": "Sam", "height": 68, "weight": 150})
        assert response.status_code == 200
        assert response.json()["name"] == "Sam"


class TestJournalsAPI:

    def test_meal_lifecycle(self, client):
        response = client.post("/meals", json={
            "date": "2024-03-10", "mealType": "lunch", "foodName": "Soup", "calories": 250,
        })
        assert response.status_code == 201
        entry = response.json()
        assert entry["id"]

        assert any(e["id"] == entry["id"] for e in client.get("/meals", params={"date": "2024-03-10"}).json())
        assert client.get("/meals/totals", params={"date": "2024-03-10"}).json()["calories"] >= 250

        assert client.delete(f"/meals/{entry['id']}").status_code == 204
        assert client.delete(f"/meals/{entry['id']}").status_code == 404

    def test_bad_meal_type_rejected(self, client):
        response = client.post("/meals", json={"date": "2024-03-10", "mealType": "brunch", "foodName": "Eggs"})
        assert response.status_code == 422

    def test_exercise_totals(self, client):
        client.post("/exercises", json={
            "date": "2024-01-02", "exerciseType": "Swim", "duration": 25, "caloriesBurned": 200,
        })
        totals = client.get("/exercises/totals", params={"date": "2024-01-02"}).json()
        assert totals["duration"] >= 25

    def test_tracking_readings(self, client):
        first = client.post("/tracking/readings/sample")
        assert first.status_code == 201
        reading = first.json()
        assert 55 <= reading["heartRate"] <= 114
        assert 0 <= reading["steps"] < 15000
        assert reading["timestamp"].endswith("Z")

        client.post("/tracking/readings/sample")
        readings = client.get("/tracking/readings").json()
        assert len(readings) == 2
        assert readings[0]["timestamp"] >= readings[1]["timestamp"]

        assert client.delete("/tracking/readings").status_code == 204
        assert client.get("/tracking/readings").json() == []


class TestAIAPI:
    """AI endpoints answer with fallbacks when no key is configured."""

    def test_status(self, client):
        assert client.get("/ai/status").json() == {"configured": False}

    def test_chat_fallback(self, client):
        response = client.post("/ai/chat", json={"message": "Hello"})
        assert response.status_code == 200
        assert "trouble connecting" in response.json()["reply"]

    def test_greeting(self, client):
        assert client.get("/ai/greeting").json()["message"]

    def test_workout_plan(self, client):
        response = client.post("/ai/workout-plan", json={"duration": 20})
        assert response.json()["duration"] == 20

    def test_insights_and_meals(self, client):
        assert 1 <= len(client.get("/ai/insights").json()) <= 3
        assert len(client.post("/ai/meal-recommendations", json={}).json()) == 2


class TestPreferencesAPI:

    def test_theme(self, client):
        assert client.put("/preferences/theme", json={"preference": "dark"}).json() == {"preference": "dark"}
        assert client.get("/preferences/theme").json() == {"preference": "dark"}

    def test_invalid_theme(self, client):
        assert client.put("/preferences/theme", json={"preference": "sepia"}).status_code == 422


class TestExportAPI:

    def test_meal_log_export(self, client):
        client.post("/metrics/today/calories", json={"amount": 100})
        response = client.post("/export/meal-log")
        assert response.status_code == 200
        assert response.json()["filename"].startswith("meal-log-")
