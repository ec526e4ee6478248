"""
API Integration Tests

FastAPI 엔드포인트 통합 테스트
"""
from tests.test_helpers import make_skeleton, skeleton_payload, to_mediapipe_frame


class TestRouterDiscovery:

    def test_each_api_module_router_registered_once(self, app):
        paths = [route.path for route in app.routes if hasattr(route, "methods")]
        for path in ("/health", "/exercises", "/pose/analyze"):
            assert paths.count(path) == 1


class TestHealthEndpoint:

    def test_health_check(self, client):
        response = client.get("/health")
        assert response.status_code == 200
        assert response.json() == {"status": "ok"}


class TestExercisesEndpoint:

    def test_lists_registered_exercises(self, client):
        response = client.get("/exercises")
        assert response.status_code == 200

        exercises = {e["exercise_type"]: e["stages"] for e in response.json()}
        assert exercises["arm_raise"] == ["up", "down"]
        assert "high_knee_raise" in exercises


class TestPoseAnalyzeEndpoint:

    def test_named_landmarks(self, client):
        skeleton = make_skeleton()
        response = client.post("/pose/analyze", json={
            "exercise_type": "arm_raise",
            "target_stage": "up",
            "landmarks": skeleton_payload(skeleton),
        })
        assert response.status_code == 200

        data = response.json()
        assert data["target_pose"]["joints"]["left_shoulder"] == {
            "x": skeleton["left_shoulder"].x,
            "y": skeleton["left_shoulder"].y,
        }
        assert {c["joint"] for c in data["corrections"]} == {
            "left_elbow", "right_elbow", "left_wrist", "right_wrist",
        }
        assert all(c["severity"] == "error" for c in data["corrections"])
        assert "up" in data["corrections"][0]["direction"]

    def test_mediapipe_list(self, client):
        response = client.post("/pose/analyze", json={
            "exercise_type": "knee_raise",
            "target_stage": "down",
            "landmarks": to_mediapipe_frame(make_skeleton()),
            "include_ok": True,
        })
        assert response.status_code == 200

        corrections = response.json()["corrections"]
        assert corrections
        assert all(c["severity"] == "ok" for c in corrections)

    def test_unknown_exercise_returns_null_target(self, client):
        response = client.post("/pose/analyze", json={
            "exercise_type": "burpee",
            "target_stage": "up",
            "landmarks": skeleton_payload(make_skeleton()),
        })
        assert response.status_code == 200
        assert response.json()["target_pose"] is None
        assert response.json()["corrections"] == []

    def test_missing_anchor_returns_null_target(self, client):
        response = client.post("/pose/analyze", json={
            "exercise_type": "arm_raise",
            "target_stage": "up",
            "landmarks": skeleton_payload(make_skeleton(omit=["left_hip"])),
        })
        assert response.status_code == 200
        assert response.json()["target_pose"] is None

    def test_invalid_body(self, client):
        response = client.post("/pose/analyze", json={"exercise_type": "arm_raise"})
        assert response.status_code == 422
