"""Integration tests for the HTTP surface."""

from unittest.mock import AsyncMock, MagicMock

import pytest

from leiturapro.main import app
from leiturapro.routers.reports import get_gemini_client


def _add_class(client, name="Turma A", grade="2º Ano Fundamental"):
	r = client.post("/classes", json={"name": name, "grade_level": grade})
	assert r.status_code == 201
	return r.json()


def _add_student(client, name, class_id="", level="Iniciante"):
	r = client.post("/students", json={"name": name, "class_id": class_id, "reading_level": level})
	assert r.status_code == 201
	return r.json()


def _add_assessment(client, student_id, date, wpm, accuracy):
	return client.post("/assessments", json={"student_id": student_id, "date": date, "wpm": wpm, "accuracy": accuracy})


class TestClassesAPI:
	def test_crud(self, client):
		cls = _add_class(client)
		_add_student(client, "Ana", cls["id"])

		listed = client.get("/classes").json()
		assert listed[0]["student_count"] == 1

		r = client.put(f"/classes/{cls['id']}", json={"name": "Turma Azul", "grade_level": "2º Ano"})
		assert r.json()["name"] == "Turma Azul"

		r = client.delete(f"/classes/{cls['id']}")
		assert r.json() == {"ok": True, "unassigned_students": 1}
		assert client.get("/classes").json() == []
		assert client.get("/students").json()[0]["class_id"] == ""

	def test_unknown_class_is_404(self, client):
		assert client.delete("/classes/nope").status_code == 404
		assert client.put("/classes/nope", json={"name": "x"}).status_code == 404


class TestStudentsAPI:
	def test_filters(self, client):
		a = _add_class(client, "A")
		b = _add_class(client, "B")
		_add_student(client, "Ana Souza", a["id"])
		_add_student(client, "Bruno", b["id"])
		_add_student(client, "Mariana", b["id"])

		assert [s["name"] for s in client.get("/students", params={"class_id": b["id"]}).json()] == ["Bruno", "Mariana"]
		assert [s["name"] for s in client.get("/students", params={"search": "ANA"}).json()] == ["Ana Souza", "Mariana"]

	def test_unknown_class_rejected(self, client):
		r = client.post("/students", json={"name": "Ana", "class_id": "missing"})
		assert r.status_code == 400

	def test_update_keeps_avatar_when_blank(self, client):
		student = _add_student(client, "Ana")
		r = client.put(f"/students/{student['id']}", json={"name": "Ana Lima", "reading_level": "Fluente"})
		assert r.status_code == 200
		assert r.json()["avatar_url"] == student["avatar_url"]
		assert r.json()["reading_level"] == "Fluente"

	def test_delete_keeps_assessments(self, client):
		student = _add_student(client, "Ana")
		_add_assessment(client, student["id"], "2024-03-01", 40, 80)

		assert client.delete(f"/students/{student['id']}").status_code == 200
		assert client.get(f"/students/{student['id']}/history").status_code == 404
		assert len(client.get("/assessments").json()) == 1

	def test_history(self, client):
		cls = _add_class(client)
		student = _add_student(client, "Ana", cls["id"])
		_add_assessment(client, student["id"], "2024-03-02", 60, 90)
		_add_assessment(client, student["id"], "2024-03-01", 40, 80)

		body = client.get(f"/students/{student['id']}/history").json()

		assert body["student"]["grade"] == "2º Ano Fundamental"
		assert [a["date"] for a in body["assessments"]] == ["2024-03-01", "2024-03-02"]


class TestAssessmentsAPI:
	def test_malformed_date_is_422(self, client):
		student = _add_student(client, "Ana")
		assert _add_assessment(client, student["id"], "01/03/2024", 40, 80).status_code == 422

	def test_unpadded_date_normalized(self, client):
		student = _add_student(client, "Ana")
		r = _add_assessment(client, student["id"], "2024-3-1", 40, 80)
		assert r.status_code == 201
		assert r.json()["date"] == "2024-03-01"

	def test_unknown_student_rejected(self, client):
		assert _add_assessment(client, "ghost", "2024-03-01", 40, 80).status_code == 400

	def test_filter_by_student(self, client):
		ana = _add_student(client, "Ana")
		bia = _add_student(client, "Bia")
		_add_assessment(client, ana["id"], "2024-03-01", 40, 80)
		_add_assessment(client, bia["id"], "2024-03-01", 50, 85)
		listed = client.get("/assessments", params={"student_id": bia["id"]}).json()
		assert [a["wpm"] for a in listed] == [50]


class TestDashboardAPI:
	def test_class_scenario(self, client):
		c1 = _add_class(client)
		c2 = _add_class(client, "Turma B")
		student = _add_student(client, "Ana", c1["id"])
		_add_assessment(client, student["id"], "2024-03-01", 40, 80)
		_add_assessment(client, student["id"], "2024-03-02", 60, 90)

		body = client.get("/dashboard", params={"class_id": c1["id"]}).json()
		assert body["stats"] == {"student_count": 1, "assessment_count": 2, "avg_wpm": 50, "avg_accuracy": 85}
		assert body["trend"] == [{"date": "01/03", "avg_wpm": 40}, {"date": "02/03", "avg_wpm": 60}]
		assert body["levels"] == [{"name": "Iniciante", "count": 1}]

		empty = client.get("/dashboard", params={"class_id": c2["id"]}).json()
		assert empty["stats"] == {"student_count": 0, "assessment_count": 0, "avg_wpm": 0, "avg_accuracy": 0}
		assert empty["trend"] == []

	def test_dashboard_reflects_new_data(self, client):
		student = _add_student(client, "Ana")
		assert client.get("/dashboard").json()["stats"]["assessment_count"] == 0
		_add_assessment(client, student["id"], "2024-03-01", 40, 80)
		assert client.get("/dashboard").json()["stats"]["assessment_count"] == 1


class TestNavigationAPI:
	def test_history_fallback(self, client):
		student = _add_student(client, "Ana")
		assert client.post("/navigation/view-history", json={"student_id": student["id"]}).json()["view"] == "student_history"

		client.delete(f"/students/{student['id']}")

		assert client.get("/navigation").json()["view"] == "dashboard"

	def test_class_filter_cleared_by_menu(self, client):
		cls = _add_class(client)
		screen = client.post("/navigation/view-class-students", json={"class_id": cls["id"]}).json()
		assert screen["data"]["class_id"] == cls["id"]

		client.post("/navigation/navigate", json={"view": "classes"})
		screen = client.post("/navigation/navigate", json={"view": "students"}).json()
		assert screen["data"]["class_id"] == ""

	def test_saving_assessment_returns_to_dashboard(self, client):
		student = _add_student(client, "Ana")
		client.post("/navigation/navigate", json={"view": "assessment"})
		_add_assessment(client, student["id"], "2024-03-01", 40, 80)
		assert client.get("/navigation").json()["view"] == "dashboard"

	def test_back_after_fallback_is_409(self, client):
		student = _add_student(client, "Ana")
		client.post("/navigation/view-history", json={"student_id": student["id"]})
		client.delete(f"/students/{student['id']}")
		assert client.get("/navigation").json()["view"] == "dashboard"

		r = client.post("/navigation/back")

		assert r.status_code == 409
		assert client.get("/navigation").json()["view"] == "dashboard"

	def test_cancel_outside_assessment_is_409(self, client):
		assert client.post("/navigation/cancel-assessment").status_code == 409
		client.post("/navigation/navigate", json={"view": "assessment"})
		assert client.post("/navigation/cancel-assessment").json()["view"] == "dashboard"

	def test_saving_outside_assessment_keeps_view(self, client):
		student = _add_student(client, "Ana")
		client.post("/navigation/navigate", json={"view": "classes"})
		_add_assessment(client, student["id"], "2024-03-01", 40, 80)
		assert client.get("/navigation").json()["view"] == "classes"

	def test_unknown_view_is_422(self, client):
		assert client.post("/navigation/navigate", json={"view": "settings"}).status_code == 422


@pytest.fixture
def gemini():
	fake = MagicMock()
	fake.generate = AsyncMock(return_value="## Relatório")
	fake.generate_json = AsyncMock(return_value='{"title": "O Sapo", "content": "Era uma vez", "questions": ["a", "b", "c"]}')
	app.dependency_overrides[get_gemini_client] = lambda: fake
	return fake


class TestReportsAPI:
	def test_student_analysis(self, client, gemini):
		student = _add_student(client, "Ana")
		r = client.post(f"/reports/students/{student['id']}/analysis")
		assert r.status_code == 200
		assert r.json() == {"student_id": student["id"], "report": "## Relatório"}

	def test_analysis_unknown_student(self, client, gemini):
		assert client.post("/reports/students/ghost/analysis").status_code == 404

	def test_reading_material(self, client, gemini):
		r = client.post("/reports/reading-material", json={"level": "3º Ano Fundamental", "topic": "sapos"})
		assert r.status_code == 200
		assert r.json()["level"] == "3º Ano Fundamental"
		assert r.json()["questions"] == ["a", "b", "c"]

	def test_reading_material_bad_reply_is_502(self, client, gemini):
		gemini.generate_json.return_value = ""
		r = client.post("/reports/reading-material", json={"topic": "sapos"})
		assert r.status_code == 502

	def test_missing_api_key_is_503(self, client, monkeypatch):
		from leiturapro import gemini_client
		monkeypatch.setattr(gemini_client.settings, "gemini_api_key", None)
		r = client.post("/reports/reading-material", json={"topic": "sapos"})
		assert r.status_code == 503
