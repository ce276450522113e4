"""Shared fixtures: in-memory stores and a FastAPI test client."""

import pytest
from fastapi.testclient import TestClient

from leiturapro import navigation
from leiturapro.main import app
from leiturapro.models import Assessment, SchoolClass, Student
from leiturapro.routers.auth import User, get_current_user
from leiturapro.store import DomainStore, get_store


@pytest.fixture
def store():
	"""Empty store."""
	return DomainStore()


@pytest.fixture
def scenario_store():
	"""One student in class c1 with two assessments on consecutive days."""
	return DomainStore(
		students=[Student(id="s1", name="Ana Souza", class_id="c1", reading_level="Iniciante")],
		assessments=[
			Assessment(id="a1", student_id="s1", date="2024-03-01", wpm=40, accuracy=80),
			Assessment(id="a2", student_id="s1", date="2024-03-02", wpm=60, accuracy=90),
		],
		classes=[
			SchoolClass(id="c1", name="Turma A", grade_level="2º Ano Fundamental"),
			SchoolClass(id="c2", name="Turma B", grade_level="3º Ano Fundamental"),
		],
	)


@pytest.fixture(autouse=True)
def reset_navigators():
	navigation._navigators.clear()
	yield
	navigation._navigators.clear()


@pytest.fixture
def api_store():
	return DomainStore()


@pytest.fixture
def client(api_store):
	"""Test client with an authenticated teacher and a fresh store."""
	app.dependency_overrides[get_store] = lambda: api_store
	app.dependency_overrides[get_current_user] = lambda: User(username="teacher")
	yield TestClient(app)
	app.dependency_overrides.clear()
