import asyncio

import pytest
from fastapi.testclient import TestClient
from mongomock_motor import AsyncMongoMockClient

from course_service.config import Settings
from course_service.database import COURSES_COLLECTION
from course_service.main import create_app


@pytest.fixture
def settings():
    return Settings(db_name="courses_test", log_level="WARNING")


@pytest.fixture
def database(settings):
    return AsyncMongoMockClient()[settings.db_name]


@pytest.fixture
def client(settings, database):
    app = create_app(settings, database=database)
    return TestClient(app)


def make_course(title, enrolled=0, instructor=None, **extra):
    course = {
        "title": title,
        "price": 10,
        "category": "Math",
        "description": f"{title} course",
        "duration": "4 weeks",
        "thumbnail": f"https://img.example.com/{title}.png",
        "isFeatured": False,
        "studentsEnrolled": enrolled,
        "instructor": instructor or {"name": "A", "email": "a@x.com", "rating": 4},
    }
    course.update(extra)
    return course


@pytest.fixture
def create_course(client):
    def _create(payload):
        resp = client.post("/courses", json=payload)
        assert resp.status_code == 201, resp.text
        return resp.json()["insertedId"]
    return _create


@pytest.fixture
def seed(database):
    """Write documents straight into the collection, bypassing the API"""
    def _seed(*documents):
        result = asyncio.run(database[COURSES_COLLECTION].insert_many(list(documents)))
        return [str(oid) for oid in result.inserted_ids]
    return _seed
