"""Shared fixtures for API tests."""

from __future__ import annotations

import os
import unittest
from typing import Any

from fastapi.testclient import TestClient

from app.adapters.auth import JwtTokenIssuer
from app.core.config import get_settings
from app.core.security import hash_password
from app.main import create_app

TEST_JWT_SECRET = "test-jwt-secret-with-enough-entropy-0123456789"


class SettingsEnvCase(unittest.TestCase):
    _env_keys = (
        "DEVCAMPER_JWT_SECRET",
        "DEVCAMPER_JWT_EXPIRE_DAYS",
        "DEVCAMPER_ENVIRONMENT",
    )

    def setUp(self) -> None:
        self._old_env = {k: os.environ.get(k) for k in self._env_keys}
        os.environ["DEVCAMPER_JWT_SECRET"] = TEST_JWT_SECRET
        os.environ.pop("DEVCAMPER_JWT_EXPIRE_DAYS", None)
        os.environ["DEVCAMPER_ENVIRONMENT"] = "development"
        get_settings.cache_clear()

    def tearDown(self) -> None:
        for key, value in self._old_env.items():
            if value is None:
                os.environ.pop(key, None)
            else:
                os.environ[key] = value
        get_settings.cache_clear()


class ApiCase(SettingsEnvCase):
    """Fresh app and store per test, with helpers to mint principals."""

    def setUp(self) -> None:
        super().setUp()
        self.app = create_app()
        self.store = self.app.state.store
        self.client = TestClient(self.app)
        self._user_seq = 0

    def create_user(self, role: str = "user", *, password: str = "secret123") -> tuple[str, dict[str, str]]:
        """Insert a user straight into the store and return ``(user_id, headers)``."""
        self._user_seq += 1
        record = self.store.users.insert_one(
            {
                "name": f"{role.title()} {self._user_seq}",
                "email": f"{role}{self._user_seq}@example.com",
                "role": role,
                "password": hash_password(password),
            }
        )
        token = JwtTokenIssuer(secret=TEST_JWT_SECRET).issue_token(record["id"])
        return record["id"], {"Authorization": f"Bearer {token}"}

    def create_bootcamp(self, headers: dict[str, str], **overrides: Any) -> dict[str, Any]:
        response = self.client.post("/api/v1/bootcamps", headers=headers, json=bootcamp_payload(**overrides))
        self.assertEqual(response.status_code, 201, response.text)
        return response.json()["data"]

    def create_course(self, headers: dict[str, str], bootcamp_id: str, **overrides: Any) -> dict[str, Any]:
        response = self.client.post(
            f"/api/v1/bootcamps/{bootcamp_id}/courses",
            headers=headers,
            json=course_payload(**overrides),
        )
        self.assertEqual(response.status_code, 201, response.text)
        return response.json()["data"]

    def create_review(self, headers: dict[str, str], bootcamp_id: str, **overrides: Any) -> dict[str, Any]:
        response = self.client.post(
            f"/api/v1/bootcamps/{bootcamp_id}/reviews",
            headers=headers,
            json=review_payload(**overrides),
        )
        self.assertEqual(response.status_code, 201, response.text)
        return response.json()["data"]


def bootcamp_payload(**overrides: Any) -> dict[str, Any]:
    payload: dict[str, Any] = {
        "name": "Devworks Bootcamp",
        "description": "Full stack web development from the ground up.",
        "website": "https://devworks.example.com",
        "phone": "(111) 111-1111",
        "email": "enroll@devworks.example.com",
        "address": "233 Bay State Rd Boston MA 02215",
        "careers": ["Web Development", "UI/UX"],
        "housing": True,
        "job_assistance": True,
    }
    payload.update(overrides)
    return payload


def course_payload(**overrides: Any) -> dict[str, Any]:
    payload: dict[str, Any] = {
        "title": "Front End Web Development",
        "description": "HTML, CSS and JavaScript fundamentals.",
        "weeks": 8,
        "tuition": 8000,
        "minimum_skill": "beginner",
        "scholarship_available": True,
    }
    payload.update(overrides)
    return payload


def review_payload(**overrides: Any) -> dict[str, Any]:
    payload: dict[str, Any] = {
        "title": "Learned a ton",
        "text": "Great instructors and a practical curriculum.",
        "rating": 8,
    }
    payload.update(overrides)
    return payload
