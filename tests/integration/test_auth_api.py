"""
Integration tests for Authentication API endpoints
"""

import pytest


@pytest.mark.integration
class TestAuthAPI:
    """Integration tests for registration and key issuance"""

    def test_register_returns_working_key(self, client):
        response = client.post(
            "/api/v1/auth/register",
            json={"email": "artist@example.com", "password": "s3cret-pass"}
        )

        assert response.status_code == 201
        api_key = response.json()["api_key"]
        assert api_key.startswith("sv_")

        created = client.post(
            "/api/v1/projects",
            json={"name": "First Scene"},
            headers={"Authorization": f"Bearer {api_key}"}
        )
        assert created.status_code == 201
        assert created.json()["user_id"] == response.json()["user_id"]

    def test_register_duplicate_email(self, client, owner):
        response = client.post(
            "/api/v1/auth/register",
            json={"email": owner.email, "password": "s3cret-pass"}
        )

        assert response.status_code == 400

    def test_register_short_password(self, client):
        response = client.post(
            "/api/v1/auth/register",
            json={"email": "artist@example.com", "password": "short"}
        )

        assert response.status_code == 422

    def test_issue_additional_key(self, client):
        client.post("/api/v1/auth/register", json={"email": "artist@example.com", "password": "s3cret-pass"})

        response = client.post(
            "/api/v1/auth/keys",
            json={"email": "artist@example.com", "password": "s3cret-pass", "name": "Laptop", "expires_in_days": 30}
        )

        assert response.status_code == 201
        assert response.json()["name"] == "Laptop"
        assert response.json()["expires_at"] is not None
        listed = client.get("/api/v1/projects", headers={"Authorization": f"Bearer {response.json()['api_key']}"})
        assert listed.status_code == 200

    def test_issue_key_wrong_password(self, client):
        client.post("/api/v1/auth/register", json={"email": "artist@example.com", "password": "s3cret-pass"})

        response = client.post(
            "/api/v1/auth/keys",
            json={"email": "artist@example.com", "password": "wrong-pass"}
        )

        assert response.status_code == 401
