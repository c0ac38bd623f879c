# -*- coding: utf-8 -*-

"""
Integration tests for chains running as FastAPI dependencies.
Checks interaction of the request adapter, chains, schema and results.
"""


class TestValidatedDependency:
    """Tests for routes guarded by validated(...)."""

    def test_valid_request_passes_with_sanitized_data(self, test_client):
        """
        What it does: Sends a valid body and checks matched_data in the response.
        Goal: Sanitized values reach the route.
        """
        print("Step 1: Posting a valid user...")
        response = test_client.post(
            "/users",
            json={"email": "  John.Doe+news@GoogleMail.COM ", "age": "42", "name": "John", "extra": True},
        )

        print(f"Response: {response.status_code} {response.json()}")
        assert response.status_code == 200
        assert response.json()["data"] == {"email": "johndoe@gmail.com", "age": 42, "name": "John"}

    def test_invalid_request_is_rejected_with_errors(self, test_client):
        """
        What it does: Sends an invalid body and checks the 422 payload.
        Goal: Every failed field is reported with location and message.
        """
        response = test_client.post("/users", json={"email": "nope", "age": "-1"})

        print(f"Response: {response.status_code} {response.json()}")
        assert response.status_code == 422
        errors = response.json()["detail"]["errors"]
        assert {"location": "body", "param": "email", "value": "nope", "msg": "Invalid email"} in errors
        assert {"location": "body", "param": "age", "value": "-1", "msg": "Invalid value"} in errors
        assert {"location": "body", "param": "name", "value": None, "msg": "Name is required"} in errors

    def test_null_age_is_optional(self, test_client):
        response = test_client.post("/users", json={"email": "a@gmail.com", "age": None, "name": "A"})

        assert response.status_code == 200


class TestValidateDependency:
    """Tests for routes using validate(...) without automatic rejection."""

    def test_errors_are_left_for_the_route(self, test_client):
        response = test_client.get("/items/abc", params={"q": "123"})

        assert response.status_code == 200
        errors = response.json()["errors"]
        assert [(error["location"], error["param"]) for error in errors] == [
            ("params", "item_id"),
            ("query", "q"),
        ]

    def test_valid_path_parameter(self, test_client):
        response = test_client.get("/items/12")

        assert response.status_code == 200
        assert response.json() == {"errors": [], "params": {"item_id": "12"}}


class TestValidationFailedHandler:
    """Tests for Result.throw() inside a route."""

    def test_missing_header_is_rejected(self, test_client):
        response = test_client.get("/secure")

        print(f"Response: {response.status_code} {response.json()}")
        assert response.status_code == 422
        assert response.json() == {
            "errors": [{"location": "headers", "param": "x-token", "value": None, "msg": "Missing token"}]
        }

    def test_present_header_passes(self, test_client):
        response = test_client.get("/secure", headers={"X-Token": "t"})

        assert response.status_code == 200
        assert response.json() == {"ok": True}
