# -*- coding: utf-8 -*-

"""
Shared fixtures for ReqCheck tests.
"""

import pytest
from fastapi import Depends, FastAPI
from fastapi.testclient import TestClient

from reqcheck import ValidationFailed, ValidationRequest, body, check_schema, header, matched_data, param, query
from reqcheck.integration import validate, validated, validation_failed_handler
from reqcheck.result import validation_result


def build_app() -> FastAPI:
    """Small FastAPI app exercising every integration entry point."""
    app = FastAPI()
    app.add_exception_handler(ValidationFailed, validation_failed_handler)

    user_chains = [
        body("email").trim().normalize_email().is_email().with_message("Invalid email"),
        *check_schema(
            {
                "age": {"in": "body", "optional": {"nullable": True}, "is_int": {"options": {"min": 0}}, "to_int": True},
                "name": {"in": "body", "error_message": "Name is required", "exists": True, "is_length": {"options": {"min": 1}}},
            }
        ),
    ]

    @app.post("/users")
    async def create_user(req: ValidationRequest = Depends(validated(user_chains))):
        return {"data": matched_data(req)}

    @app.get("/items/{item_id}")
    async def get_item(req: ValidationRequest = Depends(validate(param("item_id").is_int(), query("q").optional().is_alpha()))):
        return {"errors": [error.to_dict() for error in req.validation_errors], "params": req.params}

    @app.get("/secure")
    async def secure(req: ValidationRequest = Depends(validate(header("X-Token").exists().with_message("Missing token")))):
        validation_result(req).throw()
        return {"ok": True}

    return app


@pytest.fixture
def test_client():
    """TestClient for the demo app."""
    with TestClient(build_app()) as client:
        yield client
