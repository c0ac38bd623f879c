# -*- coding: utf-8 -*-

# ReqCheck
# Copyright (C) 2025 Jwadow
#
# This program is free software: you can redistribute it and/or modify
# it under the terms of the GNU Affero General Public License as published by
# the Free Software Foundation, either version 3 of the License, or
# (at your option) any later version.
#
# This program is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE. See the
# GNU Affero General Public License for more details.
#
# You should have received a copy of the GNU Affero General Public License
# along with this program. If not, see <https://www.gnu.org/licenses/>.

"""
FastAPI integration.

Chains run as route dependencies:

    @app.post("/users")
    async def create_user(req: ValidationRequest = Depends(validated(
        body("email").trim().is_email(),
        *check_schema({"age": {"in": "body", "is_int": True}}),
    ))):
        ...

validate(...) only collects errors on the ValidationRequest it returns;
validated(...) also rejects the request with HTTP 422 when any chain failed.
ValidationFailed raised from a route (Result.throw()) is turned into the same
response by validation_failed_handler.
"""

from typing import Any, Callable, Iterable, List

from fastapi import HTTPException, Request
from fastapi.responses import JSONResponse
from fastapi.encoders import jsonable_encoder
from loguru import logger

from reqcheck.config import VALIDATION_ERROR_STATUS
from reqcheck.errors import FieldError, ValidationFailed
from reqcheck.request import ValidationRequest
from reqcheck.result import validation_result


def _flatten(chains: Iterable[Any]) -> List[Any]:
    """Accept chains directly or lists of chains (check_schema output)."""
    flat: List[Any] = []
    for item in chains:
        if isinstance(item, (list, tuple)):
            flat.extend(item)
        else:
            flat.append(item)
    return flat


def _error_detail(errors: Iterable[Any]) -> dict:
    return {
        "errors": jsonable_encoder(
            [error.to_dict() if isinstance(error, FieldError) else error for error in errors]
        )
    }


async def _run_chains(request: Request, chains: List[Any]) -> ValidationRequest:
    req = await ValidationRequest.from_starlette(request)
    for chain in chains:
        await chain(req)
    return req


def validate(*chains: Any) -> Callable[[Request], Any]:
    """
    Build a dependency that runs the chains and returns the ValidationRequest.

    Errors are left on req.validation_errors for the route to inspect.
    """
    flat = _flatten(chains)

    async def dependency(request: Request) -> ValidationRequest:
        return await _run_chains(request, flat)

    return dependency


def validated(*chains: Any) -> Callable[[Request], Any]:
    """
    Build a dependency that runs the chains and rejects invalid requests.

    Raises:
        HTTPException: VALIDATION_ERROR_STATUS with {"errors": [...]} detail
    """
    flat = _flatten(chains)

    async def dependency(request: Request) -> ValidationRequest:
        req = await _run_chains(request, flat)
        result = validation_result(req)
        if not result.is_empty():
            logger.info(
                "[Validation] Rejecting {} {}: {} error(s)",
                request.method,
                request.url.path,
                len(result),
            )
            raise HTTPException(
                status_code=VALIDATION_ERROR_STATUS,
                detail=_error_detail(result.array()),
            )
        return req

    return dependency


async def validation_failed_handler(request: Request, exc: ValidationFailed) -> JSONResponse:
    """Exception handler for ValidationFailed (register with app.add_exception_handler)."""
    logger.info(
        "[Validation] {} {} raised ValidationFailed with {} error(s)",
        request.method,
        request.url.path,
        len(exc.errors),
    )
    return JSONResponse(status_code=VALIDATION_ERROR_STATUS, content=_error_detail(exc.errors))
