"""
Test suite for the mediation error decorator.

System role: Verification of domain error to HTTP status mapping
"""

import pytest
from fastapi import HTTPException

from mediator.api.routers.router_utils import handle_mediation_errors
from mediator.api.routers.router_utils.error_handling import status_for
from mediator.core.exceptions import (
    AuthenticationError,
    GatewayError,
    MediatorException,
    PersistenceError,
    SessionNotFoundError,
    ValidationError,
)


@pytest.mark.parametrize(
    "error,code",
    [
        (ValidationError("bad"), 400),
        (SessionNotFoundError("K3X9QZ"), 404),
        (AuthenticationError(), 403),
        (GatewayError("down"), 502),
        (PersistenceError("down"), 503),
        (MediatorException("other"), 500),
    ],
)
def test_status_for(error: MediatorException, code: int):
    assert status_for(error) == code


@pytest.mark.asyncio
async def test_decorator_passes_http_exceptions_through():
    @handle_mediation_errors
    async def endpoint():
        raise HTTPException(status_code=418, detail="teapot")

    with pytest.raises(HTTPException) as exc_info:
        await endpoint()

    assert exc_info.value.status_code == 418


@pytest.mark.asyncio
async def test_decorator_maps_domain_errors():
    @handle_mediation_errors
    async def endpoint():
        raise AuthenticationError()

    with pytest.raises(HTTPException) as exc_info:
        await endpoint()

    assert exc_info.value.status_code == 403
    assert exc_info.value.detail == "Incorrect PIN for this session"
