from fastapi import FastAPI
from fastapi.testclient import TestClient

from portfolio.api.exceptions import configure_global_exception_handlers
from portfolio.auth.exceptions import ForbiddenException, UnauthenticatedException
from portfolio.commons.exceptions import (
    BaseServiceConflictException,
    BaseServiceException,
    BaseServiceNotFoundException,
    BaseServiceUnProcessableException,
)
from portfolio.commons.relations import BrokenReferenceException
from portfolio.core.db import DuplicateKeyException, StorageFaultException


def _client(exc: Exception) -> TestClient:
    app = FastAPI()
    configure_global_exception_handlers(app)

    @app.get("/boom")
    def boom() -> None:
        raise exc

    return TestClient(app)


def test_base_service_exception_maps_to_400() -> None:
    r = _client(BaseServiceException("nope", "details")).get("/boom")
    assert r.status_code == 400
    assert r.json()["exception"] == {
        "code": 400,
        "message": "nope",
        "details": "details",
        "path": "/boom",
        "method": "GET",
    }


def test_not_found_exception_maps_to_404() -> None:
    assert _client(BaseServiceNotFoundException("missing")).get("/boom").status_code == 404


def test_unprocessable_exception_maps_to_422_content() -> None:
    assert _client(BaseServiceUnProcessableException("bad")).get("/boom").status_code == 422


def test_conflicts_map_to_409() -> None:
    assert _client(BaseServiceConflictException("taken")).get("/boom").status_code == 409
    r = _client(DuplicateKeyException("Duplicate entry", "UNIQUE constraint failed")).get("/boom")
    assert r.status_code == 409
    assert r.json()["exception"]["details"] is None


def test_auth_failures_map_to_401_and_403() -> None:
    assert _client(UnauthenticatedException("Invalid or expired session")).get("/boom").status_code == 401
    assert _client(ForbiddenException("Insufficient permissions")).get("/boom").status_code == 403


def test_core_failures_map_to_500_without_details() -> None:
    for exc in (
        BrokenReferenceException("before image not found", "some-id"),
        StorageFaultException("Storage failure", "disk I/O error"),
    ):
        r = _client(exc).get("/boom")
        assert r.status_code == 500
        assert r.json()["exception"]["message"] == exc.message
        assert r.json()["exception"]["details"] is None
