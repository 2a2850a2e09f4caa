import asyncio
import json

import aiohttp
import pytest

from web3jobs.errors import ClassifiedError, ErrorKind, HttpStatusError, classify


@pytest.mark.parametrize(
    "status,kind",
    [
        (401, ErrorKind.UNAUTHORIZED),
        (403, ErrorKind.FORBIDDEN),
        (429, ErrorKind.RATE_LIMITED),
        (500, ErrorKind.UPSTREAM_SERVER_ERROR),
        (502, ErrorKind.UPSTREAM_SERVER_ERROR),
        (503, ErrorKind.UPSTREAM_SERVER_ERROR),
        (400, ErrorKind.UPSTREAM_CLIENT_ERROR),
        (404, ErrorKind.UPSTREAM_CLIENT_ERROR),
    ],
)
def test_http_status_mapping(status, kind):
    err = classify(HttpStatusError(status, "Reason"))
    assert err.kind == kind
    assert err.status == status
    assert str(status) in err.message


@pytest.mark.parametrize(
    "exc",
    [
        asyncio.TimeoutError(),
        aiohttp.ServerDisconnectedError(),
        aiohttp.ClientConnectionError("Connection reset by peer"),
        aiohttp.ClientPayloadError("Response payload is not completed"),
    ],
)
def test_no_response_is_network_unreachable(exc):
    err = classify(exc)
    assert err.kind == ErrorKind.NETWORK_UNREACHABLE
    assert err.status is None
    assert err.message


def test_undecodable_body_is_malformed():
    err = classify(json.JSONDecodeError("Expecting value", "<html>", 0))
    assert err.kind == ErrorKind.MALFORMED_RESPONSE


def test_non_utf8_body_is_malformed():
    try:
        b"\xff\xfe\x00garbage".decode("utf-8")
    except UnicodeDecodeError as e:
        err = classify(e)
    assert err.kind == ErrorKind.MALFORMED_RESPONSE


def test_anything_else_is_unknown():
    err = classify(RuntimeError("boom"))
    assert err.kind == ErrorKind.UNKNOWN
    assert err.message == "boom"


def test_classified_error_passes_through():
    original = ClassifiedError(ErrorKind.MALFORMED_RESPONSE, "bad shape")
    assert classify(original) is original


def test_transient_property():
    assert ClassifiedError(ErrorKind.RATE_LIMITED).transient
    assert not ClassifiedError(ErrorKind.UNAUTHORIZED).transient
