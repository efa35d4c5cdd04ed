"""Tests for access token decoding."""

from __future__ import annotations

import time

import pytest
from fastapi import HTTPException
from jose import jwt

from auth.token import decode_token, extract_claims
from tests.conftest import TEST_JWT_SECRET, make_token


def test_extracts_claims():
    claims = extract_claims(make_token("u1", email="u1@example.com"))
    assert claims.user_id == "u1"
    assert claims.email == "u1@example.com"
    assert claims.role == "authenticated"


def test_wrong_secret_rejected():
    with pytest.raises(HTTPException) as exc_info:
        extract_claims(make_token("u1", secret="not-the-secret"))
    assert exc_info.value.status_code == 401


def test_expired_token_rejected():
    token = make_token("u1", exp=int(time.time()) - 60)
    with pytest.raises(HTTPException) as exc_info:
        decode_token(token)
    assert exc_info.value.status_code == 401


def test_missing_subject_rejected():
    token = jwt.encode({"email": "x@example.com"}, TEST_JWT_SECRET, algorithm="HS256")
    with pytest.raises(HTTPException) as exc_info:
        extract_claims(token)
    assert "missing user identifier" in exc_info.value.detail


def test_garbage_rejected():
    with pytest.raises(HTTPException):
        decode_token("not-a-jwt")


def test_unverified_decode_without_secret():
    token = make_token("u1", secret="whatever")
    assert decode_token(token, secret="")["sub"] == "u1"
