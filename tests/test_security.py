"""Tests for token helpers and timezone utilities."""

from datetime import datetime, timedelta, timezone

import pytest

from juscrm.infrastructure.security import (
    create_access_token,
    decode_access_token,
    generate_account_token,
    password_signature,
)
from juscrm.utils import ensure_app_naive_datetime, ensure_app_timezone, get_app_timezone


def test_access_token_round_trip_keeps_claims():
    token = create_access_token({"sub": "joao@juscrm.com", "role": "lawyer"})

    payload = decode_access_token(token)

    assert payload["sub"] == "joao@juscrm.com"
    assert payload["role"] == "lawyer"


def test_expired_access_token_is_rejected():
    token = create_access_token({"sub": "joao@juscrm.com"}, expires_delta=timedelta(seconds=-1))

    with pytest.raises(ValueError):
        decode_access_token(token)


def test_password_signature_changes_with_password_and_status():
    signature = password_signature("hash", True)

    assert signature != password_signature("other", True)
    assert signature != password_signature("hash", False)


def test_account_tokens_are_unique_hex():
    first, second = generate_account_token(), generate_account_token()

    assert first != second
    assert len(first) == 64
    int(first, 16)


def test_naive_values_are_read_in_app_timezone():
    naive = datetime(2026, 10, 17, 9, 30)

    aware = ensure_app_timezone(naive)

    assert aware.tzinfo is get_app_timezone()
    assert ensure_app_naive_datetime(aware) == naive


def test_aware_values_are_converted_before_storage():
    utc_noon = datetime(2026, 10, 17, 12, 0, tzinfo=timezone.utc)

    # America/Sao_Paulo has no daylight saving time since 2019.
    assert ensure_app_naive_datetime(utc_noon) == datetime(2026, 10, 17, 9, 0)
