"""Tests for wsb.core.errors module."""

from wsb.core.errors import ErrorCode


def test_values_are_stable() -> None:
    assert int(ErrorCode.OK) == 0
    assert int(ErrorCode.USER_ERROR) == 1
    assert int(ErrorCode.ENV_ERROR) == 2
    assert int(ErrorCode.NETWORK_ERROR) == 4
    assert int(ErrorCode.IO_ERROR) == 5
    assert int(ErrorCode.ELEVATION_ERROR) == 6
    assert int(ErrorCode.PAYLOAD_ERROR) == 7


def test_str() -> None:
    assert str(ErrorCode.ELEVATION_ERROR) == "elevation error"

