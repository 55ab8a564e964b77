from __future__ import annotations

import pytest

from catalogsync.domain.model import ProtocolVersionRange
from catalogsync.domain.reconciliation import is_supported

RANGE = ProtocolVersionRange.from_strings("0.2.0", "0.5.0")


@pytest.mark.parametrize(
    ("declared", "expected"),
    [
        ("0.2.0", True),
        ("0.3.7", True),
        ("0.5.0", True),
        ("0.1.9", False),
        ("0.5.1", False),
        ("1.0.0", False),
    ],
)
def test_range_is_inclusive(declared: str, expected: bool) -> None:
    assert is_supported(declared, RANGE) is expected


def test_missing_range_accepts_everything() -> None:
    assert is_supported("99.0.0", None)
    assert is_supported("garbage", None)


@pytest.mark.parametrize("declared", [None, "", "0.2", "latest"])
def test_unparsable_declared_version_is_rejected(declared: str | None) -> None:
    assert not is_supported(declared, RANGE)
