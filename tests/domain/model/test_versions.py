from __future__ import annotations

import pytest

from catalogsync.domain.model import (
    InvalidSemanticVersionError,
    ProtocolVersionRange,
    SemanticVersion,
)


def test_parse_plain_version() -> None:
    version = SemanticVersion.parse("1.22.3")

    assert (version.major, version.minor, version.patch) == (1, 22, 3)
    assert str(version) == "1.22.3"


def test_parse_strips_whitespace() -> None:
    assert SemanticVersion.parse(" 0.2.0 ") == SemanticVersion(0, 2, 0)


@pytest.mark.parametrize(
    "value",
    [
        "",
        "dev",
        "1.0",
        "1.0.0.0",
        "v1.0.0",
        "1!1.0.0",
        "1.0.0rc1",
        "1.0.0.post1",
        "1.0.0+local",
        "01.2.3",
        "1.02.3",
        "1.2.03",
    ],
)
def test_parse_rejects_anything_but_three_part_release(value: str) -> None:
    with pytest.raises(InvalidSemanticVersionError) as excinfo:
        SemanticVersion.parse(value)

    assert excinfo.value.value == value


def test_try_parse_returns_none_for_invalid_values() -> None:
    assert SemanticVersion.try_parse(None) is None
    assert SemanticVersion.try_parse("latest") is None
    assert SemanticVersion.try_parse("0.1.0") == SemanticVersion(0, 1, 0)


def test_versions_order_numerically() -> None:
    versions = [SemanticVersion.parse(value) for value in ("0.10.0", "0.9.1", "1.0.0", "0.9.0")]

    assert [str(version) for version in sorted(versions)] == ["0.9.0", "0.9.1", "0.10.0", "1.0.0"]


def test_range_contains_bounds() -> None:
    supported = ProtocolVersionRange.from_strings("0.2.0", "0.3.0")

    assert supported.contains(SemanticVersion(0, 2, 0))
    assert supported.contains(SemanticVersion(0, 3, 0))
    assert not supported.contains(SemanticVersion(0, 3, 1))
    assert str(supported) == "[0.2.0, 0.3.0]"


def test_range_rejects_inverted_bounds() -> None:
    with pytest.raises(ValueError, match="inverted"):
        ProtocolVersionRange.from_strings("2.0.0", "1.0.0")
