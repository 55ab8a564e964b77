"""Semantic versions and protocol version ranges.

Only plain ``major.minor.patch`` versions are accepted, written in canonical
form (no leading zeros, no ``v`` prefix). Parsing goes through
``packaging`` and then rejects anything beyond a three-part numeric release
(epochs, pre/post/dev releases, local segments).
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Self

from packaging.version import InvalidVersion, Version


class InvalidSemanticVersionError(ValueError):
    """Raised when a string is not a ``major.minor.patch`` version."""

    def __init__(self, value: str) -> None:
        super().__init__(f"Not a semantic version: {value!r}")
        self.value = value


@dataclass(frozen=True, slots=True, order=True)
class SemanticVersion:
    major: int
    minor: int
    patch: int

    @classmethod
    def parse(cls, value: str) -> Self:
        candidate = value.strip()
        try:
            parsed = Version(candidate)
        except InvalidVersion as exc:
            raise InvalidSemanticVersionError(value) from exc
        if (
            len(parsed.release) != 3
            or parsed.epoch
            or parsed.is_prerelease
            or parsed.is_postrelease
            or parsed.local is not None
            or str(parsed) != candidate
        ):
            raise InvalidSemanticVersionError(value)
        major, minor, patch = parsed.release
        return cls(major=major, minor=minor, patch=patch)

    @classmethod
    def try_parse(cls, value: str | None) -> Self | None:
        if value is None:
            return None
        try:
            return cls.parse(value)
        except InvalidSemanticVersionError:
            return None

    def __str__(self) -> str:
        return f"{self.major}.{self.minor}.{self.patch}"


@dataclass(frozen=True, slots=True)
class ProtocolVersionRange:
    """Closed interval of protocol versions supported by the platform."""

    min: SemanticVersion
    max: SemanticVersion

    def __post_init__(self) -> None:
        if self.max < self.min:
            raise ValueError(f"Protocol version range is inverted: [{self.min}, {self.max}]")

    @classmethod
    def from_strings(cls, min_version: str, max_version: str) -> Self:
        return cls(min=SemanticVersion.parse(min_version), max=SemanticVersion.parse(max_version))

    def contains(self, version: SemanticVersion) -> bool:
        return self.min <= version <= self.max

    def __str__(self) -> str:
        return f"[{self.min}, {self.max}]"
