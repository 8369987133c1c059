"""Query criteria for package source lookups.

Criteria narrow which sources a query emits:

    name only          -> sources whose name (or location) equals the name
    location only      -> sources whose location equals the location
    name and location  -> either clause may match
    neither            -> every source
"""

from dataclasses import dataclass
from typing import Optional, Tuple


@dataclass(frozen=True)
class SourceCriteria:
    """Immutable name/location filter built once per query."""

    name: Optional[str] = None
    location: Optional[str] = None

    def __post_init__(self):
        for field_name in ("name", "location"):
            value = getattr(self, field_name)
            if value is not None and not value:
                raise ValueError(f"Criteria {field_name} must be a non-empty string when set")

    @classmethod
    def from_input(cls, name: Optional[str] = None,
                   location: Optional[str] = None) -> "SourceCriteria":
        """Build criteria from raw caller input.

        Empty and whitespace-only values are treated as absent, and
        surrounding whitespace is stripped.

        Args:
            name: Source name (or location) to look for
            location: Source location to look for

        Returns:
            SourceCriteria object
        """
        return cls(name=_clean(name), location=_clean(location))

    @property
    def is_empty(self) -> bool:
        """True when neither name nor location is set."""
        return self.name is None and self.location is None

    @property
    def sources(self) -> Tuple[str, ...]:
        """Requested source values handed to providers as a resolution hint."""
        return tuple(v for v in (self.name, self.location) if v is not None)

    def __str__(self) -> str:
        if self.is_empty:
            return "<all sources>"
        parts = []
        if self.name is not None:
            parts.append(f"name={self.name}")
        if self.location is not None:
            parts.append(f"location={self.location}")
        return ", ".join(parts)


def _clean(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    value = value.strip()
    return value or None
