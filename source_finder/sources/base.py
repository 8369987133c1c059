"""Base interface for package source providers."""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, Optional

from ..criteria import SourceCriteria


@dataclass(frozen=True)
class PackageSource:
    """A named, located package repository entry produced by a provider."""

    name: str
    location: str
    provider_name: Optional[str] = None
    is_trusted: bool = False
    is_registered: bool = True
    details: Dict[str, Any] = field(default_factory=dict, compare=False, hash=False)

    def to_dict(self) -> Dict[str, Any]:
        """Plain-dict form used for JSON output."""
        return {
            "name": self.name,
            "location": self.location,
            "provider": self.provider_name,
            "trusted": self.is_trusted,
            "registered": self.is_registered,
            "details": dict(self.details),
        }


class SourceProvider(ABC):
    """Abstract base class for package source providers.

    Each provider enumerates its own sources. The query layer only calls
    :meth:`resolve_package_sources` and filters what comes back.
    """

    def __init__(self, name: str):
        if not name:
            raise ValueError("Provider name must be a non-empty string")
        self.name = name

    @abstractmethod
    def resolve_package_sources(self, criteria: SourceCriteria) -> Iterable[PackageSource]:
        """Return the sources known to this provider.

        Providers may use ``criteria.sources`` as a hint to narrow their
        lookup, but callers re-check every returned source, so returning
        extra sources is harmless. Generators are preferred; the caller
        closes the returned iterator when it stops consuming it.

        Args:
            criteria: Criteria of the running query

        Returns:
            Iterable of PackageSource, possibly lazy

        Raises:
            RuntimeError: If the provider cannot enumerate its sources
        """
        pass

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(name={self.name!r})"
