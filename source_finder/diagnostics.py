"""Deferred "no sources" warnings for providers that matched nothing."""

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from .criteria import SourceCriteria


class WarningKind(Enum):
    NO_SOURCES = "no_sources"
    NO_SOURCES_FOR_NAME = "no_sources_for_name"
    NO_SOURCES_FOR_LOCATION = "no_sources_for_location"
    NO_SOURCES_FOR_NAME_AND_LOCATION = "no_sources_for_name_and_location"


MESSAGE_TEMPLATES = {
    WarningKind.NO_SOURCES:
        "Provider '{provider}' did not return any package sources.",
    WarningKind.NO_SOURCES_FOR_NAME:
        "Provider '{provider}' did not return a package source for name '{name}'.",
    WarningKind.NO_SOURCES_FOR_LOCATION:
        "Provider '{provider}' did not return a package source for location '{location}'.",
    WarningKind.NO_SOURCES_FOR_NAME_AND_LOCATION:
        "Provider '{provider}' did not return a package source for name '{name}' "
        "and location '{location}'.",
}


@dataclass(frozen=True)
class PendingWarning:
    """A diagnostic held back until every provider has been processed."""

    kind: WarningKind
    provider_name: str
    name: Optional[str] = None
    location: Optional[str] = None

    @property
    def message(self) -> str:
        return MESSAGE_TEMPLATES[self.kind].format(
            provider=self.provider_name,
            name=self.name,
            location=self.location,
        )

    def __str__(self) -> str:
        return self.message


def synthesize_warning(provider_name: str, criteria: SourceCriteria,
                       found_any: bool) -> Optional[PendingWarning]:
    """Build the warning for a provider that produced no matching source.

    Args:
        provider_name: Name of the provider just processed
        criteria: Criteria of the running query
        found_any: Whether the provider produced at least one match

    Returns:
        PendingWarning, or None when the provider found something
    """
    if found_any:
        return None

    if criteria.name is not None and criteria.location is not None:
        kind = WarningKind.NO_SOURCES_FOR_NAME_AND_LOCATION
    elif criteria.name is not None:
        kind = WarningKind.NO_SOURCES_FOR_NAME
    elif criteria.location is not None:
        kind = WarningKind.NO_SOURCES_FOR_LOCATION
    else:
        kind = WarningKind.NO_SOURCES

    return PendingWarning(
        kind=kind,
        provider_name=provider_name,
        name=criteria.name,
        location=criteria.location,
    )
