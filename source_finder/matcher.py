"""Per-source matching against query criteria.

Rules are evaluated in order and the first hit wins, so a source that
satisfies both the name and the location clause is still reported once:

1. No criteria          -> match everything
2. Name set             -> name equals source name or source location
3. Location set         -> location equals source location

Rule 3 still runs when rule 2 was tried and missed.
"""

from enum import Enum
from typing import Optional

from .criteria import SourceCriteria
from .sources.base import PackageSource


class MatchReason(Enum):
    """Why a source was selected."""
    ALL = "all"
    NAME = "name"
    NAME_AS_LOCATION = "name_as_location"
    LOCATION = "location"


def _same(left: str, right: Optional[str]) -> bool:
    return right is not None and left.casefold() == right.casefold()


def _match_all(source: PackageSource, criteria: SourceCriteria) -> Optional[MatchReason]:
    if criteria.is_empty:
        return MatchReason.ALL
    return None


def _match_name(source: PackageSource, criteria: SourceCriteria) -> Optional[MatchReason]:
    if criteria.name is None:
        return None
    if _same(criteria.name, source.name):
        return MatchReason.NAME
    if _same(criteria.name, source.location):
        return MatchReason.NAME_AS_LOCATION
    return None


def _match_location(source: PackageSource, criteria: SourceCriteria) -> Optional[MatchReason]:
    if criteria.location is not None and _same(criteria.location, source.location):
        return MatchReason.LOCATION
    return None


MATCH_RULES = (_match_all, _match_name, _match_location)


def match_source(source: PackageSource, criteria: SourceCriteria) -> Optional[MatchReason]:
    """Return the reason ``source`` satisfies ``criteria``, or None."""
    for rule in MATCH_RULES:
        reason = rule(source, criteria)
        if reason is not None:
            return reason
    return None


def matches(source: PackageSource, criteria: SourceCriteria) -> bool:
    return match_source(source, criteria) is not None
