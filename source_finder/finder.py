"""Query package sources across providers."""

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, List, Optional, Sequence

from .cancellation import CancellationToken, resolve_sources
from .criteria import SourceCriteria
from .diagnostics import PendingWarning, synthesize_warning
from .matcher import match_source
from .sources.base import PackageSource, SourceProvider

logger = logging.getLogger(__name__)

SourceCallback = Callable[[PackageSource], None]
WarningCallback = Callable[[PendingWarning], None]


class RunStatus(Enum):
    COMPLETED = "completed"
    ABORTED = "aborted"


@dataclass
class QueryResult:
    """Everything a query produced, for callers that do not stream."""
    status: RunStatus
    sources: List[PackageSource] = field(default_factory=list)
    warnings: List[PendingWarning] = field(default_factory=list)

    @property
    def completed(self) -> bool:
        return self.status is RunStatus.COMPLETED


def get_package_sources(providers: Sequence[SourceProvider],
                        criteria: SourceCriteria,
                        on_source: SourceCallback,
                        on_warning: WarningCallback,
                        token: Optional[CancellationToken] = None,
                        check_between_sources: bool = False) -> RunStatus:
    """List sources from each provider in order, filtered by ``criteria``.

    Matching sources go to ``on_source`` as soon as they are found.
    Providers that match nothing get one warning each; warnings are held
    until every provider is done and then handed to ``on_warning`` in
    provider order.

    ``token`` is checked before each provider. A cancelled run stops
    there, returns ``RunStatus.ABORTED`` and drops its pending warnings.
    With ``check_between_sources`` the token is also checked between the
    sources of a single provider.

    Provider errors are not caught; the provider's sequence is still
    closed before they propagate.

    Args:
        providers: Selected providers, in processing order
        criteria: Name/location filter
        on_source: Called with each matching source
        on_warning: Called with each warning once the run completes
        token: Optional stop signal
        check_between_sources: Also honor ``token`` mid-provider

    Returns:
        RunStatus.COMPLETED or RunStatus.ABORTED
    """
    pending: List[PendingWarning] = []
    status = _process_providers(
        providers, criteria, on_source, pending, token, check_between_sources
    )

    if status is RunStatus.ABORTED:
        if pending:
            logger.debug("Run aborted; dropping %d pending warning(s)", len(pending))
        return status

    for warning in pending:
        on_warning(warning)
    return status


def collect_package_sources(providers: Sequence[SourceProvider],
                            criteria: SourceCriteria,
                            token: Optional[CancellationToken] = None,
                            check_between_sources: bool = False) -> QueryResult:
    """Run a query and gather its output into a QueryResult."""
    sources: List[PackageSource] = []
    warnings: List[PendingWarning] = []
    status = get_package_sources(
        providers,
        criteria,
        on_source=sources.append,
        on_warning=warnings.append,
        token=token,
        check_between_sources=check_between_sources,
    )
    return QueryResult(status=status, sources=sources, warnings=warnings)


def _process_providers(providers, criteria, on_source, pending, token,
                       check_between_sources) -> RunStatus:
    for provider in providers:
        if token is not None and token.is_cancelled:
            logger.info("Stop requested; skipping provider %s and any after it", provider.name)
            return RunStatus.ABORTED

        found = False
        matched = 0
        with resolve_sources(provider, criteria,
                             token if check_between_sources else None) as sources:
            for source in sources:
                reason = match_source(source, criteria)
                if reason is None:
                    continue
                logger.debug("Provider %s: %s matched (%s)",
                             provider.name, source.name, reason.value)
                on_source(source)
                found = True
                matched += 1

        if sources.stopped:
            logger.info("Stop requested while reading provider %s", provider.name)
            return RunStatus.ABORTED

        logger.debug("Provider %s: %d matching source(s)", provider.name, matched)
        warning = synthesize_warning(provider.name, criteria, found)
        if warning is not None:
            pending.append(warning)

    return RunStatus.COMPLETED
