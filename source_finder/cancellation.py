"""Cooperative cancellation and scoped iteration over provider sequences."""

import logging
import threading
from typing import Iterable, Iterator, Optional

from .criteria import SourceCriteria
from .sources.base import PackageSource, SourceProvider

logger = logging.getLogger(__name__)


class CancellationToken:
    """Stop signal shared between a query and whoever may interrupt it.

    Safe to set from a signal handler or another thread.
    """

    def __init__(self):
        self._event = threading.Event()

    def cancel(self) -> None:
        self._event.set()

    @property
    def is_cancelled(self) -> bool:
        return self._event.is_set()


class CancelableSequence:
    """Iterate a provider's lazy sequence and always release it afterwards.

    Use as a context manager. Leaving the block closes the underlying
    iterator, whether it was exhausted, abandoned early, or an exception
    propagated. When ``token`` is given the sequence also ends as soon as
    the token is cancelled, checked before each pull.
    """

    def __init__(self, sources: Iterable[PackageSource],
                 token: Optional[CancellationToken] = None):
        self._iterator = iter(sources)
        self._token = token
        self._closed = False
        self.stopped = False

    def __enter__(self) -> "CancelableSequence":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def __iter__(self) -> Iterator[PackageSource]:
        return self

    def __next__(self) -> PackageSource:
        if self._closed:
            raise StopIteration
        if self._token is not None and self._token.is_cancelled:
            self.stopped = True
            self.close()
            raise StopIteration
        return next(self._iterator)

    def close(self) -> None:
        if self._closed:
            return
        self._closed = True
        close = getattr(self._iterator, "close", None)
        if callable(close):
            close()

    @property
    def closed(self) -> bool:
        return self._closed


def resolve_sources(provider: SourceProvider, criteria: SourceCriteria,
                    token: Optional[CancellationToken] = None) -> CancelableSequence:
    """Open ``provider``'s source sequence wrapped for scoped consumption."""
    logger.debug("Resolving package sources from provider %s", provider.name)
    return CancelableSequence(provider.resolve_package_sources(criteria), token)
