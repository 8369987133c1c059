"""Shared fixtures for source-finder tests."""

import pytest

from source_finder.sources.base import PackageSource, SourceProvider


class RecordingProvider(SourceProvider):
    """Test provider yielding a fixed list and recording how it was consumed."""

    def __init__(self, name, sources, fail_after=None):
        super().__init__(name)
        self.sources = list(sources)
        self.fail_after = fail_after
        self.calls = []
        self.yielded = 0
        self.closed = False

    def resolve_package_sources(self, criteria):
        self.calls.append(criteria)
        try:
            for index, source in enumerate(self.sources):
                if self.fail_after is not None and index >= self.fail_after:
                    raise RuntimeError(f"{self.name} exploded")
                self.yielded += 1
                yield source
            if self.fail_after is not None and self.fail_after >= len(self.sources):
                raise RuntimeError(f"{self.name} exploded")
        finally:
            self.closed = True


@pytest.fixture
def make_provider():
    """Build a RecordingProvider from (name, location) pairs."""

    def _make(name, pairs=(), **kwargs):
        sources = [PackageSource(name=n, location=loc, provider_name=name) for n, loc in pairs]
        return RecordingProvider(name, sources, **kwargs)

    return _make


@pytest.fixture
def repo_pairs():
    return [("repoA", "http://x"), ("repoB", "http://y")]
