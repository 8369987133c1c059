"""Providers backed by configuration instead of a package manager."""

import logging
from pathlib import Path
from typing import Iterator, List, Sequence

from ..criteria import SourceCriteria
from .base import PackageSource, SourceProvider

logger = logging.getLogger(__name__)


class InlineProvider(SourceProvider):
    """Provider whose sources are listed directly in the config file."""

    def __init__(self, name: str, sources: Sequence[PackageSource] = ()):
        super().__init__(name)
        self.sources: List[PackageSource] = list(sources)

    def resolve_package_sources(self, criteria: SourceCriteria) -> Iterator[PackageSource]:
        for source in self.sources:
            yield source


class SourceListFileProvider(SourceProvider):
    """Provider reading sources from a plain-text source list.

    One source per line, ``name location``; blank lines and lines
    starting with ``#`` are ignored. Lines marked with a trailing
    ``trusted`` token produce trusted sources::

        # name      location                      [trusted]
        internal    https://pkgs.example.com/api  trusted
        mirror      https://mirror.example.org

    The file is read lazily and stays open only while the caller
    iterates.
    """

    def __init__(self, name: str, path: Path):
        super().__init__(name)
        self.path = Path(path)

    def resolve_package_sources(self, criteria: SourceCriteria) -> Iterator[PackageSource]:
        if not self.path.is_file():
            raise FileNotFoundError(f"Source list not found: {self.path}")

        logger.debug("Reading source list %s for provider %s", self.path, self.name)
        with self.path.open("r", encoding="utf-8") as handle:
            for lineno, line in enumerate(handle, start=1):
                text = line.strip()
                if not text or text.startswith("#"):
                    continue
                yield self._parse_line(text, lineno)

    def _parse_line(self, text: str, lineno: int) -> PackageSource:
        parts = text.split()
        if len(parts) < 2:
            raise RuntimeError(
                f"{self.path}:{lineno}: expected 'name location [trusted]', got {text!r}"
            )
        if len(parts) > 3 or (len(parts) == 3 and parts[2].lower() != "trusted"):
            raise RuntimeError(
                f"{self.path}:{lineno}: unexpected trailing fields in {text!r}"
            )
        return PackageSource(
            name=parts[0],
            location=parts[1],
            provider_name=self.name,
            is_trusted=len(parts) == 3,
        )
