"""Factory for creating providers from configuration entries."""

from typing import List, Sequence

from ..config import ProviderSettings
from .base import PackageSource, SourceProvider
from .configured import InlineProvider, SourceListFileProvider


def create_provider(settings: ProviderSettings) -> SourceProvider:
    """Create the SourceProvider implementation for a config entry.

    Mapping:
    - inline -> InlineProvider(sources listed in the config)
    - file   -> SourceListFileProvider(path to a source list)
    """
    if settings.type == "inline":
        sources = [
            PackageSource(
                name=entry["name"],
                location=entry["location"],
                provider_name=settings.name,
                is_trusted=entry.get("trusted", False),
            )
            for entry in settings.sources
        ]
        return InlineProvider(settings.name, sources)
    if settings.type == "file":
        if settings.path is None:
            raise ValueError(f"File provider '{settings.name}' requires 'path'")
        return SourceListFileProvider(settings.name, settings.path)

    raise ValueError(f"Unsupported provider type: {settings.type}")


def create_providers(settings: Sequence[ProviderSettings]) -> List[SourceProvider]:
    """Create providers for each entry, preserving order."""
    return [create_provider(s) for s in settings]
