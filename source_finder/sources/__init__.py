"""Package source providers for Source Finder.

Provides the interface every provider implements plus two providers
driven purely by configuration:
- Inline source lists in the YAML config
- Plain-text source list files
"""

from .base import PackageSource, SourceProvider
from .configured import InlineProvider, SourceListFileProvider
from .factory import create_provider, create_providers

__all__ = [
    'PackageSource',
    'SourceProvider',
    'InlineProvider',
    'SourceListFileProvider',
    'create_provider',
    'create_providers',
]
