"""Tests for configuration-backed providers."""

import pytest
from source_finder.criteria import SourceCriteria
from source_finder.sources.base import PackageSource
from source_finder.sources.configured import InlineProvider, SourceListFileProvider


@pytest.fixture
def source_list(tmp_path):
    """Create a sample source list file."""
    path = tmp_path / 'sources.list'
    path.write_text(
        '# name  location  [trusted]\n'
        '\n'
        'internal   https://pkgs.example.com/api   trusted\n'
        '   mirror  https://mirror.example.org\n'
    )
    return path


def test_inline_provider_yields_configured_sources():
    sources = [
        PackageSource(name='repoA', location='http://x'),
        PackageSource(name='repoB', location='http://y'),
    ]
    provider = InlineProvider('corp', sources)

    result = list(provider.resolve_package_sources(SourceCriteria(name='repoA')))

    # Filtering is the caller's job
    assert result == sources


def test_inline_provider_empty():
    assert list(InlineProvider('corp').resolve_package_sources(SourceCriteria())) == []


def test_file_provider_parses_lines(source_list):
    provider = SourceListFileProvider('team', source_list)

    sources = list(provider.resolve_package_sources(SourceCriteria()))

    assert [(s.name, s.location, s.is_trusted) for s in sources] == [
        ('internal', 'https://pkgs.example.com/api', True),
        ('mirror', 'https://mirror.example.org', False),
    ]
    assert all(s.provider_name == 'team' for s in sources)


def test_file_provider_is_lazy(tmp_path):
    """Nothing is read until iteration starts."""
    provider = SourceListFileProvider('team', tmp_path / 'missing.list')

    sequence = provider.resolve_package_sources(SourceCriteria())

    with pytest.raises(FileNotFoundError, match='Source list not found'):
        next(sequence)


def test_file_provider_rejects_short_line(tmp_path):
    path = tmp_path / 'bad.list'
    path.write_text('onlyname\n')
    provider = SourceListFileProvider('team', path)

    with pytest.raises(RuntimeError, match=r'bad.list:1: expected'):
        list(provider.resolve_package_sources(SourceCriteria()))


def test_file_provider_rejects_unknown_flag(tmp_path):
    path = tmp_path / 'bad.list'
    path.write_text('repoA http://x\nrepoB http://y maybe\n')
    provider = SourceListFileProvider('team', path)

    sequence = provider.resolve_package_sources(SourceCriteria())
    assert next(sequence).name == 'repoA'
    with pytest.raises(RuntimeError, match=r'bad.list:2: unexpected trailing'):
        next(sequence)


def test_file_provider_closes_file_when_abandoned(source_list):
    provider = SourceListFileProvider('team', source_list)
    sequence = provider.resolve_package_sources(SourceCriteria())

    next(sequence)
    frame_locals = sequence.gi_frame.f_locals
    handle = frame_locals['handle']
    sequence.close()

    assert handle.closed
