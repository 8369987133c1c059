"""Provider configuration loading and selection."""

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence, Tuple

import yaml

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = "sources.yaml"
CONFIG_ENV_VAR = "SOURCE_FINDER_CONFIG"


class ConfigError(ValueError):
    pass


@dataclass(frozen=True)
class ProviderSettings:
    """One entry of the ``providers`` list."""

    name: str
    type: str
    path: Optional[Path] = None
    sources: Tuple[Dict[str, Any], ...] = ()


@dataclass(frozen=True)
class AppConfig:
    providers: Tuple[ProviderSettings, ...]
    config_path: Optional[Path] = None

    @property
    def provider_names(self) -> List[str]:
        return [p.name for p in self.providers]


def default_config_path() -> Path:
    """Config path from $SOURCE_FINDER_CONFIG, falling back to ./sources.yaml."""
    return Path(os.getenv(CONFIG_ENV_VAR) or DEFAULT_CONFIG_PATH)


def load_config(path) -> AppConfig:
    """Load provider configuration from a YAML file.

    Relative ``path`` entries of file providers are resolved against the
    directory holding the config file.

    Raises:
        ConfigError: If the file is missing, unreadable, or malformed
    """
    config_path = Path(path)
    if not config_path.is_file():
        raise ConfigError(f"Config file not found: {config_path}")

    try:
        with config_path.open("r", encoding="utf-8") as handle:
            raw = yaml.safe_load(handle)
    except yaml.YAMLError as exc:
        raise ConfigError(f"Invalid YAML in {config_path}: {exc}") from exc
    except (OSError, UnicodeDecodeError) as exc:
        raise ConfigError(f"Cannot read config file {config_path}: {exc}") from exc

    config = parse_config(raw or {}, base_dir=config_path.parent)
    logger.debug("Loaded %d provider(s) from %s", len(config.providers), config_path)
    return AppConfig(providers=config.providers, config_path=config_path)


def parse_config(raw: Any, base_dir: Optional[Path] = None) -> AppConfig:
    """Validate an already-decoded config mapping."""
    if not isinstance(raw, dict):
        raise ConfigError("Config root must be a mapping")

    providers_raw = raw.get("providers")
    if not isinstance(providers_raw, list) or not providers_raw:
        raise ConfigError("Config must include non-empty 'providers' list")

    providers: List[ProviderSettings] = []
    seen = set()
    for item in providers_raw:
        settings = _parse_provider(item, base_dir)
        key = settings.name.casefold()
        if key in seen:
            raise ConfigError(f"Duplicate provider name: {settings.name}")
        seen.add(key)
        providers.append(settings)

    return AppConfig(providers=tuple(providers))


def select_providers(settings: Sequence[ProviderSettings],
                     names: Optional[Sequence[str]] = None) -> List[ProviderSettings]:
    """Pick providers by name, case-insensitively.

    With no names every configured provider is selected in config order.
    Otherwise the result follows the order of ``names``.

    Raises:
        ValueError: If a requested provider is not configured
    """
    if not names:
        return list(settings)

    by_name = {s.name.casefold(): s for s in settings}
    selected: List[ProviderSettings] = []
    for name in names:
        match = by_name.get(name.casefold())
        if match is None:
            available = ", ".join(s.name for s in settings) or "(none)"
            raise ValueError(f"Unknown provider '{name}'. Configured providers: {available}")
        if match not in selected:
            selected.append(match)
    return selected


def _parse_provider(item: Any, base_dir: Optional[Path]) -> ProviderSettings:
    if not isinstance(item, dict):
        raise ConfigError("Each provider entry must be a mapping")

    name = _optional_str(item.get("name"))
    provider_type = _optional_str(item.get("type"))
    if not name:
        raise ConfigError("Provider entry is missing 'name'")
    if not provider_type:
        raise ConfigError(f"Provider '{name}' is missing 'type'")

    path = None
    raw_path = _optional_str(item.get("path"))
    if raw_path:
        path = Path(raw_path).expanduser()
        if not path.is_absolute() and base_dir is not None:
            path = base_dir / path

    sources_raw = item.get("sources", [])
    if not isinstance(sources_raw, list):
        raise ConfigError(f"Provider '{name}': 'sources' must be a list")

    return ProviderSettings(
        name=name,
        type=provider_type.lower(),
        path=path,
        sources=tuple(_parse_source(name, entry) for entry in sources_raw),
    )


def _parse_source(provider_name: str, entry: Any) -> Dict[str, Any]:
    if not isinstance(entry, dict):
        raise ConfigError(f"Provider '{provider_name}': each source must be a mapping")
    name = _optional_str(entry.get("name"))
    location = _optional_str(entry.get("location"))
    if not name or not location:
        raise ConfigError(
            f"Provider '{provider_name}': sources need both 'name' and 'location'"
        )
    trusted = entry.get("trusted", False)
    if not isinstance(trusted, bool):
        raise ConfigError(f"Provider '{provider_name}': 'trusted' must be true or false")
    return {
        "name": name,
        "location": location,
        "trusted": trusted,
    }


def _optional_str(value: object) -> Optional[str]:
    if value is None:
        return None
    text = str(value).strip()
    return text or None
