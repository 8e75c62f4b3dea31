"""Configuration loader for vlt.toml."""

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

try:
    import tomllib
except ImportError:
    import tomli as tomllib  # type: ignore

CONFIG_NAME = "vlt.toml"
VAULT_ENV = "VLT_VAULT_PATH"


@dataclass
class VaultConfig:
    """Vault location and traversal settings."""
    root: Path
    trash: str = ".trash"


@dataclass
class FrontmatterConfig:
    """Frontmatter keys read by the resolver and tag scanner."""
    aliases_key: str = "aliases"
    tags_key: str = "tags"


@dataclass
class VltConfig:
    """Complete vlt configuration."""
    vault: VaultConfig
    frontmatter: FrontmatterConfig = field(default_factory=FrontmatterConfig)


def load_config(config_path: Path | None = None, vault_path: Path | None = None) -> VltConfig:
    """
    Load configuration from vlt.toml.

    Search order:
    1. config_path (if provided)
    2. cwd/vlt.toml
    3. vault_path/vlt.toml

    The vault root falls back to vault_path, then $VLT_VAULT_PATH, then ".".

    Args:
        config_path: Explicit path to config file
        vault_path: Vault root path for fallback search

    Returns:
        VltConfig with resolved settings
    """
    toml_data: dict[str, Any] = {}

    search_paths = []
    if config_path:
        search_paths.append(config_path)
    search_paths.append(Path.cwd() / CONFIG_NAME)
    if vault_path:
        search_paths.append(vault_path / CONFIG_NAME)

    for path in search_paths:
        if path.exists():
            with open(path, "rb") as f:
                toml_data = tomllib.load(f)
            break

    vault_data = toml_data.get("vault", {})
    default_root = vault_path or Path(os.environ.get(VAULT_ENV, "."))
    vault_config = VaultConfig(
        root=Path(vault_data.get("root", default_root)).expanduser(),
        trash=vault_data.get("trash", ".trash"),
    )

    fm_data = toml_data.get("frontmatter", {})
    fm_config = FrontmatterConfig(
        aliases_key=fm_data.get("aliases_key", "aliases"),
        tags_key=fm_data.get("tags_key", "tags"),
    )

    return VltConfig(vault=vault_config, frontmatter=fm_config)
