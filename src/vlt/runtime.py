"""Runtime wiring helper for tools built on vlt."""

from dataclasses import dataclass
from pathlib import Path

from .adapters.fs_storage import FsStorage
from .adapters.resolver import NoteResolver
from .adapters.yaml_codec import YamlFrontmatter
from .config import VltConfig, load_config
from .core.inert import MaskPipeline, default_pipeline
from .core.vault import Vault


@dataclass
class Runtime:
    """Container for all wired components."""
    vault: Vault
    resolver: NoteResolver
    pipeline: MaskPipeline
    config: VltConfig


def build_runtime(
    vault_path: Path | None = None,
    config_path: Path | None = None,
    pipeline: MaskPipeline | None = None,
) -> Runtime:
    """Build and wire all components for a vault."""
    config = load_config(config_path=config_path, vault_path=vault_path)

    # Explicit argument wins over the configured root
    if vault_path is None:
        vault_path = config.vault.root
    if pipeline is None:
        pipeline = default_pipeline()

    storage = FsStorage(vault_path, trash=config.vault.trash)
    codec = YamlFrontmatter(
        aliases_key=config.frontmatter.aliases_key,
        tags_key=config.frontmatter.tags_key,
    )
    vault = Vault(storage, codec, pipeline)
    resolver = NoteResolver(storage, codec)

    return Runtime(
        vault=vault,
        resolver=resolver,
        pipeline=pipeline,
        config=config,
    )
