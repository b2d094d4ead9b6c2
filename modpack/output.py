import json
import logging
import os
from dataclasses import dataclass
from pathlib import Path

from modpack.catalog import Catalog, find_file
from modpack.common import ConfigError, PackIOError, METADATA_FILE

logger = logging.getLogger(__name__)

DEFAULT_OUTPUT_DIR = Path("bin") / "Mod"


@dataclass
class ProjectMetadata:
    name: str
    version: str


def load_metadata(path: Path) -> ProjectMetadata:
    try:
        with open(path, "r", encoding="utf-8") as f:
            content = f.read()
    except OSError as e:
        raise ConfigError(f"Failed to read: {path} ({e.strerror})") from e
    try:
        data = json.loads(content)
    except ValueError as e:
        raise ConfigError(f"Failed to parse: {path} ({e})") from e
    if not isinstance(data, dict):
        raise ConfigError(f"Failed to parse: {path} (expected a JSON object)")
    for key in ("name", "version"):
        if not isinstance(data.get(key), str):
            raise ConfigError(f"Failed to parse: {path} (missing string field '{key}')")
    return ProjectMetadata(name=data["name"], version=data["version"])


def default_output_path(metadata: ProjectMetadata) -> Path:
    return DEFAULT_OUTPUT_DIR / f"{metadata.name}-{metadata.version}.zip"


def ensure_parent(path: Path):
    parent = path.parent
    if str(parent) in ("", ".") or parent.exists():
        return
    try:
        os.makedirs(parent, exist_ok=True)
    except OSError as e:
        raise PackIOError(f"Failed to create directory: {parent} ({e.strerror})") from e


def resolve_output_path(explicit: str | None, catalog: Catalog) -> Path:
    if explicit is not None:
        output = Path(explicit)
    else:
        metadata_file = find_file(catalog, METADATA_FILE)
        if metadata_file is None:
            raise ConfigError(f"Failed to find '{METADATA_FILE}' in assets")
        output = default_output_path(load_metadata(metadata_file))
    ensure_parent(output)
    logger.debug(f"Resolved output path {output}")
    return output
