from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True)
class CatalogEntry:
    source: Path
    target: Path


# Append-only; duplicates and vanished sources are filtered by the archive writer.
Catalog = list[CatalogEntry]


def flat_target(source: Path) -> Path:
    return Path(source.name) if source.name else Path()


def entry_for(source: Path) -> CatalogEntry:
    """Entry placed at the archive root under the source's file name."""
    return CatalogEntry(source=source, target=flat_target(source))


def find_file(catalog: Catalog, name: str) -> Path | None:
    for entry in catalog:
        if entry.source.exists() and entry.source.name == name:
            return entry.source
    return None
