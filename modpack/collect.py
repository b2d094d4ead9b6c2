import logging
import os
import stat
from pathlib import Path
from typing import Callable, Iterable

from modpack.catalog import Catalog, CatalogEntry, entry_for
from modpack.common import ConfigError, PackIOError, DEFAULT_SOURCE_EXTENSIONS

logger = logging.getLogger(__name__)

PathFilter = Callable[[Path], bool]


def accept_all(path: Path) -> bool:
    return True


def is_source_file(path: Path, extensions: Iterable[str] = DEFAULT_SOURCE_EXTENSIONS) -> bool:
    suffix = path.suffix.lower()
    return bool(suffix) and suffix in {ext.lower() for ext in extensions}


def collect_files(current: Path, base: Path, catalog: Catalog, filter: PathFilter):
    """
    Append every non-directory under `current` accepted by `filter`, targeted
    relative to `base`. Symlinks are classified by their own metadata, so a
    symlinked directory is never descended into.
    """
    if not os.path.exists(current):
        return
    try:
        mode = os.lstat(current).st_mode
    except OSError as e:
        raise PackIOError(f"Failed to inspect: {current} ({e.strerror})") from e

    if stat.S_ISDIR(mode):
        try:
            names = os.listdir(current)
        except OSError as e:
            raise PackIOError(f"Failed to read directory: {current} ({e.strerror})") from e
        for name in names:
            collect_files(current / name, base, catalog, filter)
    elif filter(current):
        try:
            target = current.relative_to(base)
        except ValueError as e:
            raise ConfigError(f"Failed to strip prefix: {current}") from e
        logger.debug(f"Collected {current} as {target}")
        catalog.append(CatalogEntry(source=current, target=target))


def collect_assets_and_include(assets: Iterable[str], include: Iterable[str], catalog: Catalog):
    for dir in assets:
        path = Path(dir)
        if not path.exists():
            logger.debug(f"Asset directory {path} does not exist")
        collect_files(path, path, catalog, accept_all)

    for item in include:
        source = Path(item)
        if source.is_dir():
            collect_files(source, source.parent, catalog, accept_all)
        else:
            catalog.append(entry_for(source))


def collect_sources(sources: Iterable[str], catalog: Catalog,
                    extensions: Iterable[str] = DEFAULT_SOURCE_EXTENSIONS):
    extensions = tuple(extensions)
    before = len(catalog)
    for source in sources:
        path = Path(source)
        if not path.exists():
            continue
        # Keep the source directory's own name as the top-level folder.
        base = path.parent if path.parent != path else Path(".")
        collect_files(path, base, catalog, lambda p: is_source_file(p, extensions))
    logger.info(f"Collected {len(catalog) - before} source files")
