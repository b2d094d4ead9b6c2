import logging
import os
import shutil
import zipfile
from pathlib import Path

from tqdm import tqdm

from modpack.catalog import Catalog
from modpack.common import PackIOError

logger = logging.getLogger(__name__)


def archive_name(target: Path) -> str:
    return str(target).replace("\\", "/")


def write_archive(path: Path, catalog: Catalog):
    """
    Write each existing, non-directory catalog entry into a zip at `path`, in
    catalog order. Entries sharing a target are all written; which one a
    reader sees is up to the reader. On failure the partial archive is removed.
    """
    try:
        archive = zipfile.ZipFile(path, "w", zipfile.ZIP_DEFLATED)
    except OSError as e:
        raise PackIOError(f"Failed to create file: {path} ({e.strerror})") from e

    try:
        with archive:
            for entry in tqdm(catalog, desc="Packing", unit="file", leave=False, disable=None):
                if not entry.source.exists() or entry.source.is_dir():
                    logger.debug(f"Skipped {entry.source}")
                    continue
                name = archive_name(entry.target)
                try:
                    with open(entry.source, "rb") as src, archive.open(name, "w") as dst:
                        shutil.copyfileobj(src, dst)
                except OSError as e:
                    raise PackIOError(f"Failed to open: {entry.source} ({e.strerror})") from e
    except PackIOError:
        _discard(path)
        raise
    except (OSError, zipfile.BadZipFile) as e:
        _discard(path)
        raise PackIOError(f"Failed to write archive: {path} ({e})") from e


def _discard(path: Path):
    try:
        os.remove(path)
    except OSError:
        logger.warning(f"Failed to remove incomplete archive {path}")


def packed_message(path: Path) -> str:
    absolute = os.path.abspath(path)
    url = "file://" + absolute.replace("\\", "/")
    return f"Packed mod at: \x1b]8;;{url}\x1b\\{absolute}\x1b]8;;\x1b\\"
