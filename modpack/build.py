import logging
import shlex
import subprocess
from pathlib import Path
from typing import IO, Callable, Iterable, Iterator, cast

import click

from modpack.catalog import Catalog, entry_for
from modpack.common import BuildCommandError, BuildError, DEBUG_SYMBOL_EXTENSION

logger = logging.getLogger(__name__)

ARROW = " -> "


def parse_artifact(line: str) -> Path | None:
    """
    Extract the file a build tool reports producing, e.g.
    `  Lib -> /src/bin/Debug/Lib.dll`. Only the text after the last arrow
    counts, and only if it names an existing path.
    """
    if ARROW not in line:
        return None
    path = Path(line.rsplit(ARROW, 1)[1].strip())
    if not path.exists():
        return None
    return path


def scan_lines(lines: Iterable[str], echo: Callable[[str], None] = click.echo) -> Iterator[Path]:
    for raw in lines:
        line = raw.rstrip("\r\n")
        echo(line)
        artifact = parse_artifact(line)
        if artifact is not None:
            logger.debug(f"Build produced {artifact}")
            yield artifact


def debug_companions(artifacts: Iterable[Path], extension: str = DEBUG_SYMBOL_EXTENSION) -> list[Path]:
    companions = []
    for artifact in artifacts:
        if not artifact.name:
            continue
        companion = artifact.with_suffix(extension)
        if companion.exists():
            companions.append(companion)
    return companions


def split_command(command: str) -> list[str]:
    try:
        parts = shlex.split(command)
    except ValueError as e:
        raise BuildCommandError(f"Invalid build command: {command} ({e})") from e
    if not parts:
        raise BuildCommandError("Build command is empty")
    return parts


def run_build(command: str, include_debug_symbols: bool, catalog: Catalog) -> int:
    click.echo(f"Compiling with: {command}\n")
    parts = split_command(command)

    try:
        # Undecodable output bytes are replaced, not fatal.
        proc = subprocess.Popen(parts, stdout=subprocess.PIPE, stderr=None,
                                encoding="utf-8", errors="replace")
    except OSError as e:
        raise BuildError(f"Failed to execute build command: {command} ({e})") from e

    stdout = cast(IO[str], proc.stdout)
    try:
        with stdout:
            artifacts = list(scan_lines(stdout))
    except OSError as e:
        raise BuildError(f"Failed to read build output: {command} ({e})") from e
    finally:
        retcode = proc.wait()
    if retcode != 0:
        # Success is decided by the reported artifacts, not the exit status.
        logger.warning(f"Build command exited with status {retcode}")

    added = [entry_for(artifact) for artifact in artifacts]
    if include_debug_symbols:
        added += [entry_for(companion) for companion in debug_companions(artifacts)]
    catalog.extend(added)

    click.echo()
    if not added:
        raise BuildError("No compiled files found")
    click.echo(f"Compiled {len(added)} files")
    return len(added)
