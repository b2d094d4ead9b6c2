import re

import click

DEFAULT_ASSETS = ("assets",)
DEFAULT_BUILD = "dotnet build"
DEFAULT_INCLUDE = ("Locals", "LICENSE", "default_config.json", "icon.png", "mod.json")
DEFAULT_SOURCES = ("Code", "code", "src")
DEFAULT_SOURCE_EXTENSIONS = (".cs",)
DEFAULT_CONFIG_FILE = "modpack.toml"

METADATA_FILE = "mod.json"
DEBUG_SYMBOL_EXTENSION = ".pdb"


class PackError(click.ClickException):
    pass


class ConfigError(PackError):
    pass


class BuildError(PackError):
    pass


class BuildCommandError(ConfigError, BuildError):
    pass


class PackIOError(PackError):
    pass


def trim_indent(s: str, *, delimiter: str = " ") -> str:
    ended_with_newline = s.endswith("\n")
    lines = s.removesuffix("\n").split("\n")
    new_lines = []
    for l in lines:
        m = re.match(r"^(\s*|).*$", l)
        if m:
            to_trim = len(m.group(1))
            new_lines.append(l[to_trim+1:])
        else:
            new_lines.append(l)
    if len(new_lines) > 0:
        if not new_lines[0].strip():
            new_lines.pop(0)
    if len(new_lines) > 1:
        if not new_lines[-1].strip():
            new_lines.pop(-1)
    return delimiter.join(new_lines) + ("\n" if ended_with_newline else "")
