import os

import toml

from modpack.common import ConfigError

SECTION = "modpack"

LIST_KEYS = ("assets", "include", "sources", "source_extensions")
STR_KEYS = ("build", "output")
BOOL_KEYS = ("compile", "pdb")


def load_config(path: str) -> dict:
    """
    Read the `[modpack]` table of a toml project file as click defaults.

    Example `modpack.toml`:

        [modpack]
        build = "dotnet build -c Release"
        assets = ["assets", "textures"]
        pdb = false
    """
    if not os.path.exists(path):
        return {}
    try:
        config = toml.load(path)
    except (OSError, toml.TomlDecodeError) as e:
        raise ConfigError(f"Failed to parse: {path} ({e})") from e
    section = config.get(SECTION, {})
    if not isinstance(section, dict):
        raise ConfigError(f"Failed to parse: {path} ('{SECTION}' must be a table)")

    defaults = {}
    for key, value in section.items():
        if key in LIST_KEYS:
            if isinstance(value, str):
                value = [value]
            if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
                raise ConfigError(f"Invalid value for '{key}' in {path}: expected a list of strings")
            defaults[key] = value
        elif key in STR_KEYS:
            if not isinstance(value, str):
                raise ConfigError(f"Invalid value for '{key}' in {path}: expected a string")
            defaults[key] = value
        elif key in BOOL_KEYS:
            if not isinstance(value, bool):
                raise ConfigError(f"Invalid value for '{key}' in {path}: expected true or false")
            defaults[key] = value
        else:
            raise ConfigError(f"Unknown configuration option '{key}' in {path}")
    return defaults
