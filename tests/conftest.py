import json
import shlex
import sys

import pytest


@pytest.fixture()
def workdir(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    return tmp_path


def python_command(code: str) -> str:
    return shlex.join([sys.executable, "-c", code])


def echo_command(*lines: str) -> str:
    return python_command("\n".join(f"print({line!r})" for line in lines))


def write_mod_json(path, name="Demo", version="0.1.0"):
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps({"name": name, "version": version}))
    return path
