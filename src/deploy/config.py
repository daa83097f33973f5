"""
KV config files.

A KV config is a TOML-looking file with a ``name = "..."`` line and a
``[data]`` section of ``key = value`` lines used to seed the namespace:

    name = "USERS"

    [data]
    admin@example.com = "$2a$10$..."

The file is read line by line rather than with a TOML parser. Every
key/value pair must fit on a single line; multi-line strings are not
supported.
"""

import re
from pathlib import Path

from pydantic import BaseModel, Field

from .errors import KvConfigError, KvConfigNotFound

KV_CONFIGS_DIR = Path("cloudflare") / "kvs"

_NAME_LINE = re.compile(r"^name = ")
_DATA_HEADER = re.compile(r"^\s*\[data\]\s*$")
_SECTION_HEADER = re.compile(r"^\s*\[[a-zA-Z0-9\-_]+\]\s*$")


class KvConfig(BaseModel):
    """Parsed KV config: namespace name and the pairs to seed it with."""

    name: str = Field(..., min_length=1)
    data: dict[str, str] = Field(default_factory=dict)


def locate_kv_config(kv_config: str, project_dir: Path) -> Path:
    """
    Resolve a config name or path to a file.

    A name found as ``<project_dir>/cloudflare/kvs/<name>.toml`` wins over
    a literal path.

    Raises:
        KvConfigNotFound: If neither location exists
    """
    named = project_dir / KV_CONFIGS_DIR / f"{kv_config}.toml"
    if named.exists():
        return named

    path = Path(kv_config)
    if path.exists():
        return path

    raise KvConfigNotFound(
        "Could not locate the KV config file. "
        "Ensure the config file exists and run the script again."
    )


def parse_kv_config(text: str) -> KvConfig:
    """
    Parse KV config text.

    Raises:
        KvConfigError: If the name line is missing or a data line has no '='
    """
    name: str | None = None
    data: dict[str, str] = {}
    in_data = False

    for lineno, raw_line in enumerate(text.splitlines(), start=1):
        if name is None and _NAME_LINE.match(raw_line):
            name = raw_line.replace(" ", "").replace('"', "").partition("=")[2]

        line = raw_line.strip()

        # Blank and comment lines
        if not line or line.startswith("#"):
            continue

        if _DATA_HEADER.match(line):
            in_data = True
            continue

        if _SECTION_HEADER.match(line):
            in_data = False
            continue

        if not in_data:
            continue

        key, separator, value = line.partition("=")
        if not separator:
            raise KvConfigError(f"Line {lineno}: expected 'key = value' in [data] section")

        data[_strip_key(key)] = _strip_value(value)

    if not name:
        raise KvConfigError("Missing 'name = ...' line in KV config")

    return KvConfig(name=name, data=data)


def load_kv_config(path: Path) -> KvConfig:
    return parse_kv_config(path.read_text(encoding="utf-8"))


def _strip_key(key: str) -> str:
    return key[:-1] if key.endswith(" ") else key


def _strip_value(value: str) -> str:
    if value.startswith(" "):
        value = value[1:]
    if value.startswith('"'):
        value = value[1:]
    if value.endswith('"'):
        value = value[:-1]
    return value
