"""Configuration file support.

A config file is a YAML mapping of option names to values, e.g.::

    platform: gitlab
    group:
      - my-group
    include-subgroups: true

Values are used as defaults for the command line; flags given explicitly
still win.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml

from repofleet.exceptions import ConfigFileError

# Option names accepted in a config file, mapped to click parameter names
CONFIG_KEYS: dict[str, str] = {
    "platform": "platform",
    "base-url": "base_url",
    "token": "token",
    "org": "orgs",
    "group": "groups",
    "user": "users",
    "repo": "repos",
    "project": "projects",
    "include-subgroups": "include_subgroups",
    "fork": "fork",
    "merge-type": "merge_types",
}

_MULTIPLE = {"orgs", "groups", "users", "repos", "projects", "merge_types"}


def load_config_file(path: Path) -> dict[str, Any]:
    """Load a config file into a click default_map.

    Keys may use dashes or underscores. A single string is accepted where a
    list is expected.

    Raises:
        ConfigFileError: If the file is unreadable, not a mapping or has unknown keys
    """
    try:
        with open(path) as f:
            data = yaml.safe_load(f)
    except OSError as e:
        raise ConfigFileError(str(path), e.strerror or str(e)) from e
    except yaml.YAMLError as e:
        raise ConfigFileError(str(path), f"invalid YAML: {e}") from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigFileError(str(path), "expected a mapping of option names to values")

    defaults: dict[str, Any] = {}
    for key, value in data.items():
        param = CONFIG_KEYS.get(str(key).replace("_", "-"))
        if param is None:
            raise ConfigFileError(str(path), f"unknown option {key!r}")
        if param in _MULTIPLE and isinstance(value, str):
            value = [value]
        defaults[param] = value
    return defaults
