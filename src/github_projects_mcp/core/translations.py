"""
Display-string lookup for tool titles and descriptions.

A translation helper is any callable ``(key, default) -> str``. The
configurable helper resolves a key from, in order: a value it already
returned, the ``GITHUB_MCP_<KEY>`` environment variable, the JSON config
file, and finally the default.
"""

from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from typing import Callable, Dict, Optional, Union

TranslationHelperFunc = Callable[[str, str], str]

CONFIG_FILENAME = "github-mcp-server-config.json"
ENV_PREFIX = "GITHUB_MCP_"

log = logging.getLogger("github_projects_mcp.core.translations")


def null_translation_helper(key: str, default: str) -> str:
    return default


class TranslationHelper:
    def __init__(
        self,
        config_path: Optional[Union[str, Path]] = None,
        *,
        environ: Optional[Dict[str, str]] = None,
    ):
        self.config_path = Path(config_path or CONFIG_FILENAME)
        self._environ = environ if environ is not None else os.environ
        self._config = self._load_config(self.config_path)
        self._resolved: Dict[str, str] = {}

    @staticmethod
    def _load_config(path: Path) -> Dict[str, str]:
        if not path.is_file():
            return {}
        try:
            raw = json.loads(path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as exc:
            log.warning("Could not read translations from %s: %s", path, exc)
            return {}
        if not isinstance(raw, dict):
            log.warning("Ignoring %s: expected a JSON object", path)
            return {}
        return {str(k).upper(): str(v) for k, v in raw.items()}

    def __call__(self, key: str, default: str) -> str:
        key = key.upper()
        if key in self._resolved:
            return self._resolved[key]

        value = self._environ.get(ENV_PREFIX + key)
        if value is None:
            value = self._config.get(key, default)

        self._resolved[key] = value
        return value

    def dump(self, path: Optional[Union[str, Path]] = None) -> Path:
        """Write every key resolved so far to the JSON config file."""
        target = Path(path or self.config_path)
        target.write_text(
            json.dumps(self._resolved, indent=2, sort_keys=True) + "\n",
            encoding="utf-8",
        )
        log.info("Wrote %d translation keys to %s", len(self._resolved), target)
        return target


__all__ = [
    "TranslationHelperFunc",
    "TranslationHelper",
    "null_translation_helper",
    "CONFIG_FILENAME",
    "ENV_PREFIX",
]
