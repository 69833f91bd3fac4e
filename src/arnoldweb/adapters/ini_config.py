# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""
INI configuration reader.

Reads the [arnold] section of a configuration file:

    [arnold]
    xmin = 0.8
    xmax = 1.2
    ymin = 0.8
    ymax = 1.2
    step = 0.25     # multiplied by the stepper's step scale
    tend = 20000.0
    eps = 0.01
    driver = 1      # 1 = leapfrog, 2 = saba3

Missing keys keep their defaults. External dependencies (configparser,
file I/O) are confined to this adapter.
"""
import configparser
import logging
from typing import Any, Callable

from arnoldweb.domain.config import ArnoldConfig
from arnoldweb.domain.symplectic import IntegratorVariant
from arnoldweb.ports import ConfigSource

logger = logging.getLogger(__name__)

SECTION = "arnold"


def _parse_seed(text: str) -> int | None:
    if text.strip().lower() in ("", "none"):
        return None
    return int(text)


_PARSERS: dict[str, Callable[[str], Any]] = {
    "step": float,
    "tend": float,
    "xmin": float,
    "xmax": float,
    "ymin": float,
    "ymax": float,
    "eps": float,
    "driver": IntegratorVariant.parse,
    "smod": int,
    "xres": int,
    "yres": int,
    "seed": _parse_seed,
}


class IniConfigReader(ConfigSource):
    """Reads ArnoldConfig from INI files."""

    def __init__(self, defaults: ArnoldConfig | None = None) -> None:
        self._defaults = defaults or ArnoldConfig()

    def read_config(self, path: str) -> ArnoldConfig:
        with open(path, encoding='utf-8') as f:
            return self.read_string(f.read(), source=path)

    def read_string(self, text: str, source: str = "<string>") -> ArnoldConfig:
        """Parse configuration text.

        Raises:
            ValueError: If a value cannot be parsed or the options are
                inconsistent. The message names the offending key.
        """
        parser = configparser.ConfigParser(inline_comment_prefixes=('#', ';'))
        try:
            parser.read_string(text, source=source)
        except configparser.Error as e:
            raise ValueError(f"Invalid configuration file {source}: {e}") from e

        if not parser.has_section(SECTION):
            logger.warning("No [%s] section in %s, using defaults", SECTION, source)
            return self._defaults.validate()

        values: dict[str, Any] = {}
        for key, raw in parser.items(SECTION):
            parse = _PARSERS.get(key)
            if parse is None:
                logger.warning("Ignoring unknown option %s.%s in %s", SECTION, key, source)
                continue
            try:
                values[key] = parse(raw)
            except ValueError as e:
                raise ValueError(
                    f"Invalid value for {SECTION}.{key} in {source}: {raw!r} ({e})"
                ) from e

        return self._defaults.with_overrides(**values).validate()
