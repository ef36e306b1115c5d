# coding=utf-8
# Copyright 2024 XiaHan
#
# Use of this source code is governed by an MIT-style
# license that can be found in the LICENSE file or at
# https://opensource.org/licenses/MIT.

import os
from typing import Any, Mapping, Optional

import toml

from gibbons.constants import (
    DEFAULT_BYTE_SIZE,
    DEFAULT_ENCODE_AS_TEXT,
    DEFAULT_LOG_LEVEL,
    ENV_ENCODE_AS_TEXT,
)
from gibbons.errors import InvalidSizeError

TRUE_STRINGS = ("1", "true", "yes", "on")


class GibbonsConfig(object):
    def __init__(self, path: Optional[str] = None) -> None:

        # basic
        self.byte_size: int = DEFAULT_BYTE_SIZE
        self.encode_as_text: bool = DEFAULT_ENCODE_AS_TEXT

        # logging
        self.logger_dir: Optional[str] = None
        self.log_level: str = DEFAULT_LOG_LEVEL

        if path is not None:
            self.read_toml(path)

    @staticmethod
    def from_env(environ: Optional[Mapping[str, str]] = None) -> "GibbonsConfig":
        """
        Builds a config whose encoding follows GIBBONS_ENCODE_FROM_TO_STRING.

        Args:
            environ (Mapping[str, str]): Defaults to os.environ.
        """
        if environ is None:
            environ = os.environ
        out = GibbonsConfig()
        value = environ.get(ENV_ENCODE_AS_TEXT)
        if value is not None:
            out.encode_as_text = out._parse_bool(value)
        return out

    def empty_str(self, s: Optional[str]) -> Optional[str]:
        if s == "":
            return None
        else:
            return s

    def _parse_bool(self, value: Any) -> bool:
        if isinstance(value, bool):
            return value
        if isinstance(value, str):
            return value.strip().lower() in TRUE_STRINGS
        raise ValueError(f"Expected a boolean, got {value!r}")

    def _valid_byte_size(self, byte_size: Any) -> int:
        if isinstance(byte_size, bool) or not isinstance(byte_size, int) or byte_size <= 0:
            raise InvalidSizeError(f"byte-size must be a positive integer, got {byte_size!r}")
        return byte_size

    def read_toml(self, path: str) -> None:
        config = toml.load(path)
        self.load_dict(config)

    def read_toml_str(self, content: str) -> None:
        self.load_dict(toml.loads(content))

    def load_dict(self, config: Mapping[str, Any]) -> None:
        if "basic" in config:
            basic = config["basic"]
            self.byte_size = self._valid_byte_size(basic.get("byte-size", self.byte_size))
            self.encode_as_text = self._parse_bool(basic.get("encode-as-text", self.encode_as_text))

        if "logging" in config:
            logging_config = config["logging"]
            self.logger_dir = self.empty_str(logging_config.get("logger-dir", self.logger_dir))
            self.log_level = str(logging_config.get("level", self.log_level)).upper()
