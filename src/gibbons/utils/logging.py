# coding=utf-8
# Copyright 2024 XiaHan
#
# Use of this source code is governed by an MIT-style
# license that can be found in the LICENSE file or at
# https://opensource.org/licenses/MIT.

import logging
import logging.handlers
import os
import re
from typing import Optional, Union

from gibbons.constants import DEFAULT_LOGGER_DIR

LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"
LOG_DATEFMT = "%Y-%m-%d %H:%M:%S"

handler: Optional[logging.Handler] = None


# Define a custom formatter without color codes
class NoColorFormatter(logging.Formatter):
    color_pattern = re.compile(r"\x1b[^m]*m")  # Regex pattern to match color codes

    def format(self, record):
        message = super().format(record)
        # Remove color codes from the log message
        message = self.color_pattern.sub("", message)
        return message


def build_logger(
    logger_name: str,
    logger_filename: str,
    logger_dir: str = DEFAULT_LOGGER_DIR,
    level: Union[int, str] = logging.INFO,
) -> logging.Logger:
    """
    Returns the named logger with a rotating file handler attached.

    The file handler is created once per process and shared by every
    logger below logger_name.
    """
    global handler

    formatter = logging.Formatter(fmt=LOG_FORMAT, datefmt=LOG_DATEFMT)
    nocolor_formatter = NoColorFormatter(fmt=LOG_FORMAT, datefmt=LOG_DATEFMT)

    # Set the format of root handlers
    if len(logging.getLogger().handlers) == 0:
        logging.basicConfig(level=level, encoding="utf-8")
        logging.getLogger().handlers[0].setFormatter(formatter)

    logger = logging.getLogger(logger_name)
    logger.setLevel(level)

    # Add a file handler for all loggers
    if handler is None:
        os.makedirs(logger_dir, exist_ok=True)
        filename = os.path.join(logger_dir, logger_filename)
        handler = logging.handlers.TimedRotatingFileHandler(
            filename, when="H", utc=True, encoding="utf-8"
        )
        handler.setFormatter(nocolor_formatter)
        handler.namer = lambda name: name.replace(".log", "") + ".log"

    if handler not in logger.handlers:
        logger.addHandler(handler)

    return logger


def close_logger(logger_name: str) -> None:
    """
    Detaches and closes the shared file handler.
    """
    global handler

    if handler is None:
        return
    logging.getLogger(logger_name).removeHandler(handler)
    handler.close()
    handler = None
