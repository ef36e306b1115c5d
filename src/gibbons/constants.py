# coding=utf-8
# Copyright 2024 XiaHan
#
# Use of this source code is governed by an MIT-style
# license that can be found in the LICENSE file or at
# https://opensource.org/licenses/MIT.

DEFAULT_BYTE_SIZE = 256
DEFAULT_ENCODE_AS_TEXT = False

DEFAULT_LOGGER_DIR = "./logs"
DEFAULT_LOGGER_FILENAME = "gibbons.log"
DEFAULT_LOG_LEVEL = "INFO"

ENV_ENCODE_AS_TEXT = "GIBBONS_ENCODE_FROM_TO_STRING"

COLLECTION_USER = "user"
COLLECTION_GROUP = "group"
COLLECTION_PERMISSION = "permission"

RECORD_KEY = "id"
USER_GROUPS_FIELD = "groups"
GROUP_PERMISSIONS_FIELD = "permissions"
