# coding=utf-8
# Copyright 2024 XiaHan
#
# Use of this source code is governed by an MIT-style
# license that can be found in the LICENSE file or at
# https://opensource.org/licenses/MIT.

import logging
from typing import List, Optional, Union

from gibbons.adapters.base import Criteria, GibbonAdapter, Record
from gibbons.bitset.gibbon import BytesLike, Gibbon
from gibbons.configs import GibbonsConfig
from gibbons.constants import DEFAULT_LOGGER_FILENAME
from gibbons.utils.logging import build_logger

logger = logging.getLogger(__name__)


class Gibbons(object):
    """
    Entry point for group and permission handling.

    Every storage operation is delegated to the adapter, the encoding of
    gibbons follows the config.

    Args:
        adapter (GibbonAdapter): The storage adapter.
        config (GibbonsConfig): Defaults to GibbonsConfig().

    Raises:
        TypeError: If adapter is not a GibbonAdapter.
    """

    def __init__(self, adapter: GibbonAdapter, config: Optional[GibbonsConfig] = None) -> None:
        if not isinstance(adapter, GibbonAdapter):
            raise TypeError("adapter not of expected type GibbonAdapter")
        self._adapter = adapter
        self.config = config if config is not None else GibbonsConfig()

        if self.config.logger_dir is not None:
            build_logger("gibbons", DEFAULT_LOGGER_FILENAME, self.config.logger_dir, self.config.log_level)

    @property
    def adapter(self) -> GibbonAdapter:
        return self._adapter

    def new_gibbon(self) -> Gibbon:
        return Gibbon.create(self.config.byte_size)

    def encode(self, gibbon: Gibbon) -> Union[str, bytes]:
        return gibbon.encode(self.config.encode_as_text)

    def decode(self, data: Union[str, BytesLike]) -> Gibbon:
        return Gibbon.decode(data)

    def initialize(self) -> None:
        logger.info(f"Initializing adapter {type(self._adapter).__name__}")
        self._adapter.initialize()

    def find_user(self, criteria: Criteria) -> Optional[Record]:
        return self._adapter.find_user(criteria)

    def find_group(self, criteria: Criteria) -> Optional[Record]:
        return self._adapter.find_group(criteria)

    def find_permission(self, criteria: Criteria) -> Optional[Record]:
        return self._adapter.find_permission(criteria)

    def find_users_by_permission(self, criteria: Criteria) -> List[Record]:
        return self._adapter.find_users_by_permission(criteria)

    def find_users_by_group(self, criteria: Criteria) -> List[Record]:
        return self._adapter.find_users_by_group(criteria)

    def find_groups_by_permission(self, criteria: Criteria) -> List[Record]:
        return self._adapter.find_groups_by_permission(criteria)

    def add_user(self, user: Record) -> Record:
        return self._adapter.add_user(user)

    def add_group(self, group: Record) -> Record:
        return self._adapter.add_group(group)

    def add_groups(self, groups: List[Record]) -> List[Record]:
        return self._adapter.add_groups(groups)

    def add_permission(self, permission: Record) -> Record:
        return self._adapter.add_permission(permission)

    def add_permissions(self, permissions: List[Record]) -> List[Record]:
        return self._adapter.add_permissions(permissions)

    def remove_user(self, criteria: Criteria) -> None:
        self._adapter.remove_user(criteria)

    def remove_group(self, criteria: Criteria) -> None:
        self._adapter.remove_group(criteria)

    def remove_permission(self, criteria: Criteria) -> None:
        self._adapter.remove_permission(criteria)

    def upsert_user(self, criteria: Criteria, user: Record) -> Record:
        return self._adapter.upsert_user(criteria, user)

    def upsert_group(self, criteria: Criteria, group: Record) -> Record:
        return self._adapter.upsert_group(criteria, group)

    def upsert_permission(self, criteria: Criteria, permission: Record) -> Record:
        return self._adapter.upsert_permission(criteria, permission)

    def find_groups_by_user(self, criteria: Criteria) -> List[Record]:
        return self._adapter.find_groups_by_user(criteria)

    def find_permissions_by_user(self, criteria: Criteria) -> List[Record]:
        return self._adapter.find_permissions_by_user(criteria)

    def validate_user_with_all_permissions(self, criteria: Criteria, permissions: List[int]) -> bool:
        return self._adapter.validate_user_with_all_permissions(criteria, permissions)

    def validate_user_with_any_permissions(self, criteria: Criteria, permissions: List[int]) -> bool:
        return self._adapter.validate_user_with_any_permissions(criteria, permissions)
