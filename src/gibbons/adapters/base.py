# coding=utf-8
# Copyright 2024 XiaHan
#
# Use of this source code is governed by an MIT-style
# license that can be found in the LICENSE file or at
# https://opensource.org/licenses/MIT.

from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional

Record = Dict[str, Any]
Criteria = Dict[str, Any]


class GibbonAdapter(ABC):
    """
    Storage contract used by Gibbons.

    Users hold an encoded gibbon of group positions in ``groups`` and groups
    hold an encoded gibbon of permission positions in ``permissions``. The
    position of a group or permission is the integer key its storage
    assigned to it.
    """

    @abstractmethod
    def initialize(self) -> None:
        """Prepare the underlying storage and its collections."""

    @abstractmethod
    def add_user(self, user: Record) -> Record:
        ...

    @abstractmethod
    def add_group(self, group: Record) -> Record:
        ...

    @abstractmethod
    def add_groups(self, groups: List[Record]) -> List[Record]:
        ...

    @abstractmethod
    def add_permission(self, permission: Record) -> Record:
        ...

    @abstractmethod
    def add_permissions(self, permissions: List[Record]) -> List[Record]:
        ...

    @abstractmethod
    def remove_user(self, criteria: Criteria) -> None:
        ...

    @abstractmethod
    def remove_group(self, criteria: Criteria) -> None:
        """Remove a group and clear its position from every user."""

    @abstractmethod
    def remove_permission(self, criteria: Criteria) -> None:
        """Remove a permission and clear its position from every group."""

    @abstractmethod
    def upsert_user(self, criteria: Criteria, user: Record) -> Record:
        ...

    @abstractmethod
    def upsert_group(self, criteria: Criteria, group: Record) -> Record:
        ...

    @abstractmethod
    def upsert_permission(self, criteria: Criteria, permission: Record) -> Record:
        ...

    @abstractmethod
    def find_user(self, criteria: Criteria) -> Optional[Record]:
        ...

    @abstractmethod
    def find_group(self, criteria: Criteria) -> Optional[Record]:
        ...

    @abstractmethod
    def find_permission(self, criteria: Criteria) -> Optional[Record]:
        ...

    @abstractmethod
    def find_users_by_permission(self, criteria: Criteria) -> List[Record]:
        ...

    @abstractmethod
    def find_users_by_group(self, criteria: Criteria) -> List[Record]:
        ...

    @abstractmethod
    def find_groups_by_permission(self, criteria: Criteria) -> List[Record]:
        ...

    @abstractmethod
    def find_groups_by_user(self, criteria: Criteria) -> List[Record]:
        ...

    @abstractmethod
    def find_permissions_by_user(self, criteria: Criteria) -> List[Record]:
        ...

    @abstractmethod
    def validate_user_with_all_permissions(self, criteria: Criteria, permissions: List[int]) -> bool:
        """All given permission positions must be reachable through the user's groups."""

    @abstractmethod
    def validate_user_with_any_permissions(self, criteria: Criteria, permissions: List[int]) -> bool:
        """One of the given permission positions must be reachable through the user's groups."""
