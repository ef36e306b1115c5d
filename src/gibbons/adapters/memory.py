# coding=utf-8
# Copyright 2024 XiaHan
#
# Use of this source code is governed by an MIT-style
# license that can be found in the LICENSE file or at
# https://opensource.org/licenses/MIT.

import logging
from typing import Dict, Iterable, List, Optional

from gibbons.adapters.base import Criteria, GibbonAdapter, Record
from gibbons.bitset.gibbon import Gibbon
from gibbons.configs import GibbonsConfig
from gibbons.constants import (
    COLLECTION_GROUP,
    COLLECTION_PERMISSION,
    COLLECTION_USER,
    GROUP_PERMISSIONS_FIELD,
    RECORD_KEY,
    USER_GROUPS_FIELD,
)
from gibbons.errors import InvalidRecordError, error_record_not_found

logger = logging.getLogger(__name__)

# The field of each collection holding an encoded gibbon
VECTOR_FIELDS = {
    COLLECTION_USER: USER_GROUPS_FIELD,
    COLLECTION_GROUP: GROUP_PERMISSIONS_FIELD,
}


class MemoryGibbonAdapter(GibbonAdapter):
    """
    Reference adapter keeping users, groups and permissions in dicts.

    Every collection hands out integer keys starting at 1 in insertion order
    and never reuses them, so a key stays a stable bit position. Names are
    unique per collection.
    """

    def __init__(self, config: Optional[GibbonsConfig] = None) -> None:
        self.config = config if config is not None else GibbonsConfig()
        self.collections: Dict[str, Dict[int, Record]] = {}
        self._next_keys: Dict[str, int] = {}
        self.is_initialized: bool = False

    def initialize(self) -> None:
        for name in (COLLECTION_USER, COLLECTION_GROUP, COLLECTION_PERMISSION):
            self.collections.setdefault(name, {})
            self._next_keys.setdefault(name, 1)
        self.is_initialized = True
        logger.debug("Initialized in-memory collections")

    # ======================
    # Collection helpers
    # ======================
    def _collection(self, name: str) -> Dict[int, Record]:
        if not self.is_initialized:
            raise RuntimeError("The adapter has not been initialized.")
        return self.collections[name]

    def _check_criteria(self, criteria: Criteria) -> None:
        if not isinstance(criteria, dict):
            raise InvalidRecordError(f"criteria not an instance of dict: {criteria!r}")

    def _check_record(self, record: Record) -> None:
        if not isinstance(record, dict):
            raise InvalidRecordError(f"record not an instance of dict: {record!r}")
        if not isinstance(record.get("name"), str):
            raise InvalidRecordError(f"record requires a string name: {record!r}")

    def _encode_vectors(self, collection: str, record: Record) -> Record:
        field = VECTOR_FIELDS.get(collection)
        if field is not None and isinstance(record.get(field), Gibbon):
            record = dict(record)
            record[field] = record[field].encode(self.config.encode_as_text)
        return record

    def _decode_vector(self, collection: str, record: Record) -> Optional[Gibbon]:
        value = record.get(VECTOR_FIELDS[collection])
        if value is None:
            return None
        return Gibbon.decode(value)

    def _find_by_collection(self, collection: str, criteria: Criteria) -> Optional[Record]:
        self._check_criteria(criteria)
        for record in self._collection(collection).values():
            if all(record.get(key) == value for key, value in criteria.items()):
                return record
        return None

    def _require(self, collection: str, criteria: Criteria) -> Record:
        record = self._find_by_collection(collection, criteria)
        if record is None:
            logger.warning(f"Lookup failed in {collection}: {criteria!r}")
            raise error_record_not_found(collection, criteria)
        return record

    def _insert(self, collection: str, record: Record) -> Record:
        self._check_record(record)
        records = self._collection(collection)
        if self._find_by_collection(collection, {"name": record["name"]}) is not None:
            raise InvalidRecordError(f"{collection} named {record['name']!r} already exists")
        key = self._next_keys[collection]
        self._next_keys[collection] = key + 1
        stored = self._encode_vectors(collection, record)
        stored = {**stored, RECORD_KEY: key}
        records[key] = stored
        logger.debug(f"Inserted {collection} {stored['name']!r} at position {key}")
        return dict(stored)

    def _insert_many(self, collection: str, records: List[Record]) -> List[Record]:
        if not isinstance(records, list):
            raise InvalidRecordError(f"{collection}s not an instance of list")
        names = set()
        for record in records:
            self._check_record(record)
            if record["name"] in names or self._find_by_collection(collection, {"name": record["name"]}):
                raise InvalidRecordError(f"{collection} named {record['name']!r} already exists")
            names.add(record["name"])
        return [self._insert(collection, record) for record in records]

    def _upsert_by_collection(self, collection: str, criteria: Criteria, data: Record) -> Record:
        self._check_criteria(criteria)
        if not isinstance(data, dict):
            raise InvalidRecordError(f"record not an instance of dict: {data!r}")
        found = self._find_by_collection(collection, {"name": criteria.get("name")})
        if found is None:
            return self._insert(collection, data)
        key = found[RECORD_KEY]
        name = data.get("name", found["name"])
        if name != found["name"]:
            self._check_record({**found, "name": name})
            if self._find_by_collection(collection, {"name": name}) is not None:
                raise InvalidRecordError(f"{collection} named {name!r} already exists")
        update = {**found, **self._encode_vectors(collection, data), RECORD_KEY: key}
        self._collection(collection)[key] = update
        logger.debug(f"Updated {collection} {update.get('name')!r} at position {key}")
        return dict(update)

    def _clear_position_from(self, collection: str, position: int) -> int:
        field = VECTOR_FIELDS[collection]
        # Decode every record before writing any of them back
        pending = []
        for record in self._collection(collection).values():
            gibbon = self._decode_vector(collection, record)
            if gibbon is None or position not in gibbon:
                continue
            pending.append((record, gibbon.clear_position(position)))
        for record, gibbon in pending:
            record[field] = gibbon.encode(self.config.encode_as_text)
        return len(pending)

    def _records_with_position(self, collection: str, position: int) -> List[Record]:
        out = []
        for record in self._collection(collection).values():
            gibbon = self._decode_vector(collection, record)
            if gibbon is not None and position in gibbon:
                out.append(dict(record))
        return out

    def _records_by_keys(self, collection: str, keys: Iterable[int]) -> List[Record]:
        records = self._collection(collection)
        return [dict(records[key]) for key in sorted(set(keys)) if key in records]

    # ======================
    # Adds
    # ======================
    def add_user(self, user: Record) -> Record:
        return self._insert(COLLECTION_USER, user)

    def add_group(self, group: Record) -> Record:
        return self._insert(COLLECTION_GROUP, group)

    def add_groups(self, groups: List[Record]) -> List[Record]:
        return self._insert_many(COLLECTION_GROUP, groups)

    def add_permission(self, permission: Record) -> Record:
        return self._insert(COLLECTION_PERMISSION, permission)

    def add_permissions(self, permissions: List[Record]) -> List[Record]:
        return self._insert_many(COLLECTION_PERMISSION, permissions)

    # ======================
    # Removes
    # ======================
    def remove_user(self, criteria: Criteria) -> None:
        user = self._require(COLLECTION_USER, criteria)
        del self._collection(COLLECTION_USER)[user[RECORD_KEY]]
        logger.debug(f"Removed user {user.get('name')!r}")

    def remove_group(self, criteria: Criteria) -> None:
        group = self._require(COLLECTION_GROUP, criteria)
        position = group[RECORD_KEY]
        changed = self._clear_position_from(COLLECTION_USER, position)
        # Last step, to remove the record itself.
        del self._collection(COLLECTION_GROUP)[position]
        logger.info(f"Removed group {group.get('name')!r} (position {position}) from {changed} users")

    def remove_permission(self, criteria: Criteria) -> None:
        permission = self._require(COLLECTION_PERMISSION, criteria)
        position = permission[RECORD_KEY]
        changed = self._clear_position_from(COLLECTION_GROUP, position)
        # Last step, to remove the record itself.
        del self._collection(COLLECTION_PERMISSION)[position]
        logger.info(f"Removed permission {permission.get('name')!r} (position {position}) from {changed} groups")

    # ======================
    # Upserts
    # ======================
    def upsert_user(self, criteria: Criteria, user: Record) -> Record:
        return self._upsert_by_collection(COLLECTION_USER, criteria, user)

    def upsert_group(self, criteria: Criteria, group: Record) -> Record:
        return self._upsert_by_collection(COLLECTION_GROUP, criteria, group)

    def upsert_permission(self, criteria: Criteria, permission: Record) -> Record:
        return self._upsert_by_collection(COLLECTION_PERMISSION, criteria, permission)

    # ======================
    # Finds
    # ======================
    def find_user(self, criteria: Criteria) -> Optional[Record]:
        record = self._find_by_collection(COLLECTION_USER, criteria)
        return None if record is None else dict(record)

    def find_group(self, criteria: Criteria) -> Optional[Record]:
        record = self._find_by_collection(COLLECTION_GROUP, criteria)
        return None if record is None else dict(record)

    def find_permission(self, criteria: Criteria) -> Optional[Record]:
        record = self._find_by_collection(COLLECTION_PERMISSION, criteria)
        return None if record is None else dict(record)

    def find_users_by_group(self, criteria: Criteria) -> List[Record]:
        group = self._require(COLLECTION_GROUP, criteria)
        return self._records_with_position(COLLECTION_USER, group[RECORD_KEY])

    def find_groups_by_permission(self, criteria: Criteria) -> List[Record]:
        permission = self._require(COLLECTION_PERMISSION, criteria)
        return self._records_with_position(COLLECTION_GROUP, permission[RECORD_KEY])

    def find_users_by_permission(self, criteria: Criteria) -> List[Record]:
        groups = self.find_groups_by_permission(criteria)
        group_positions = [group[RECORD_KEY] for group in groups]

        users = []
        for user in self._collection(COLLECTION_USER).values():
            gibbon = self._decode_vector(COLLECTION_USER, user)
            if gibbon is None:
                continue
            # Groups beyond the user's gibbon can't be set
            in_bounds = [position for position in group_positions if position <= len(gibbon) * 8]
            if gibbon.has_any_from_positions(in_bounds):
                users.append(dict(user))
        return users

    def find_groups_by_user(self, criteria: Criteria) -> List[Record]:
        user = self._require(COLLECTION_USER, criteria)
        gibbon = self._decode_vector(COLLECTION_USER, user)
        if gibbon is None:
            return []
        return self._records_by_keys(COLLECTION_GROUP, gibbon.get_positions_array())

    def find_permissions_by_user(self, criteria: Criteria) -> List[Record]:
        positions = set()
        for group in self.find_groups_by_user(criteria):
            gibbon = self._decode_vector(COLLECTION_GROUP, group)
            if gibbon is not None:
                positions.update(gibbon.get_positions_array())
        return self._records_by_keys(COLLECTION_PERMISSION, positions)

    # ======================
    # Validation
    # ======================
    def _user_permission_keys(self, criteria: Criteria) -> set:
        return {permission[RECORD_KEY] for permission in self.find_permissions_by_user(criteria)}

    def validate_user_with_all_permissions(self, criteria: Criteria, permissions: List[int]) -> bool:
        if not isinstance(permissions, list) or len(permissions) == 0:
            return False
        return set(permissions) <= self._user_permission_keys(criteria)

    def validate_user_with_any_permissions(self, criteria: Criteria, permissions: List[int]) -> bool:
        if not isinstance(permissions, list) or len(permissions) == 0:
            return False
        return len(set(permissions) & self._user_permission_keys(criteria)) > 0
