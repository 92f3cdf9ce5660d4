######################################################################
# Copyright 2016, 2024 John J. Rofrano. All Rights Reserved.
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
# https://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.
######################################################################

"""
User Registry

Ordered, in-memory collection of Users. Records are copied on the way in
and on the way out so the registry is the only place they change.
"""

import copy
import logging
from typing import Callable, List, Optional

from console.models import User

logger = logging.getLogger(__name__)

DELETE_CONFIRMATION = "Are you sure you want to delete this user?"


class UserRegistry:
    """Holds every User known to the console in insertion order"""

    def __init__(self):
        self._users: List[User] = []

    def __len__(self):
        return len(self._users)

    def __repr__(self):
        return f"<UserRegistry count=[{len(self._users)}]>"

    def list_users(self) -> List[User]:
        """Returns all Users (as a list) in insertion order"""
        logger.info("Processing all Users")
        return [copy.deepcopy(user) for user in self._users]

    def find_user(self, user_id: str) -> Optional[User]:
        """Finds a User by its id (single object or None)"""
        logger.info("Processing lookup for user id %s ...", user_id)
        index = self._index_of(user_id)
        return None if index is None else copy.deepcopy(self._users[index])

    def search_users(self, term: Optional[str]) -> List[User]:
        """Returns Users whose name or email contains term (case-insensitive)"""
        needle = (term or "").strip().lower()
        if not needle:
            return self.list_users()
        logger.info("Processing user search for %s ...", needle)
        return [
            copy.deepcopy(user)
            for user in self._users
            if needle in user.full_name.lower() or needle in user.email.lower()
        ]

    def save_user(self, candidate: User):
        """
        Replaces the User with the same id or appends a new one

        The replacement is a full overwrite. Nothing from the previous
        record is carried over.
        """
        record = copy.deepcopy(candidate)
        index = self._index_of(record.id)
        if index is None:
            logger.info("Creating %s", record)
            self._users.append(record)
        else:
            logger.info("Saving %s", record)
            self._users[index] = record

    def delete_user(self, user_id: str, confirm: Callable[[str], bool]) -> bool:
        """
        Removes the User with user_id once confirm() agrees

        Returns True when the confirmation was accepted, whether or not a
        User was found. A declined confirmation leaves the registry untouched.
        """
        if not confirm(DELETE_CONFIRMATION):
            logger.info("Deletion of user %s cancelled", user_id)
            return False
        index = self._index_of(user_id)
        if index is not None:
            logger.info("Deleting %s", self._users[index])
            del self._users[index]
        return True

    def clear(self):
        """Removes all Users"""
        logger.info("Removing all Users")
        self._users.clear()

    def _index_of(self, user_id: str) -> Optional[int]:
        for index, user in enumerate(self._users):
            if user.id == user_id:
                return index
        return None
