"""
Resource Store Service

Keeps the mock's users, groups and applications in memory for the lifetime of
the process. Each resource kind lives in its own ResourceCollection; nothing is
persisted and a restart starts from empty collections.
"""

import logging
from typing import Dict, Generic, List, Optional, TypeVar

from pydantic import BaseModel

from ..exceptions import ResourceNotFoundError
from ..models import (
    ApplicationCreateRequest,
    GroupCreateRequest,
    OktaApplication,
    OktaGroup,
    OktaUser,
    UserCreateRequest,
    UserUpdateRequest,
    build_application,
    build_group,
    build_user,
    next_timestamp,
)

logger = logging.getLogger(__name__)

RecordT = TypeVar("RecordT", bound=BaseModel)


class ResourceCollection(Generic[RecordT]):
    """
    Mapping from generated identifier to record for one resource kind.

    Iteration order is insertion order, so listings come back in creation
    order. Replacing an existing record keeps its position.

    Example usage:
        users = ResourceCollection("User")
        users.add(user.id, user)
        users.require(user.id)      # raises ResourceNotFoundError if absent
        users.list_all()            # [user, ...]
        users.delete(user.id)       # True
    """

    def __init__(self, kind: str):
        """
        Args:
            kind: Resource kind label used in not-found summaries ("User", "Group", "App")
        """
        self.kind = kind
        self._records: Dict[str, RecordT] = {}

    def add(self, resource_id: str, record: RecordT) -> None:
        if resource_id in self._records:
            raise ValueError(f"{self.kind} {resource_id} already exists")
        self._records[resource_id] = record

    def replace(self, resource_id: str, record: RecordT) -> None:
        """Swap the stored record for an existing identifier."""
        self.require(resource_id)
        self._records[resource_id] = record

    def require(self, resource_id: str) -> RecordT:
        """
        Look up a record that must exist.

        Raises:
            ResourceNotFoundError: If the identifier is unknown
        """
        record = self._records.get(resource_id)
        if record is None:
            logger.warning(f"{self.kind} not found: {resource_id}")
            raise ResourceNotFoundError(resource_id, self.kind)
        return record

    def list_all(self) -> List[RecordT]:
        return list(self._records.values())

    def delete(self, resource_id: str) -> bool:
        """
        Returns:
            True if the record was found and removed, False otherwise
        """
        if resource_id in self._records:
            del self._records[resource_id]
            return True
        return False


class MockDataStore:
    """
    In-memory state of the mock Okta org.

    Owns one collection per resource kind and the operations the API exposes on
    them. Collections are independent: nothing spans more than one of them.

    All methods are synchronous and never yield, so handlers running on the
    event loop cannot interleave between a lookup and the write that follows.

    Example usage:
        store = MockDataStore(base_url="http://localhost:8080")
        user = store.create_user(UserCreateRequest(profile={"email": "a@b.com"}))
        store.update_user(user.id, UserUpdateRequest(profile={"firstName": "A"}))
        store.delete_user(user.id)
    """

    def __init__(self, base_url: str):
        """
        Args:
            base_url: Scheme and host used when building self-links (e.g. "http://localhost:8080")
        """
        self.base_url = base_url
        self.users: ResourceCollection[OktaUser] = ResourceCollection("User")
        self.groups: ResourceCollection[OktaGroup] = ResourceCollection("Group")
        self.applications: ResourceCollection[OktaApplication] = ResourceCollection("App")

    # Users

    def list_users(self) -> List[OktaUser]:
        return self.users.list_all()

    def get_user(self, user_id: str) -> OktaUser:
        return self.users.require(user_id)

    def create_user(self, request: Optional[UserCreateRequest] = None) -> OktaUser:
        user = build_user(request, self.base_url)
        self.users.add(user.id, user)
        logger.info(f"Created user {user.id} (login: {user.profile['login'] or 'N/A'})")
        return user

    def update_user(self, user_id: str, request: Optional[UserUpdateRequest] = None) -> OktaUser:
        """
        Shallow-merge the request profile over the stored one.

        Keys in the request override stored keys; stored keys the request does
        not mention survive. Only ``profile`` and ``lastUpdated`` change.

        Raises:
            ResourceNotFoundError: If the user does not exist
        """
        user = self.users.require(user_id)
        changes = (request.profile if request else None) or {}

        updated = user.model_copy(
            update={
                "profile": {**user.profile, **changes},
                "lastUpdated": next_timestamp(user.lastUpdated),
            }
        )
        self.users.replace(user_id, updated)
        logger.info(f"Updated user {user_id} (profile keys: {sorted(changes) or 'none'})")
        return updated

    def delete_user(self, user_id: str) -> None:
        """
        Raises:
            ResourceNotFoundError: If the user does not exist
        """
        self.users.require(user_id)
        self.users.delete(user_id)
        logger.info(f"Deleted user {user_id}")

    # Groups

    def list_groups(self) -> List[OktaGroup]:
        return self.groups.list_all()

    def create_group(self, request: Optional[GroupCreateRequest] = None) -> OktaGroup:
        group = build_group(request, self.base_url)
        self.groups.add(group.id, group)
        logger.info(f"Created group {group.id} (name: {group.profile.name or 'N/A'})")
        return group

    # Applications

    def list_applications(self) -> List[OktaApplication]:
        return self.applications.list_all()

    def create_application(self, request: Optional[ApplicationCreateRequest] = None) -> OktaApplication:
        application = build_application(request, self.base_url)
        self.applications.add(application.id, application)
        logger.info(f"Created application {application.id} (label: {application.label})")
        return application

