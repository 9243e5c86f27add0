"""
License group commands and queries.
"""
import uuid
from dataclasses import dataclass, field
from typing import List, Optional


@dataclass
class CreateGroupCommand:
    """Command to create a license group."""

    name: str
    description: Optional[str] = None
    is_default: bool = False
    license_ids: List[uuid.UUID] = field(default_factory=list)
    actor: Optional[str] = None


@dataclass
class UpdateGroupCommand:
    """
    Command to update a license group.

    ``license_ids`` replaces the members when given; None keeps them.
    """

    group_id: uuid.UUID
    name: str
    description: Optional[str] = None
    is_default: bool = False
    license_ids: Optional[List[uuid.UUID]] = None
    actor: Optional[str] = None


@dataclass
class DeleteGroupCommand:
    """Command to delete a group. Assignments made through it are kept."""

    group_id: uuid.UUID
    actor: Optional[str] = None


@dataclass
class ChangeGroupMembersCommand:
    """Command to add or remove licenses of a group."""

    group_id: uuid.UUID
    license_ids: List[uuid.UUID] = field(default_factory=list)
    actor: Optional[str] = None


@dataclass
class GetGroupQuery:
    """Query for one group with its member licenses."""

    group_id: uuid.UUID


@dataclass
class ListGroupsQuery:
    """Query for all groups with their member licenses."""
