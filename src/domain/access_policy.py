from __future__ import annotations

from enum import StrEnum

from .actors import Actor
from .base_types import Role
from .errors import Forbidden


class Permission(StrEnum):
    # Acquisition cost, counterparty details, total cost and profit.
    VIEW_ACQUISITION = "view_acquisition"
    EDIT_ACQUISITION = "edit_acquisition"
    # Acquire and remove items.
    MANAGE_ACQUISITION = "manage_acquisition"
    # Descriptive fields, status, cost events and disposal info.
    VIEW_ITEM = "view_item"
    EDIT_ITEM = "edit_item"
    VIEW_DIRECTORY = "view_directory"
    MANAGE_DIRECTORY = "manage_directory"
    VIEW_LEDGER = "view_ledger"
    RECORD_ADJUSTMENT = "record_adjustment"


POLICY: dict[Role, frozenset[Permission]] = {
    Role.FULL_ACCESS: frozenset(Permission),
    Role.RESTRICTED: frozenset(
        {
            Permission.VIEW_ITEM,
            Permission.EDIT_ITEM,
            Permission.VIEW_DIRECTORY,
        }
    ),
    Role.READ_ONLY: frozenset({Permission.VIEW_ITEM}),
}


def is_allowed(role: Role, permission: Permission) -> bool:
    return permission in POLICY.get(role, frozenset())


def require(actor: Actor, permission: Permission) -> None:
    if not is_allowed(actor.role, permission):
        raise Forbidden(
            f"Role {actor.role} is not allowed to {permission} (actor={actor.id})",
            role=actor.role.value,
            permission=permission.value,
        )


__all__ = ["POLICY", "Permission", "is_allowed", "require"]
