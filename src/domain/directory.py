from __future__ import annotations

import logging
from uuid import uuid4

from .access_policy import Permission, require
from .actors import Actor
from .base_types import ActorId, OrgId, Role
from .errors import Conflict, InvariantViolation, NotFound
from .store import Collection, EntityStore

logger = logging.getLogger(__name__)


class DirectoryManager:
    """Actors of an organization.

    An organization always keeps at least one FULL_ACCESS actor.
    """

    def __init__(self, *, store: EntityStore) -> None:
        self._store = store

    def create_organization(self, *, email: str, name: str) -> Actor:
        """Bootstrap a new organization with its founding FULL_ACCESS actor.

        This is the only way to obtain a FULL_ACCESS actor without an existing
        one; signing in never promotes an unknown identity.
        """
        founder = Actor(email=email, name=name, org_id=OrgId(uuid4()), role=Role.FULL_ACCESS)
        with self._store.transaction():
            self._ensure_email_free(founder.email)
            self._store.put(Collection.ACTORS, founder)
        logger.info("Created organization %s for %s", founder.org_id, founder.email)
        return founder

    def invite(self, actor: Actor, *, email: str, name: str, role: Role) -> Actor:
        require(actor, Permission.MANAGE_DIRECTORY)
        invitee = Actor(email=email, name=name, org_id=actor.org_id, role=role)
        with self._store.transaction():
            self._ensure_email_free(invitee.email)
            self._store.put(Collection.ACTORS, invitee)
        logger.info("Invited %s as %s into organization %s", invitee.email, role, actor.org_id)
        return invitee

    def change_role(self, actor: Actor, actor_id: ActorId, new_role: Role) -> Actor:
        require(actor, Permission.MANAGE_DIRECTORY)
        with self._store.transaction():
            member = self._load(actor, actor_id)
            if member.role == Role.FULL_ACCESS and new_role != Role.FULL_ACCESS:
                self._ensure_other_full_access(member)
            member.role = new_role
            self._store.put(Collection.ACTORS, member)
        logger.info("Changed role of %s to %s", member.email, new_role)
        return member

    def remove(self, actor: Actor, actor_id: ActorId) -> None:
        require(actor, Permission.MANAGE_DIRECTORY)
        with self._store.transaction():
            member = self._load(actor, actor_id)
            if member.role == Role.FULL_ACCESS:
                self._ensure_other_full_access(member)
            self._store.delete(Collection.ACTORS, member.id)
        logger.info("Removed %s from organization %s", member.email, member.org_id)

    def list_members(self, actor: Actor) -> list[Actor]:
        require(actor, Permission.VIEW_DIRECTORY)
        return self._store.list(Collection.ACTORS, lambda member: member.org_id == actor.org_id)

    def find_by_email(self, email: str) -> Actor | None:
        normalized = email.strip().lower()
        matches = self._store.list(Collection.ACTORS, lambda member: member.email == normalized)
        return matches[0] if matches else None

    def _load(self, actor: Actor, actor_id: ActorId) -> Actor:
        member: Actor | None = self._store.get(Collection.ACTORS, actor_id)
        if member is None or member.org_id != actor.org_id:
            raise NotFound(f"Actor {actor_id} not found", collection=Collection.ACTORS.value, record_id=actor_id)
        return member

    def _ensure_email_free(self, email: str) -> None:
        if self.find_by_email(email) is not None:
            raise Conflict(f"An actor with email {email} already exists", key=email)

    def _ensure_other_full_access(self, member: Actor) -> None:
        others = self._store.list(
            Collection.ACTORS,
            lambda other: other.org_id == member.org_id and other.role == Role.FULL_ACCESS and other.id != member.id,
        )
        if not others:
            raise InvariantViolation(
                f"Organization {member.org_id} must keep at least one FULL_ACCESS actor",
                org_id=member.org_id,
            )


__all__ = ["DirectoryManager"]
