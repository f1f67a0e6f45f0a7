"""
Toggle-relation engine.

A relation record (a like, a subscription) is state by existence: the first
toggle creates it, the second deletes it. One engine serves every such
relation; a :class:`RelationSpec` tells it which tables and columns to use.

Two racing "create" toggles cannot both succeed: the store's unique
constraint rejects the second insert, which surfaces as a 409 conflict.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass
from datetime import datetime
from typing import Any

from sqlalchemy.exc import IntegrityError

from vidshare.services._shared.base import BaseService
from vidshare.services._shared.errors import ConflictError, NotFoundError, ServiceError

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class RelationSpec:
    """
    Describe one toggleable relation.

    :param name: Log label, e.g. ``"video_like"``.
    :param kind: Target kind used in client messages (``Invalid video ID``,
        ``Video not found``).
    :param relation_repo: Picks the relation repository from a unit of work.
    :param target_repo: Picks the target repository from a unit of work.
    :param model: Relation model class; called with the two key columns.
    :param actor_field: Column holding the actor id.
    :param target_field: Column holding the target id.
    :param snapshot: Turns the loaded target into its public DTO.
    :param self_message: When set, toggling onto oneself is rejected with
        this message.
    :param visible: Optional ``(target, actor_id) -> bool``; hidden targets
        are reported as missing.
    """

    name: str
    kind: str
    relation_repo: Callable[[Any], Any]
    target_repo: Callable[[Any], Any]
    model: Callable[..., Any]
    actor_field: str
    target_field: str
    snapshot: Callable[[Any], Any]
    self_message: str | None = None
    visible: Callable[[Any, int], bool] | None = None


@dataclass(frozen=True, slots=True)
class RelationOut:
    """A freshly created relation record with its target snapshot."""

    id: int
    kind: str
    actor_id: int
    target_id: int
    target: Any
    created_at: datetime | None = None


@dataclass(frozen=True, slots=True)
class ToggleOut:
    """``active`` is the state after the toggle; ``relation`` is ``None`` when removed."""

    active: bool
    relation: RelationOut | None = None


class ToggleRelationEngine(BaseService):
    """Create-or-delete a relation record between an actor and a target."""

    def toggle(self, spec: RelationSpec, actor_id: int, raw_target_id: object) -> ToggleOut:
        """
        Flip the relation between ``actor_id`` and the target.

        :raises InvalidIdentifierError: ``raw_target_id`` is not an id (400).
        :raises ServiceError: Self-relation where forbidden (400).
        :raises NotFoundError: Target does not exist (404).
        :raises ConflictError: A concurrent toggle created the record first (409).
        """
        target_id = self.parse_identifier(raw_target_id, kind=spec.kind)
        if spec.self_message and target_id == actor_id:
            raise ServiceError(spec.self_message)

        keys = {spec.actor_field: actor_id, spec.target_field: target_id}
        try:
            with self.rw_uow() as uow:
                target = spec.target_repo(uow).get(target_id)
                if target is None or (spec.visible and not spec.visible(target, actor_id)):
                    label = spec.kind.capitalize()
                    raise NotFoundError(label, target_id, f"{label} not found")

                relations = spec.relation_repo(uow)
                existing = relations.find_one(**keys)
                if existing is not None:
                    relations.delete(existing)
                    result = ToggleOut(active=False)
                else:
                    record = relations.add(spec.model(**keys))
                    result = ToggleOut(
                        active=True,
                        relation=RelationOut(
                            id=record.id,
                            kind=spec.kind,
                            actor_id=actor_id,
                            target_id=target_id,
                            target=spec.snapshot(target),
                            created_at=record.created_at,
                        ),
                    )
        except IntegrityError as exc:
            logger.warning(
                "Relation toggle collided",
                extra={"relation": spec.name, "user_id": actor_id, "target_id": target_id},
            )
            raise ConflictError(spec.kind, "Conflict") from exc

        logger.info(
            "Relation toggled",
            extra={
                "relation": spec.name,
                "user_id": actor_id,
                "target_id": target_id,
                "active": result.active,
            },
        )
        return result
