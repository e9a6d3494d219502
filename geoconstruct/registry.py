"""Arena of construction entities addressed by stable integer handles."""

from __future__ import annotations

from typing import Dict, Iterator, List, Optional, Tuple

from .entities import Entity, EntityKind
from .errors import DuplicateNameError, UnknownReferenceError

Handle = int


class Registry:
    """Insertion-ordered entity arena plus the name table used while building.

    Entities are stored once in ``_entities``; a name maps to the handle of
    its slot. Entities reference each other directly, so the name table is
    only needed to resolve builder arguments.
    """

    def __init__(self) -> None:
        self._entities: List[Entity] = []
        self._names: List[str] = []
        self._handles: Dict[str, Handle] = {}
        self._by_identity: Dict[int, Handle] = {}

    def register(self, name: str, entity: Entity) -> Handle:
        if name in self._handles:
            raise DuplicateNameError(name, f"name {name!r} is already registered")
        handle = len(self._entities)
        self._entities.append(entity)
        self._names.append(name)
        self._handles[name] = handle
        self._by_identity[id(entity)] = handle
        return handle

    def handle(self, name: str) -> Optional[Handle]:
        return self._handles.get(name)

    def handle_of(self, entity: Entity) -> Optional[Handle]:
        handle = self._by_identity.get(id(entity))
        if handle is None or self._entities[handle] is not entity:
            return None
        return handle

    def entity(self, handle: Handle) -> Entity:
        return self._entities[handle]

    def name(self, handle: Handle) -> str:
        return self._names[handle]

    def lookup(self, name: str) -> Entity:
        handle = self._handles.get(name)
        if handle is None:
            raise UnknownReferenceError(name, f"unknown reference {name!r}")
        return self._entities[handle]

    def lookup_kind(self, name: str, kind: EntityKind) -> Entity:
        entity = self.lookup(name)
        if entity.kind is not kind:
            raise UnknownReferenceError(
                name, f"reference {name!r} is a {entity.kind.value}, expected a {kind.value}"
            )
        return entity

    def items(self) -> Iterator[Tuple[str, Entity]]:
        return iter(zip(self._names, self._entities))

    def __contains__(self, name: object) -> bool:
        return name in self._handles

    def __len__(self) -> int:
        return len(self._entities)

    def __iter__(self) -> Iterator[str]:
        return iter(self._names)
