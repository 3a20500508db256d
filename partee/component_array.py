"""Entity handles and packed per-type component storage."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Generic, Iterator, TypeVar

T = TypeVar("T")


@dataclass(frozen=True)
class EntityHandle:
    """Lightweight entity reference; the generation detects stale handles."""

    id: int
    generation: int = 0


class ComponentArray(Generic[T]):
    """Packed storage of one component type, with swap-and-pop removal."""

    def __init__(self, factory: Callable[[], T]) -> None:
        self._factory = factory
        self._index_to_entity: list[EntityHandle] = []
        self._entity_to_index: dict[EntityHandle, int] = {}
        self._components: list[T] = []

    def register_entity(self, entity: EntityHandle) -> T:
        """Create a default component for ``entity`` and return it."""
        if entity in self._entity_to_index:
            raise ValueError("Entity already has component")
        component = self._factory()
        self._entity_to_index[entity] = len(self._components)
        self._components.append(component)
        self._index_to_entity.append(entity)
        return component

    def remove_entity(self, entity: EntityHandle) -> None:
        """Remove ``entity``'s component; does nothing if it has none."""
        removed = self._entity_to_index.pop(entity, None)
        if removed is None:
            return
        last = len(self._components) - 1
        if removed != last:
            moved = self._index_to_entity[last]
            self._components[removed] = self._components[last]
            self._index_to_entity[removed] = moved
            self._entity_to_index[moved] = removed
        self._components.pop()
        self._index_to_entity.pop()

    def get(self, entity: EntityHandle) -> T:
        """Return ``entity``'s component, raising ``KeyError`` if absent."""
        try:
            return self._components[self._entity_to_index[entity]]
        except KeyError:
            raise KeyError("Entity does not have component") from None

    def components(self) -> list[T]:
        """Return the packed components in storage order."""
        return list(self._components)

    def entity_component_pairs(self) -> list[tuple[EntityHandle, T]]:
        """Return ``(entity, component)`` pairs in storage order."""
        return list(zip(self._index_to_entity, self._components))

    def __contains__(self, entity: object) -> bool:
        return entity in self._entity_to_index

    def __len__(self) -> int:
        return len(self._components)

    def __iter__(self) -> Iterator[T]:
        return iter(self._components)