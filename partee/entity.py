"""Entities that own typed components, plus the basic transform and update components."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, ClassVar, Optional, TypeVar

from partee.vector import Vector3

C = TypeVar("C", bound="Component")


class Component:
    """Base class for behaviour and data attached to an :class:`Entity`."""

    owner: Optional[Entity] = None
    attached: bool = False
    requires: ClassVar[tuple[type[Component], ...]] = ()

    def require_dependencies(self) -> None:
        """Add the component types listed in ``requires`` to the owner."""
        if not self.requires:
            return
        if self.owner is None:
            raise RuntimeError("Component is not attached to an entity")
        for dependency in self.requires:
            self.owner.ensure_component(dependency)

    def on_attach(self) -> None:
        """Called once the component is attached and its dependencies exist."""
        self.attached = True

    def on_detach(self) -> None:
        """Called just before the component is removed."""
        self.attached = False
        self.owner = None

    def on_update(self, dt: float) -> None:
        """Called every time the owning entity is updated."""


class Entity:
    """A container of components, at most one per component type."""

    def __init__(self) -> None:
        self._components: dict[type[Component], Component] = {}

    def add_component(self, component_type: type[C]) -> C:
        """Create, attach and return a component of ``component_type``."""
        if not (isinstance(component_type, type) and issubclass(component_type, Component)):
            raise TypeError(f"{component_type!r} is not a Component type")
        if component_type in self._components:
            raise ValueError("Component already exists on entity")
        component = component_type()
        component.owner = self
        self._components[component_type] = component
        component.require_dependencies()
        component.on_attach()
        return component

    def with_component(
        self, component_type: type[C], configure: Callable[[C], object]
    ) -> Entity:
        """Add a component, pass it to ``configure`` and return this entity."""
        configure(self.add_component(component_type))
        return self

    def get_component(self, component_type: type[C]) -> Optional[C]:
        """Return the component of exactly this type, else one derived from it, else None."""
        component = self._components.get(component_type)
        if component is not None:
            return component  # type: ignore[return-value]
        return next(
            (c for c in self._components.values() if isinstance(c, component_type)),
            None,
        )

    def ensure_component(self, component_type: type[C]) -> None:
        """Add a component of ``component_type`` unless one of that exact type exists."""
        if not self.has_component(component_type):
            self.add_component(component_type)

    def has_component(self, component_type: type[Component]) -> bool:
        """Whether a component of exactly ``component_type`` is attached."""
        return component_type in self._components

    def remove_component(self, component_type: type[Component]) -> None:
        """Detach and drop the component of exactly ``component_type``, if any."""
        component = self._components.get(component_type)
        if component is None:
            return
        component.on_detach()
        del self._components[component_type]

    def update(self, dt: float) -> None:
        """Update every attached component."""
        for component in tuple(self._components.values()):
            component.on_update(dt)


@dataclass(eq=False)
class TransformComponent(Component):
    """Position, rotation (used as a facing normal) and scale of an entity."""

    position: Vector3 = field(default_factory=lambda: Vector3(0.0, 0.0, 0.0))
    rotation: Vector3 = field(default_factory=lambda: Vector3(0.0, 0.0, 1.0))
    scale: Vector3 = field(default_factory=lambda: Vector3(100.0, 100.0, 100.0))


@dataclass(eq=False)
class UpdateComponent(Component):
    """Runs a user function with ``(dt, owner)`` on every update."""

    update_function: Optional[Callable[[float, Optional[Entity]], object]] = None

    def on_update(self, dt: float) -> None:
        if self.update_function is not None:
            self.update_function(dt, self.owner)