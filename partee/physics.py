"""Rigid bodies, box colliders and a simple impulse-based physics module."""

from __future__ import annotations

import math
import sys
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from itertools import combinations
from typing import Iterable, Optional

from partee.entity import Component, Entity, TransformComponent
from partee.modules import (
    Module,
    ModuleCategory,
    ModuleInputs,
    ModuleTraits,
    ModuleUpdateInputs,
)
from partee.vector import Vector3

_SLOP = 0.001
_RESTITUTION = 0.5
_DEGENERATE_EXTENT = 0.0001
_ZERO_ROTATION_SQUARED = 0.0001
_PARALLEL_THRESHOLD = 0.9

_IDENTITY_AXES = (
    Vector3(1.0, 0.0, 0.0),
    Vector3(0.0, 1.0, 0.0),
    Vector3(0.0, 0.0, 1.0),
)


def compute_axes(front_normal: Vector3) -> tuple[Vector3, Vector3, Vector3]:
    """Return orthonormal (right, up, forward) axes for a facing normal.

    A (near) zero normal yields the identity axes.
    """
    if front_normal.length_squared() < _ZERO_ROTATION_SQUARED:
        return _IDENTITY_AXES
    forward = front_normal.normalized()
    temp_up = Vector3(0.0, 1.0, 0.0)
    if abs(forward.dot(temp_up)) > _PARALLEL_THRESHOLD:
        temp_up = Vector3(1.0, 0.0, 0.0)
    right = temp_up.cross(forward).normalized()
    up = forward.cross(right).normalized()
    return (right, up, forward)


@dataclass(frozen=True)
class OBB:
    """An oriented bounding box."""

    center: Vector3 = field(default_factory=Vector3)
    half_extents: Vector3 = field(default_factory=Vector3)
    axes: tuple[Vector3, Vector3, Vector3] = _IDENTITY_AXES


@dataclass(frozen=True)
class CollisionManifold:
    """Result of a narrow-phase test; ``normal`` points from A to B."""

    colliding: bool = False
    normal: Vector3 = field(default_factory=Vector3)
    penetration: float = 0.0


def _owner_transform(component: Component) -> TransformComponent:
    owner = component.owner
    if owner is None:
        raise RuntimeError("Component is not attached to an entity")
    transform = owner.get_component(TransformComponent)
    if transform is None:
        raise RuntimeError("Entity has no TransformComponent")
    return transform


class ColliderComponent(Component, ABC):
    """Base class of collision shapes; requires a transform."""

    def require_dependencies(self) -> None:
        assert self.owner is not None
        self.owner.ensure_component(TransformComponent)

    @abstractmethod
    def bounding_sphere_radius(self) -> float:
        """Radius of a sphere around the owner's position enclosing the shape."""


class BoxColliderComponent(ColliderComponent):
    """A box shaped by the owner's transform scale and facing normal."""

    def bounding_sphere_radius(self) -> float:
        return (_owner_transform(self).scale * 0.5).length()

    def obb(self) -> OBB:
        """Return the oriented bounding box of this collider."""
        transform = _owner_transform(self)
        return OBB(
            center=transform.position,
            half_extents=transform.scale * 0.5,
            axes=compute_axes(transform.rotation),
        )


@dataclass(eq=False)
class RigidBodyComponent(Component):
    """Mass and velocity of a dynamic entity."""

    mass: float = 1.0
    velocity: Vector3 = field(default_factory=Vector3)

    def require_dependencies(self) -> None:
        assert self.owner is not None
        self.owner.ensure_component(TransformComponent)


class PhysicsModule(Module):
    """Integrates gravity and resolves box-box collisions each frame."""

    traits = ModuleTraits(unique=True, categories=ModuleCategory.PHYSICS)

    def __init__(self, gravity: Optional[Vector3] = None) -> None:
        self.gravity = gravity if gravity is not None else Vector3(0.0, 10.0, 0.0)

    def initialize(self, inputs: ModuleInputs) -> bool:
        """Check that the physics settings are usable; False aborts startup."""
        gravity = self.gravity
        return all(math.isfinite(value) for value in (gravity.x, gravity.y, gravity.z))

    def update(self, inputs: ModuleUpdateInputs) -> bool:
        for entity in inputs.entities:
            if entity.get_component(RigidBodyComponent) is not None:
                self.calculate_physics(entity, inputs.delta_time)
        self.check_collisions(inputs.entities)
        return True

    def calculate_physics(self, entity: Entity, dt: float) -> None:
        """Apply gravity to the entity's velocity, then move it by that velocity."""
        body = entity.get_component(RigidBodyComponent)
        transform = entity.get_component(TransformComponent)
        if body is None or transform is None:
            raise ValueError("Entity needs a RigidBodyComponent and a TransformComponent")
        body.velocity = body.velocity + self.gravity * dt
        transform.position = transform.position + body.velocity * dt

    def check_collisions(self, entities: Iterable[Entity]) -> None:
        """Detect overlapping boxes and push dynamic ones apart."""
        candidates = []
        for a, b in combinations(list(entities), 2):
            collider_a = a.get_component(ColliderComponent)
            collider_b = b.get_component(ColliderComponent)
            if collider_a is None or collider_b is None:
                continue
            transform_a = a.get_component(TransformComponent)
            transform_b = b.get_component(TransformComponent)
            if transform_a is None or transform_b is None:
                continue
            dist_sq = (transform_a.position - transform_b.position).length_squared()
            radius_sum = (
                collider_a.bounding_sphere_radius() + collider_b.bounding_sphere_radius()
            )
            if dist_sq <= radius_sum * radius_sum:
                candidates.append((a, b))

        for a, b in candidates:
            box_a = a.get_component(ColliderComponent)
            box_b = b.get_component(ColliderComponent)
            if not isinstance(box_a, BoxColliderComponent) or not isinstance(
                box_b, BoxColliderComponent
            ):
                continue
            manifold = self.compute_obb_manifold(box_a.obb(), box_b.obb())
            if manifold.colliding:
                self._resolve(a, b, manifold)

    def _resolve(self, a: Entity, b: Entity, manifold: CollisionManifold) -> None:
        body_a = a.get_component(RigidBodyComponent)
        body_b = b.get_component(RigidBodyComponent)
        if body_a is None and body_b is None:
            return

        correction = manifold.normal * (manifold.penetration - _SLOP)
        transform_a = a.get_component(TransformComponent)
        transform_b = b.get_component(TransformComponent)
        assert transform_a is not None and transform_b is not None
        if body_a is not None and body_b is not None:
            transform_a.position = transform_a.position - correction * 0.5
            transform_b.position = transform_b.position + correction * 0.5
        elif body_a is not None:
            transform_a.position = transform_a.position - correction
        else:
            transform_b.position = transform_b.position + correction

        velocity_a = body_a.velocity if body_a is not None else Vector3()
        velocity_b = body_b.velocity if body_b is not None else Vector3()
        vel_along_normal = (velocity_b - velocity_a).dot(manifold.normal)
        if vel_along_normal > 0.0:
            return
        inv_mass_a = 1.0 if body_a is not None else 0.0
        inv_mass_b = 1.0 if body_b is not None else 0.0
        inv_mass_sum = inv_mass_a + inv_mass_b
        if inv_mass_sum <= 0.0:
            return
        magnitude = -(1.0 + _RESTITUTION) * vel_along_normal / inv_mass_sum
        impulse = manifold.normal * magnitude
        if body_a is not None:
            body_a.velocity = velocity_a - impulse * inv_mass_a
        if body_b is not None:
            body_b.velocity = velocity_b + impulse * inv_mass_b

    def compute_obb_manifold(self, a: OBB, b: OBB) -> CollisionManifold:
        """Separating-axis test over the six face axes of both boxes."""
        delta = b.center - a.center
        min_overlap = sys.float_info.max
        min_axis = Vector3()
        for candidate in (*a.axes, *b.axes):
            axis = candidate.normalized()
            proj_a = self.project_extent(a, axis)
            proj_b = self.project_extent(b, axis)
            # Both boxes flat along this axis (2D boxes): it cannot separate them.
            if proj_a < _DEGENERATE_EXTENT and proj_b < _DEGENERATE_EXTENT:
                continue
            side = axis.dot(delta)
            overlap = proj_a + proj_b - abs(side)
            if overlap <= 0.0:
                return CollisionManifold(colliding=False)
            if overlap < min_overlap:
                min_overlap = overlap
                min_axis = -axis if side < 0.0 else axis
        return CollisionManifold(colliding=True, normal=min_axis, penetration=min_overlap)

    def project_extent(self, obb: OBB, axis: Vector3) -> float:
        """Half-length of ``obb``'s projection onto ``axis``."""
        half = obb.half_extents
        return (
            half.x * abs(axis.dot(obb.axes[0]))
            + half.y * abs(axis.dot(obb.axes[1]))
            + half.z * abs(axis.dot(obb.axes[2]))
        )