"""Engine module base class, module traits and the module registry."""

from __future__ import annotations

import enum
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, ClassVar, Iterator, Optional, TypeVar

if TYPE_CHECKING:
    from partee.entity import Entity

M = TypeVar("M", bound="Module")


class ModuleCategory(enum.Flag):
    """Bit flags describing what kind of system a module provides."""

    NONE = 0
    RENDERER = 1 << 0
    PHYSICS = 1 << 1
    AUDIO = 1 << 2
    INPUT = 1 << 3


@dataclass(frozen=True)
class ModuleTraits:
    """Static properties of a module type; by default not unique and uncategorised."""

    unique: bool = False
    categories: ModuleCategory = ModuleCategory.NONE


@dataclass
class ModuleInputs:
    """Data passed to modules when they are initialised."""


@dataclass
class ModuleUpdateInputs:
    """Data passed to modules every frame."""

    entities: list[Entity] = field(default_factory=list)
    delta_time: float = 0.0


class Module(ABC):
    """Base class for engine systems such as rendering or physics."""

    traits: ClassVar[ModuleTraits] = ModuleTraits()

    @abstractmethod
    def initialize(self, inputs: ModuleInputs) -> bool:
        """Prepare the module; return False to abort engine startup."""

    @abstractmethod
    def update(self, inputs: ModuleUpdateInputs) -> bool:
        """Advance one frame; return False to ask the engine to stop."""


class ModuleManager:
    """Holds at most one module instance per module type, in creation order."""

    def __init__(self) -> None:
        self._modules: dict[type[Module], Module] = {}

    def create_module(self, module_type: type[M]) -> M:
        """Instantiate and register ``module_type``; raise if it is already present."""
        if not (isinstance(module_type, type) and issubclass(module_type, Module)):
            raise TypeError(f"{module_type!r} is not a Module type")
        if module_type in self._modules:
            raise ValueError("Module of this type already exists")
        module = module_type()
        self._modules[module_type] = module
        return module

    def get_module(self, module_type: type[M]) -> Optional[M]:
        """Return the module of exactly ``module_type``, or None."""
        return self._modules.get(module_type)  # type: ignore[return-value]

    def __iter__(self) -> Iterator[Module]:
        return iter(tuple(self._modules.values()))

    def __len__(self) -> int:
        return len(self._modules)

    def __contains__(self, module_type: object) -> bool:
        return module_type in self._modules