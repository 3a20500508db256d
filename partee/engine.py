"""The engine: owns modules, entities and input, and drives the frame loop."""

from __future__ import annotations

import time
from typing import Callable, Iterable, Optional, TypeVar

from partee.entity import Entity
from partee.input import InputBinding, InputDevice, InputEvent, InputSystem
from partee.modules import Module, ModuleInputs, ModuleManager, ModuleUpdateInputs

M = TypeVar("M", bound=Module)

TIME_SCALE = 5.0


class Engine:
    """Runs registered modules every frame over the engine's entities.

    ``quit_binding``, when given, stops the engine as soon as that input
    becomes active. Each frame's delta time is multiplied by ``time_scale``.
    """

    def __init__(
        self,
        input_system: Optional[InputSystem] = None,
        devices: Iterable[InputDevice] = (),
        quit_binding: Optional[InputBinding] = None,
        time_scale: float = TIME_SCALE,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.input_system = input_system if input_system is not None else InputSystem()
        self.time_scale = time_scale
        self._clock = clock
        self._modules = ModuleManager()
        self._entities: list[Entity] = []
        self._running = False
        self._last_frame_time = clock()

        for device in devices:
            self.input_system.register_device(device)
        if quit_binding is not None:
            self.input_system.bus.subscribe(
                InputEvent(quit_binding, True), lambda _event: self.stop()
            )
            self.input_system.register_input_event_subscription(quit_binding)

    @property
    def running(self) -> bool:
        """Whether the frame loop is running."""
        return self._running

    @property
    def entities(self) -> list[Entity]:
        """The engine's entities, in creation order."""
        return self._entities

    def add_module(
        self, module_type: type[M], configure: Optional[Callable[[M], object]] = None
    ) -> Engine:
        """Create a module of ``module_type``, optionally configure it, and return the engine.

        Raises ``ValueError`` if a module of that type is already present.
        """
        module = self._modules.create_module(module_type)
        if configure is not None:
            configure(module)
        return self

    def get_module(self, module_type: type[M]) -> Optional[M]:
        """Return the module of exactly ``module_type``, or None."""
        return self._modules.get_module(module_type)

    def create_entity(self) -> Entity:
        """Create, store and return a new entity."""
        entity = Entity()
        self._entities.append(entity)
        return entity

    def run(self) -> None:
        """Initialise every module, then update frames until stopped."""
        init_inputs = ModuleInputs()
        for module in self._modules:
            module.initialize(init_inputs)
        self._last_frame_time = self._clock()
        self._running = True
        while self._running:
            self.update()

    def update(self) -> None:
        """Advance one frame: poll input, then update every module.

        A module returning False stops the engine after this frame.
        """
        now = self._clock()
        dt = (now - self._last_frame_time) * self.time_scale
        self._last_frame_time = now

        self.input_system.poll()

        inputs = ModuleUpdateInputs(self._entities, dt)
        for module in self._modules:
            if not module.update(inputs):
                self._running = False

    def stop(self) -> None:
        """Ask the frame loop to finish after the current frame."""
        self._running = False