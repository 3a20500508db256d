"""Input devices, bindings and a polling input system that emits change events."""

from __future__ import annotations

import threading
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import ClassVar, Optional

from partee.events import Event, EventBus

_FNV_OFFSET_BASIS = 2166136261
_FNV_PRIME = 16777619
_MASK32 = 0xFFFFFFFF


def fnv1a_32(text: str | bytes) -> int:
    """Return the 32-bit FNV-1a hash of ``text`` (UTF-8 encoded if a string)."""
    data = text.encode("utf-8") if isinstance(text, str) else text
    value = _FNV_OFFSET_BASIS
    for byte in data:
        # Bytes above 0x7F are treated as signed chars widened to 32 bits.
        value ^= byte if byte < 0x80 else (byte | 0xFFFFFF00)
        value = (value * _FNV_PRIME) & _MASK32
    return value


def device_type_id(name: str) -> int:
    """Map a device type name to an id in the range [0, 65535)."""
    return fnv1a_32(name) % 65535


@dataclass(frozen=True)
class InputBinding:
    """Identifies one input on one device instance."""

    device_id: int
    input_id: int
    device_index: int = 0


@dataclass(frozen=True)
class InputEvent(Event):
    """Published when a subscribed binding changes between active and inactive."""

    binding: InputBinding
    active: bool


class InputDevice(ABC):
    """Base class for input devices; each subclass gets a type id from its name."""

    type_id: ClassVar[int] = device_type_id("InputDevice")

    def __init_subclass__(cls, **kwargs: object) -> None:
        super().__init_subclass__(**kwargs)
        cls.type_id = device_type_id(cls.__qualname__)

    @abstractmethod
    def poll(self) -> None:
        """Refresh the device state."""

    @abstractmethod
    def is_active(self, binding: InputBinding) -> bool:
        """Whether the digital input named by ``binding`` is active."""

    @abstractmethod
    def get_analog(self, binding: InputBinding) -> float:
        """The analog value of the input named by ``binding``."""


class InputSystem:
    """Owns the registered devices and publishes :class:`InputEvent` on changes."""

    def __init__(self, bus: Optional[EventBus] = None) -> None:
        self.bus = bus if bus is not None else EventBus()
        self._devices: dict[int, list[InputDevice]] = {}
        self._subscribed_states: dict[InputBinding, bool] = {}
        self._lock = threading.RLock()

    def poll(self) -> None:
        """Poll every device, then publish an event for each subscribed binding that changed."""
        with self._lock:
            for device_list in self._devices.values():
                for device in device_list:
                    device.poll()
            for binding, previous in list(self._subscribed_states.items()):
                if self._is_active_internal(binding) != previous:
                    self.bus.publish(InputEvent(binding, not previous))
                    self._subscribed_states[binding] = not previous

    def is_active(self, binding: InputBinding) -> bool:
        """Whether ``binding`` is active on its device."""
        with self._lock:
            return self._is_active_internal(binding)

    def get_analog(self, binding: InputBinding) -> float:
        """The analog value of ``binding`` on its device."""
        with self._lock:
            return self._device_for(binding, "analog input").get_analog(binding)

    def register_device(self, device: Optional[InputDevice]) -> None:
        """Add ``device`` under its type id; None is ignored."""
        if device is None:
            return
        with self._lock:
            self._devices.setdefault(device.type_id, []).append(device)

    def register_input_event_subscription(self, binding: InputBinding) -> None:
        """Start tracking ``binding`` so that :meth:`poll` reports its changes."""
        if binding.device_id not in self._devices:
            raise ValueError("Device type not found.")
        self._subscribed_states[binding] = self.is_active(binding)

    def _device_for(self, binding: InputBinding, what: str = "input") -> InputDevice:
        device_list = self._devices.get(binding.device_id)
        if device_list is None:
            raise ValueError(f"Device type not found for {what}.")
        if not 0 <= binding.device_index < len(device_list):
            raise IndexError(f"Device index out of range for {what}.")
        return device_list[binding.device_index]

    def _is_active_internal(self, binding: InputBinding) -> bool:
        return self._device_for(binding).is_active(binding)