import pytest

from partee.events import EventBus
from partee.input import (
    InputBinding,
    InputDevice,
    InputEvent,
    InputSystem,
    device_type_id,
    fnv1a_32,
)


class FakeKeys(InputDevice):
    def __init__(self):
        self.pressed = set()
        self.queued = set()
        self.polls = 0

    def poll(self):
        self.polls += 1
        self.pressed |= self.queued
        self.queued.clear()

    def is_active(self, binding):
        return binding.input_id in self.pressed

    def get_analog(self, binding):
        return float(binding.input_id) * 0.5


class FakePad(InputDevice):
    def poll(self):
        pass

    def is_active(self, binding):
        return False

    def get_analog(self, binding):
        return -1.0


def key(code, index=0):
    return InputBinding(FakeKeys.type_id, code, index)


def test_fnv_empty_is_offset_basis():
    assert fnv1a_32("") == 2166136261


def test_fnv_known_vector():
    assert fnv1a_32("a") == 0xE40C292C
    assert fnv1a_32(b"a") == fnv1a_32("a")


def test_device_type_id_range_and_stability():
    for name in ("Keyboard", "Mouse", "FakeKeys", ""):
        value = device_type_id(name)
        assert 0 <= value < 65535
        assert device_type_id(name) == value


def test_subclasses_get_distinct_type_ids():
    assert FakeKeys.type_id == device_type_id("FakeKeys")
    assert FakeKeys.type_id != FakePad.type_id


def test_binding_equality_and_hash():
    assert key(65) == InputBinding(FakeKeys.type_id, 65, 0)
    assert key(65) != key(65, 1)
    assert len({key(65), key(65), key(66)}) == 2


def test_is_active_and_analog():
    system = InputSystem()
    keys = FakeKeys()
    system.register_device(keys)
    keys.pressed.add(65)
    assert system.is_active(key(65)) is True
    assert system.is_active(key(66)) is False
    assert system.get_analog(key(4)) == 2.0


def test_unknown_device_type_raises():
    system = InputSystem()
    with pytest.raises(ValueError):
        system.is_active(key(65))
    with pytest.raises(ValueError):
        system.get_analog(key(65))
    with pytest.raises(ValueError):
        system.register_input_event_subscription(key(65))


def test_device_index_out_of_range_raises():
    system = InputSystem()
    system.register_device(FakeKeys())
    with pytest.raises(IndexError):
        system.is_active(key(65, 1))
    with pytest.raises(IndexError):
        system.get_analog(key(65, 1))


def test_multiple_devices_of_one_type():
    system = InputSystem()
    first, second = FakeKeys(), FakeKeys()
    system.register_device(first)
    system.register_device(second)
    second.pressed.add(10)
    assert system.is_active(key(10, 0)) is False
    assert system.is_active(key(10, 1)) is True


def test_register_none_is_ignored():
    system = InputSystem()
    system.register_device(None)
    with pytest.raises(ValueError):
        system.is_active(key(1))


def test_poll_polls_every_device():
    system = InputSystem()
    devices = [FakeKeys(), FakeKeys()]
    for device in devices:
        system.register_device(device)
        device.queued.add(7)
    assert system.is_active(key(7, 0)) is False
    assert system.is_active(key(7, 1)) is False
    system.poll()
    assert system.is_active(key(7, 0)) is True
    assert system.is_active(key(7, 1)) is True
    system.poll()
    assert [d.polls for d in devices] == [2, 2]


def test_poll_publishes_state_changes():
    bus = EventBus()
    system = InputSystem(bus)
    keys = FakeKeys()
    system.register_device(keys)
    binding = key(27)
    system.register_input_event_subscription(binding)

    pressed, released = [], []
    bus.subscribe(InputEvent(binding, True), pressed.append)
    bus.subscribe(InputEvent(binding, False), released.append)

    system.poll()
    assert pressed == [] and released == []

    keys.pressed.add(27)
    system.poll()
    system.poll()
    assert pressed == [InputEvent(binding, True)]

    keys.pressed.clear()
    system.poll()
    assert released == [InputEvent(binding, False)]
    assert len(pressed) == 1


def test_default_bus_created():
    system = InputSystem()
    keys = FakeKeys()
    system.register_device(keys)
    system.register_input_event_subscription(key(5))
    received = []
    system.bus.subscribe(InputEvent(key(5), True), received.append)
    keys.pressed.add(5)
    system.poll()
    assert received == [InputEvent(key(5), True)]