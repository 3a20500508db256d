# partee

A compact game-engine core written in pure Python with no third-party dependencies.

## What it contains

- `partee.vector` provides the immutable value types `Vector2`, `Vector3` and `Color`.
  - `Vector3` supports arithmetic, `dot`, `cross`, `length`, `length_squared`, `normalized`, `component_mul` and `abs`.
- `partee.events` provides an `EventBus`.
  - A subscriber gives a filter event and a callback.
  - A published event reaches every subscriber of the same event type whose filter compares equal to it.
  - Subscribers are called in the order they subscribed.
- `partee.entity` provides the `Entity` class, which holds at most one component per component type.
  - Its methods are `add_component`, `with_component`, `get_component`, `ensure_component`, `has_component`, `remove_component` and `update`.
  - `get_component` first looks for a component of the exact type. If there is none, it returns one derived from that type.
  - Components subclass `Component` and can override `require_dependencies`, `on_attach`, `on_detach` and `on_update`.
  - `TransformComponent` holds `position`, `rotation` and `scale`.
  - `UpdateComponent` calls `update_function(dt, owner)` on every update.
- `partee.component_array` provides `EntityHandle` (an id plus a generation) and `ComponentArray`.
  - `ComponentArray` is packed storage for one component type, built from a factory.
  - Removal is done by swap-and-pop.
- `partee.modules` provides the `Module` base class with `initialize` and `update`.
  - It also provides `ModuleInputs`, `ModuleUpdateInputs`, the `ModuleCategory` flags and `ModuleTraits`.
  - `ModuleManager` keeps one instance per module type.
- `partee.input` provides `InputBinding`, `InputEvent`, the abstract `InputDevice` and `InputSystem`.
  - Each `InputDevice` subclass gets a `type_id`, computed from its class name with `fnv1a_32` and `device_type_id`.
  - `InputSystem.poll()` polls every registered device.
  - It then publishes an `InputEvent` for each subscribed binding that changed state.
- `partee.physics` provides `PhysicsModule`, which does two things each frame:
  - It applies gravity (default `Vector3(0, 10, 0)`) to entities with a `RigidBodyComponent`.
  - It resolves overlaps between `BoxColliderComponent` entities. Detection uses a bounding-sphere broad phase and then a separating-axis test on oriented boxes (`OBB`, `CollisionManifold`, `compute_axes`). Resolution applies a positional correction and an impulse.
- `partee.engine` provides `Engine`, which owns the modules, entities and input system, and drives the frame loop.

## Installation

```
pip install .
```

To also install the test requirements:

```
pip install .[test]
```

## Example

```python
from partee.engine import Engine
from partee.entity import TransformComponent
from partee.physics import PhysicsModule, RigidBodyComponent, BoxColliderComponent
from partee.vector import Vector3

engine = Engine()
engine.add_module(PhysicsModule, lambda physics: setattr(physics, "gravity", Vector3(0.0, -9.8, 0.0)))

ball = engine.create_entity()
ball.add_component(RigidBodyComponent)      # also adds a TransformComponent
ball.add_component(BoxColliderComponent)
ball.get_component(TransformComponent).position = Vector3(0.0, 50.0, 0.0)

engine.update()   # advance one frame
```

### The frame loop

Each call to `Engine.update()` does the following:

1. It measures the time since the previous frame.
2. It scales that time by `time_scale`, which defaults to `5.0`.
3. It polls the input system.
4. It calls `update` on every module.

If any module returns `False`, the engine stops after that frame.

`Engine.run()` first calls `initialize` on every module. It then keeps calling `update()` until one of these happens:

- `stop()` is called.
- A module's `update` returns `False`.

### Input

Input devices are supplied by the caller, as subclasses of `InputDevice`:

```python
from partee.engine import Engine
from partee.input import InputBinding, InputDevice

class ScriptedKeys(InputDevice):
    def __init__(self):
        self.pressed = set()

    def poll(self):
        pass

    def is_active(self, binding):
        return binding.input_id in self.pressed

    def get_analog(self, binding):
        return 1.0 if binding.input_id in self.pressed else 0.0

keys = ScriptedKeys()
escape = InputBinding(ScriptedKeys.type_id, 27)
engine = Engine(devices=[keys], quit_binding=escape)
```

When `escape` becomes active during a poll, the engine stops.

## What it does not do

The package has no rendering, no windowing and no audio. It also ships no concrete keyboard or mouse devices, so reading real hardware is left to `InputDevice` subclasses that you write. There is no command-line program; the package is used as a library.

## Tests

```
pytest
```