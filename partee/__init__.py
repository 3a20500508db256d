"""A small entity-component game engine core: vectors, events, entities, modules, input and box physics."""

__version__ = "0.1.0"