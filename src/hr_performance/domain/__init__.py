"""Domain layer: facts, assessment value objects, the score engine.

This package defines the bounded-context primitives that every other
layer depends on but never modifies.  Everything here is immutable.
"""
