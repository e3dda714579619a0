"""Core primitives shared by every layer: config, errors, clock, ids, enums."""
