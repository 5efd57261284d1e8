"""Kernel utilities shared across the engine.

Rules:
- Kernel code must not import from registry, plugin or storage layers.
- Kernel utilities should stay small and stable; avoid business logic here.
"""
