"""A simulated free-list heap allocator over a fixed byte arena, with a heap-backed list demo."""

__version__ = "0.1.0"
__all__ = ["heap", "demo"]