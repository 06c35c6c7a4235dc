"""
Core decimal value type, integer primitives, text codec and contracts.

This package holds the pure, synchronous computation over fixed-width
integers and strings; it performs no I/O and holds no shared state.
"""
