"""Core type definitions for cowbinder."""

type View[T] = T
"""Type alias indicating a value is borrowed, not copied.

When you see `View[T]` in a return type, the returned object lives inside a
storage node that may be shared with other binders. Do not mutate it; use
`Binder.read_mut()` to obtain a reference that is safe to write through.
"""
