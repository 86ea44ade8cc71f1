"""Domain layer: transaction aggregate, value snapshots, domain events.

Nothing in this package performs I/O.  Snapshots and events are
immutable; only the ``Transaction`` aggregate holds mutable state.
"""
