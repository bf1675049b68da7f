"""Branching game dialogue: speakers, nodes, transitions, conditions, events and a picker."""

__version__ = "0.1.0"

__all__ = [
    "types",
    "sockets",
    "speaker",
    "controller",
    "dialogue",
    "manager",
    "picker",
    "nodes",
    "transitions",
    "queries",
    "conditions",
    "events",
]