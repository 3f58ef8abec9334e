"""Taskgraph - todo manager REST service with a typed relationship graph."""

__version__ = "0.1.0"
