"""Exceptions raised by plumb."""

from __future__ import annotations


class PlumbError(Exception):
    """Base class for plumb errors."""


class MissingGeometryError(PlumbError, LookupError):
    """A node has no measured box yet, so its edges cannot be routed."""

    def __init__(self, node_id: str):
        super().__init__(f"No geometry for node '{node_id}'")
        self.node_id = node_id


class RouteConfigError(PlumbError, ValueError):
    """Route options or box geometry that the solver refuses to work with."""
