"""Routing: route records produced by the action scanner."""

from actionmap.routing.route import ActionRoute, HttpMethod

__all__ = ["ActionRoute", "HttpMethod"]
