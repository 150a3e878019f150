"""Backends for surface output generation (SwiftUI)."""

from .swiftui import render_nodes, render_surface

__all__ = ["render_nodes", "render_surface"]
