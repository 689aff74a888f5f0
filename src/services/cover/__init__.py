"""Cover page composition engine: style resolution, rendering, reassembly."""

from src.services.cover.composer import ReassemblyPolicy, compose
from src.services.cover.templates import TEMPLATES, build_cover_layout, render_cover

__all__ = [
    "ReassemblyPolicy",
    "TEMPLATES",
    "build_cover_layout",
    "compose",
    "render_cover",
]
