"""Type dependency graph."""

from .builder import build_type_graph
from .models import TypeGraph

__all__ = ["TypeGraph", "build_type_graph"]
