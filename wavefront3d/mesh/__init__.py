# wavefront3d/mesh/__init__.py
from .mesh import Mesh, NO_MATERIAL
from .dedup import VertexDeduplicator, merge_corners
from .reorder import reorder_by_material

__all__ = ["Mesh", "NO_MATERIAL", "VertexDeduplicator", "merge_corners", "reorder_by_material"]
