# wavefront3d/assets/__init__.py
from .material import Material, MaterialTable
from .mtl_parser import MaterialParser, parse_materials

__all__ = ["Material", "MaterialTable", "MaterialParser", "parse_materials"]
