"""
Wavefront3D – загрузчик Wavefront OBJ / MTL для Python.
Превращает текст OBJ в плоские numpy‑буферы, готовые для GPU, и
разбирает библиотеки материалов MTL.
"""

from wavefront3d.utils import logger
from wavefront3d.utils.config import (
    LoadOptions,
    GPU_LOAD_OPTIONS,
    OFFLINE_RENDERING_LOAD_OPTIONS,
)
from wavefront3d.errors import (
    LoadError,
    LoadWarning,
    MalformedNumber,
    InvalidFaceIndex,
    InvalidPolygon,
    MissingArgument,
    EmptyOrTruncatedFile,
    InvalidLoadOptions,
    MaterialLibraryUnreadable,
)
from wavefront3d.mesh import Mesh, NO_MATERIAL
from wavefront3d.assets import Material, MaterialTable
from wavefront3d.loader import (
    LoadResult,
    load,
    load_async,
    load_from_buffers,
    load_from_buffers_async,
    load_materials,
    load_materials_from_buffer,
    load_many,
)

__version__ = "1.0.0"

__all__ = [
    "LoadOptions",
    "GPU_LOAD_OPTIONS",
    "OFFLINE_RENDERING_LOAD_OPTIONS",
    "LoadError",
    "LoadWarning",
    "MalformedNumber",
    "InvalidFaceIndex",
    "InvalidPolygon",
    "MissingArgument",
    "EmptyOrTruncatedFile",
    "InvalidLoadOptions",
    "MaterialLibraryUnreadable",
    "Mesh",
    "NO_MATERIAL",
    "Material",
    "MaterialTable",
    "LoadResult",
    "load",
    "load_async",
    "load_from_buffers",
    "load_from_buffers_async",
    "load_materials",
    "load_materials_from_buffer",
    "load_many",
]
