# wavefront3d/mesh/mesh.py
"""
Результирующий меш – плоские numpy‑буферы, готовые для отправки в GPU.
"""

from __future__ import annotations

from typing import Iterator, Optional, Sequence, Tuple

import numpy as np

# Сентинел «без материала» в буфере material_ids.
NO_MATERIAL = -1


def _floats(data, width: int, dtype) -> np.ndarray:
    if data is None:
        return np.zeros((0, width), dtype=dtype)
    return np.asarray(data, dtype=dtype).reshape((-1, width))


def _ints(data, dtype) -> np.ndarray:
    if data is None:
        return np.zeros(0, dtype=dtype)
    return np.asarray(data, dtype=dtype).reshape(-1)


class Mesh:
    """
    Один объект/группа из OBJ‑файла.

    Все непустые вершинные буферы (positions, normals, texcoords,
    vertex_colors) идут 1:1 – вершина с индексом i описана i‑й строкой
    каждого из них. ``indices`` ссылается на эти строки.

    На каждый примитив приходится по одному элементу в ``material_ids``
    и ``smoothing_groups``; ``face_arities`` заполнен только для
    нетриангулированных мешей.
    """

    def __init__(self,
                 positions,
                 normals=None,
                 texcoords=None,
                 vertex_colors=None,
                 indices=None,
                 face_arities=None,
                 material_ids=None,
                 smoothing_groups=None,
                 position_indices=None,
                 texcoord_indices=None,
                 normal_indices=None,
                 name: str = "unnamed_object",
                 object_name: Optional[str] = None,
                 groups: Sequence[str] = (),
                 material_name: Optional[str] = None,
                 triangulated: bool = False,
                 dtype=np.float32):
        self.name = name
        self.object_name = object_name
        self.groups: Tuple[str, ...] = tuple(groups)
        self.material_name = material_name
        self.triangulated = triangulated

        self.positions = _floats(positions, 3, dtype)
        self.normals = _floats(normals, 3, dtype)
        self.texcoords = _floats(texcoords, 2, dtype)
        self.vertex_colors = _floats(vertex_colors, 3, dtype)

        self.indices = _ints(indices, np.uint32)
        self.face_arities = _ints(face_arities, np.uint32)
        self.material_ids = _ints(material_ids, np.int32)
        self.smoothing_groups = _ints(smoothing_groups, np.uint32)

        # Исходные (OBJ) индексы каждого угла – только без single_index.
        self.position_indices = _ints(position_indices, np.int64)
        self.texcoord_indices = _ints(texcoord_indices, np.int64)
        self.normal_indices = _ints(normal_indices, np.int64)

    # -----------------------------------------------------------------
    @property
    def num_vertices(self) -> int:
        return int(self.positions.shape[0])

    @property
    def num_primitives(self) -> int:
        return int(self.material_ids.shape[0])

    @property
    def primitive_arity(self) -> Optional[int]:
        """3 для триангулированного меша, иначе None (см. face_arities)."""
        return 3 if self.triangulated else None

    @property
    def material_id(self) -> Optional[int]:
        """Общий id материала, если он один на весь меш и разрешён."""
        if self.material_ids.size == 0:
            return None
        first = int(self.material_ids[0])
        if first == NO_MATERIAL or np.any(self.material_ids != first):
            return None
        return first

    # -----------------------------------------------------------------
    def primitive_offsets(self) -> np.ndarray:
        """Смещение первого индекса каждого примитива в ``indices``."""
        if self.triangulated:
            return np.arange(self.num_primitives, dtype=np.int64) * 3
        offsets = np.zeros(self.face_arities.shape[0], dtype=np.int64)
        if offsets.size > 1:
            np.cumsum(self.face_arities[:-1], out=offsets[1:])
        return offsets

    def iter_primitives(self) -> Iterator[np.ndarray]:
        """Индексы вершин каждого примитива по порядку."""
        if self.triangulated:
            yield from self.indices.reshape((-1, 3))
            return
        for start, arity in zip(self.primitive_offsets(), self.face_arities):
            yield self.indices[start:start + int(arity)]

    # -----------------------------------------------------------------
    @property
    def bounding_sphere(self) -> Tuple[np.ndarray, float]:
        """(центр, радиус) в координатах модели."""
        if self.num_vertices == 0:
            return np.zeros(3, dtype=self.positions.dtype), 0.0
        centre = self.positions.mean(axis=0).astype(self.positions.dtype)
        radius = np.linalg.norm(self.positions - centre, axis=1).max()
        return centre, float(radius)

    def __repr__(self) -> str:
        return (f"Mesh(name={self.name!r}, vertices={self.num_vertices}, "
                f"primitives={self.num_primitives}, material={self.material_name!r})")
