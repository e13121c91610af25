# wavefront3d/mesh/assembler.py
# -*- coding: utf-8 -*-
"""
Сборщик мешей.

Работает в две фазы:

1️⃣  Во время разбора копит «прогоны» (runs) – последовательности
    примитивов одного объекта/группы/материала (в зависимости от
    ``granularity``). Материалы хранятся по *имени*.

2️⃣  В ``finish()``, когда все ``mtllib`` уже обработаны, имена
    разрешаются по итоговой таблице материалов, и каждый прогон
    превращается в ``Mesh`` (с дедупликацией и перестановкой, если
    они включены).

Так ``usemtl`` может ссылаться на материал из библиотеки, подключённой
позже по файлу, без каких‑либо «заплаток» вперёд.
"""

from __future__ import annotations

from typing import Dict, List, Optional, Set, Tuple

import numpy as np

from wavefront3d.assets.material import MaterialTable
from wavefront3d.mesh.dedup import merge_corners
from wavefront3d.mesh.mesh import Mesh, NO_MATERIAL
from wavefront3d.mesh.reorder import reorder_by_material
from wavefront3d.parser.faces import CornerIndex, FaceRecord, LINE, POINT, expand_primitive
from wavefront3d.utils.config import LoadOptions
from wavefront3d.utils.logger import logger

# Какие директивы начинают новый меш при данной гранулярности.
SPLIT_ON = {
    "material": {"object", "group", "material"},
    "group": {"object", "group"},
    "object": {"object"},
    "single": set(),
}


class _Run:
    """Незакрытый набор примитивов будущего меша."""

    def __init__(self, name: str, object_name: Optional[str], material: Optional[str]):
        self.name = name
        self.object_name = object_name
        self.material = material
        self.groups: Dict[str, None] = {}
        self.corners: List[CornerIndex] = []
        self.arities: List[int] = []
        self.materials: List[Optional[str]] = []
        self.smoothing: List[int] = []

    def __bool__(self) -> bool:
        return bool(self.arities)


class VertexStores:
    """numpy‑копии хранилищ атрибутов на момент сборки."""

    def __init__(self, positions, texcoords, normals, colors, dtype):
        self.positions = np.asarray(positions, dtype=dtype).reshape((-1, 3))
        self.texcoords = np.asarray(texcoords, dtype=dtype).reshape((-1, 2))
        self.normals = np.asarray(normals, dtype=dtype).reshape((-1, 3))
        self.colors = None if colors is None else np.asarray(colors, dtype=dtype).reshape((-1, 3))


def _gather(store: np.ndarray, idx: np.ndarray, width: int) -> np.ndarray:
    """Выбрать строки по индексам; -1 (нет индекса) заполняется нулями."""
    present = idx >= 0
    if store.shape[0] == 0 or not present.any():
        return np.zeros((0, width), dtype=store.dtype)
    if present.all():
        return store[idx]
    out = np.zeros((idx.shape[0], width), dtype=store.dtype)
    out[present] = store[idx[present]]
    return out


class MeshAssembler:
    """Копит FaceRecord‑ы и выпускает готовые Mesh‑и."""

    def __init__(self, options: LoadOptions):
        self.options = options
        self._split_on = SPLIT_ON[options.granularity]
        self._runs: List[_Run] = []
        self._current: Optional[_Run] = None

    # -----------------------------------------------------------------
    # фаза 1 – накопление
    # -----------------------------------------------------------------
    def boundary(self, kind: str) -> None:
        """Директива ``o``/``g`` – закрыть прогон, если гранулярность велит."""
        if kind in self._split_on:
            self._close()

    def add(self, record: FaceRecord, name: str, object_name: Optional[str]) -> None:
        opts = self.options
        if record.kind == POINT and opts.ignore_points:
            return
        if record.kind == LINE and opts.ignore_lines:
            return

        run = self._current
        if run is not None and run.material != record.material and "material" in self._split_on:
            self._close()
            run = None
        if run is None:
            run = self._current = _Run(name, object_name, record.material)

        for group in record.groups:
            run.groups.setdefault(group, None)
        for primitive in expand_primitive(record, opts.triangulate):
            run.corners.extend(primitive)
            run.arities.append(len(primitive))
            run.materials.append(record.material)
            run.smoothing.append(record.smoothing)

    def _close(self) -> None:
        if self._current:
            self._runs.append(self._current)
        self._current = None

    @property
    def pending_runs(self) -> int:
        return len(self._runs) + (1 if self._current else 0)

    # -----------------------------------------------------------------
    # фаза 2 – сборка
    # -----------------------------------------------------------------
    def finish(self,
               stores: VertexStores,
               materials: MaterialTable,
               fallback_name: str = "unnamed_object",
               fallback_object: Optional[str] = None) -> Tuple[List[Mesh], Set[str]]:
        """Собрать все меши; вернуть их и множество неразрешённых имён материалов."""
        self._close()
        runs = self._runs or [_Run(fallback_name, fallback_object, None)]
        self._runs = []

        unresolved: Set[str] = set()
        meshes = [self._build(run, stores, materials, unresolved) for run in runs]
        return meshes, unresolved

    def _build(self, run: _Run, stores: VertexStores,
               materials: MaterialTable, unresolved: Set[str]) -> Mesh:
        opts = self.options

        if opts.single_index:
            indices, emitted = merge_corners(run.corners)
        else:
            indices, emitted = np.arange(len(run.corners)), run.corners

        count = len(emitted)
        pos_idx = np.fromiter((c.position for c in emitted), dtype=np.int64, count=count)
        tex_idx = np.fromiter((-1 if c.texcoord is None else c.texcoord for c in emitted),
                              dtype=np.int64, count=count)
        nrm_idx = np.fromiter((-1 if c.normal is None else c.normal for c in emitted),
                              dtype=np.int64, count=count)

        colors = None
        if stores.colors is not None and count:
            colors = stores.colors[pos_idx]

        material_ids = np.fromiter(
            (self._resolve(name, materials, unresolved) for name in run.materials),
            dtype=np.int32,
            count=len(run.materials),
        )
        names = set(run.materials)
        material_name = run.materials[0] if len(names) == 1 else None

        mesh = Mesh(
            positions=stores.positions[pos_idx] if count else None,
            normals=_gather(stores.normals, nrm_idx, 3),
            texcoords=_gather(stores.texcoords, tex_idx, 2),
            vertex_colors=colors,
            indices=indices,
            face_arities=None if opts.triangulate else run.arities,
            material_ids=material_ids,
            smoothing_groups=run.smoothing,
            position_indices=None if opts.single_index else pos_idx,
            texcoord_indices=None if opts.single_index else tex_idx,
            normal_indices=None if opts.single_index else nrm_idx,
            name=run.name,
            object_name=run.object_name,
            groups=tuple(run.groups),
            material_name=material_name,
            triangulated=opts.triangulate,
            dtype=opts.float_dtype,
        )

        if opts.reorder_by_material:
            reorder_by_material(mesh)

        logger.debug(f"[Assembler] Mesh '{mesh.name}': {mesh.num_vertices} vertices, "
                     f"{mesh.num_primitives} primitives")
        return mesh

    @staticmethod
    def _resolve(name: Optional[str], materials: MaterialTable, unresolved: Set[str]) -> int:
        if name is None:
            return NO_MATERIAL
        index = materials.index_of(name)
        if index is None:
            unresolved.add(name)
            return NO_MATERIAL
        return index
