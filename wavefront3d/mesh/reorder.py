# wavefront3d/mesh/reorder.py
"""
Перестановка примитивов по материалу.

Стабильная сортировка по id материала: примитивы одного материала
идут подряд, их взаимный порядок сохраняется. Вершинные буферы не
трогаются – меняются только индексы и попримитивные данные.
"""

from __future__ import annotations

import numpy as np

from wavefront3d.mesh.mesh import Mesh


def material_permutation(material_ids: np.ndarray) -> np.ndarray:
    """Стабильная перестановка примитивов (NO_MATERIAL первым)."""
    return np.argsort(material_ids, kind="stable")


def _corner_permutation(mesh: Mesh, order: np.ndarray) -> np.ndarray:
    if mesh.triangulated:
        return (order[:, None] * 3 + np.arange(3)).reshape(-1)
    offsets = mesh.primitive_offsets()
    arities = mesh.face_arities.astype(np.int64)
    if order.size == 0:
        return np.zeros(0, dtype=np.int64)
    return np.concatenate([
        np.arange(offsets[p], offsets[p] + arities[p], dtype=np.int64) for p in order
    ])


def reorder_by_material(mesh: Mesh) -> Mesh:
    """Переставить примитивы меша на месте; возвращает тот же объект."""
    if mesh.num_primitives < 2:
        return mesh

    order = material_permutation(mesh.material_ids)
    if np.array_equal(order, np.arange(order.size)):
        return mesh

    corners = _corner_permutation(mesh, order)
    mesh.indices = mesh.indices[corners]
    if mesh.position_indices.size:
        mesh.position_indices = mesh.position_indices[corners]
    if mesh.texcoord_indices.size:
        mesh.texcoord_indices = mesh.texcoord_indices[corners]
    if mesh.normal_indices.size:
        mesh.normal_indices = mesh.normal_indices[corners]

    mesh.material_ids = mesh.material_ids[order]
    mesh.smoothing_groups = mesh.smoothing_groups[order]
    if mesh.face_arities.size:
        mesh.face_arities = mesh.face_arities[order]
    return mesh
