# wavefront3d/mesh/dedup.py
"""
Слияние углов с одинаковыми тройками индексов (single_index).

Ключ – точная тройка (v, vt, vn) исходных индексов, а не значения
координат: две вершины сливаются, только если объявлены одними и теми
же индексами. Таблица живёт в пределах одного меша.
"""

from __future__ import annotations

from typing import Dict, Iterable, List, Tuple

from wavefront3d.parser.faces import CornerIndex


class VertexDeduplicator:
    """CornerIndex → индекс выпущенной вершины."""

    def __init__(self) -> None:
        self._index_of: Dict[CornerIndex, int] = {}
        self.unique: List[CornerIndex] = []

    def add(self, corner: CornerIndex) -> int:
        index = self._index_of.get(corner)
        if index is None:
            index = len(self.unique)
            self._index_of[corner] = index
            self.unique.append(corner)
        return index

    def __len__(self) -> int:
        return len(self.unique)

    def __contains__(self, corner: CornerIndex) -> bool:
        return corner in self._index_of


def merge_corners(corners: Iterable[CornerIndex]) -> Tuple[List[int], List[CornerIndex]]:
    """Общий индексный буфер и список уникальных углов в порядке появления."""
    dedup = VertexDeduplicator()
    indices = [dedup.add(c) for c in corners]
    return indices, dedup.unique
