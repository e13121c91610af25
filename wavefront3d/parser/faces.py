# wavefront3d/parser/faces.py
# -*- coding: utf-8 -*-
"""
Разбор углов граней (``v``, ``v/t``, ``v/t/n``, ``v//n``) и веерная
триангуляция.

Положительный индекс – 1‑based абсолютный, отрицательный – отсчёт
назад от текущего конца хранилища (``-1`` – последний добавленный
элемент). Ноль и ссылки вперёд – фатальная ошибка.
"""

from __future__ import annotations

from typing import Iterator, List, NamedTuple, Optional, Sequence, Tuple

from wavefront3d.errors import InvalidFaceIndex, InvalidPolygon, MalformedNumber
from wavefront3d.parser.tokenizer import parse_number

# Виды примитивов
FACE = "face"
LINE = "line"
POINT = "point"


class CornerIndex(NamedTuple):
    """Разрешённые 0‑based индексы одного угла. Ключ дедупликации."""
    position: int
    texcoord: Optional[int] = None
    normal: Optional[int] = None


class StoreSizes(NamedTuple):
    positions: int
    texcoords: int
    normals: int


class FaceRecord(NamedTuple):
    """Одна грань/линия/точка вместе с состоянием парсера на момент директивы."""
    kind: str
    corners: Tuple[CornerIndex, ...]
    lineno: int
    groups: Tuple[str, ...]
    smoothing: int
    material: Optional[str]


def _resolve(raw: str, size: int, what: str) -> int:
    try:
        value = parse_number(raw, int)
    except ValueError:
        raise MalformedNumber(f"{what} index {raw!r} is not an integer") from None

    if value > 0:
        index = value - 1
    elif value < 0:
        index = size + value
    else:
        raise InvalidFaceIndex(f"{what} index 0 is invalid (indices are 1-based)")

    if index < 0 or index >= size:
        raise InvalidFaceIndex(
            f"{what} index {value} out of range ({size} {what}s declared so far)"
        )
    return index


def parse_corner(token: str, sizes: StoreSizes) -> CornerIndex:
    """Разобрать один угол грани относительно текущих размеров хранилищ."""
    parts = token.split("/")
    if len(parts) > 3:
        raise InvalidFaceIndex(f"corner {token!r} has more than three components")
    if not parts[0]:
        raise InvalidFaceIndex(f"corner {token!r} has no position index")

    position = _resolve(parts[0], sizes.positions, "position")
    texcoord = None
    normal = None
    if len(parts) > 1 and parts[1]:
        texcoord = _resolve(parts[1], sizes.texcoords, "texcoord")
    if len(parts) > 2 and parts[2]:
        normal = _resolve(parts[2], sizes.normals, "normal")
    return CornerIndex(position, texcoord, normal)


def parse_corners(tokens: Sequence[str], sizes: StoreSizes) -> Tuple[CornerIndex, ...]:
    if not tokens:
        raise InvalidPolygon("directive has no vertex references")
    return tuple(parse_corner(t, sizes) for t in tokens)


def triangulate_fan(corners: Sequence[CornerIndex]) -> Iterator[Tuple[CornerIndex, CornerIndex, CornerIndex]]:
    """
    Веер от первого угла: (c0, c1, c2), (c0, c2, c3), ...

    Точен для выпуклых плоских полигонов; для невыпуклых даёт визуально
    неверные, но всегда корректные по индексам треугольники.
    """
    first = corners[0]
    for i in range(1, len(corners) - 1):
        yield first, corners[i], corners[i + 1]


def expand_primitive(record: FaceRecord, triangulate: bool) -> List[Tuple[CornerIndex, ...]]:
    """
    Превратить запись в список примитивов для сборщика.

    С триангуляцией точка становится (a, a, a), линия – (a, b, b),
    полигон – веером треугольников. Без неё примитив остаётся как есть.
    """
    corners = record.corners
    if not triangulate:
        return [corners]
    if len(corners) == 1:
        a = corners[0]
        return [(a, a, a)]
    if len(corners) == 2:
        a, b = corners
        return [(a, b, b)]
    if len(corners) == 3:
        return [corners]
    return list(triangulate_fan(corners))
