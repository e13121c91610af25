# -*- coding: utf-8 -*-
import pytest

from wavefront3d.errors import InvalidFaceIndex, InvalidPolygon, MalformedNumber
from wavefront3d.parser.faces import (
    FACE,
    LINE,
    POINT,
    CornerIndex,
    FaceRecord,
    StoreSizes,
    expand_primitive,
    parse_corner,
    parse_corners,
    triangulate_fan,
)

SIZES = StoreSizes(positions=5, texcoords=3, normals=2)


def _record(kind, corners):
    return FaceRecord(kind, tuple(corners), 1, ("default",), 0, None)


def test_corner_forms():
    assert parse_corner("2", SIZES) == CornerIndex(1)
    assert parse_corner("2/3", SIZES) == CornerIndex(1, 2)
    assert parse_corner("2/3/1", SIZES) == CornerIndex(1, 2, 0)
    assert parse_corner("2//2", SIZES) == CornerIndex(1, None, 1)


def test_negative_index_counts_from_end():
    assert parse_corner("-1", SIZES) == parse_corner("5", SIZES)
    assert parse_corner("-5", SIZES).position == 0
    assert parse_corner("1/-1/-2", SIZES) == CornerIndex(0, 2, 0)


@pytest.mark.parametrize("token", ["0", "6", "-6", "1/4", "1//3", "1/2/3/4", "/1", ""])
def test_invalid_corner(token):
    with pytest.raises(InvalidFaceIndex):
        parse_corner(token, SIZES)


def test_non_integer_index():
    with pytest.raises(MalformedNumber):
        parse_corner("1.5", SIZES)
    with pytest.raises(MalformedNumber):
        parse_corner("1/x", SIZES)


def test_no_corners():
    with pytest.raises(InvalidPolygon):
        parse_corners([], SIZES)


def test_fan_triangulation_covers_all_corners():
    corners = [CornerIndex(i) for i in range(5)]
    tris = list(triangulate_fan(corners))
    assert len(tris) == 3
    assert all(t[0] == corners[0] for t in tris)
    assert tris == [
        (corners[0], corners[1], corners[2]),
        (corners[0], corners[2], corners[3]),
        (corners[0], corners[3], corners[4]),
    ]
    assert {c for t in tris for c in t} == set(corners)


def test_expand_degenerate_primitives():
    a, b = CornerIndex(0), CornerIndex(1)
    assert expand_primitive(_record(POINT, [a]), True) == [(a, a, a)]
    assert expand_primitive(_record(LINE, [a, b]), True) == [(a, b, b)]
    assert expand_primitive(_record(LINE, [a, b]), False) == [(a, b)]


def test_expand_polygon():
    quad = [CornerIndex(i) for i in range(4)]
    assert len(expand_primitive(_record(FACE, quad), True)) == 2
    assert expand_primitive(_record(FACE, quad), False) == [tuple(quad)]
