# -*- coding: utf-8 -*-
import pytest

from wavefront3d import (
    EmptyOrTruncatedFile,
    MalformedNumber,
    Material,
    MaterialTable,
    load_materials,
    load_materials_from_buffer,
)


def test_standard_parameters(two_quads_mtl):
    table = load_materials_from_buffer(two_quads_mtl)
    assert table.names() == ["red", "blue"]

    red = table["red"]
    assert red.ambient == (0.1, 0.1, 0.1)
    assert red.diffuse == (1.0, 0.0, 0.0)
    assert red.specular == (0.5, 0.5, 0.5)
    assert red.shininess == 10.0
    assert red.illumination_model == 2
    assert red.dissolve == 1.0
    assert red.optical_density == 1.0
    assert red.textures == {}

    blue = table[1]
    assert blue.dissolve == 0.5
    # имя текстуры – весь остаток строки, пробелы сохраняются
    assert blue.diffuse_texture == "blue texture.png"
    assert blue.unknown_params == {"Pr": "0.25"}


def test_texture_aliases_and_transparency():
    text = ("newmtl m\nmap_Bump n.png\nmap_NS s.png\nmap_d a.png\nmap_Ka ka.png\n"
            "map_Ks ks.png\nTr 0.25\nNi 1.5\n"
            "newmtl k\nbump -bm 0.5 b.png\nd -halo 0.3\n")
    table = load_materials_from_buffer(text)
    m, k = table["m"], table["k"]
    assert m.normal_texture == "n.png"
    assert m.shininess_texture == "s.png"
    assert m.dissolve_texture == "a.png"
    assert m.textures == {"ambient": "ka.png", "specular": "ks.png", "normal": "n.png",
                          "shininess": "s.png", "dissolve": "a.png"}
    assert m.dissolve == pytest.approx(0.75)
    assert m.optical_density == 1.5
    assert k.normal_texture == "-bm 0.5 b.png"
    assert k.dissolve == pytest.approx(0.3)


def test_spectral_colour_kept_verbatim():
    table = load_materials_from_buffer("newmtl m\nKd spectral ident.rfl 1.0\n")
    assert table["m"].diffuse == (0.0, 0.0, 0.0)
    assert table["m"].unknown_params == {"Kd": "spectral ident.rfl 1.0"}


def test_directives_before_newmtl_are_ignored():
    table = load_materials_from_buffer("Kd 1 1 1\nnewmtl a\n")
    assert len(table) == 1
    assert table["a"].diffuse == (0.0, 0.0, 0.0)


@pytest.mark.parametrize("text, line", [
    ("newmtl a\nNs shiny\n", 2),
    ("newmtl a\nKd 1 0\n", 2),
    ("newmtl a\n\nKa 1 x 0\n", 3),
    ("newmtl a\nillum two\n", 2),
    ("newmtl a\nd\n", 2),
    ("newmtl a\nNs 1_0\n", 2),
])
def test_malformed_numbers(text, line):
    with pytest.raises(MalformedNumber) as info:
        load_materials_from_buffer(text, source_name="bad.mtl")
    assert info.value.line == line
    assert info.value.source == "bad.mtl"


def test_empty_names_are_skipped():
    table = load_materials_from_buffer("newmtl m\nKd 1 0 0\nmap_Kd\nbump   \n")
    m = table["m"]
    assert m.diffuse == (1.0, 0.0, 0.0)
    assert m.diffuse_texture is None
    assert m.normal_texture is None
    assert m.unknown_params == {}

    # директивы безымянного материала не прилипают к соседям
    table = load_materials_from_buffer("newmtl\nKd 1 1 1\nnewmtl b\n")
    assert table.names() == ["b"]
    assert table["b"].diffuse == (0.0, 0.0, 0.0)


def test_empty_library():
    with pytest.raises(EmptyOrTruncatedFile):
        load_materials_from_buffer("# nothing here\n")


def test_table_merge_later_name_wins():
    first = MaterialTable([Material("shared", diffuse=(1.0, 0.0, 0.0)), Material("only_a")])
    second = MaterialTable([Material("shared", diffuse=(0.0, 1.0, 0.0))])
    offset = first.merge(second)
    assert offset == 2
    assert len(first) == 3
    assert first.index_of("shared") == 2
    assert first.get("shared").diffuse == (0.0, 1.0, 0.0)
    assert first[0].diffuse == (1.0, 0.0, 0.0)
    assert "only_a" in first
    assert first.get("missing") is None
    with pytest.raises(KeyError):
        first["missing"]


def test_load_materials_from_disk(data_dir):
    table = load_materials(data_dir / "two_quads.mtl")
    assert table.names() == ["red", "blue"]
    with pytest.raises(FileNotFoundError):
        load_materials(data_dir / "nope.mtl")
