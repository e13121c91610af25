# -*- coding: utf-8 -*-
from wavefront3d.__main__ import main


def test_summary(data_dir, capsys):
    assert main([str(data_dir / "two_quads.obj"), "--triangulate", "--single-index"]) == 0
    out = capsys.readouterr().out
    assert "# of meshes: 2" in out
    assert "# of materials: 2" in out
    assert "mesh[0].indices: 6" in out
    assert "material[1].name = 'blue'" in out
    assert "material.diffuse_texture = blue texture.png" in out
    assert "material.Pr = 0.25" in out


def test_granularity_flag(data_dir, capsys):
    assert main([str(data_dir / "two_quads.obj"), "--granularity", "object"]) == 0
    assert "# of meshes: 1" in capsys.readouterr().out


def test_missing_file(tmp_path):
    assert main([str(tmp_path / "absent.obj")]) == 2


def test_parse_error_exit_code(tmp_path):
    path = tmp_path / "bad.obj"
    path.write_text("v 0 0 0\nf 0 1 1\n", encoding="utf-8")
    assert main([str(path)]) == 1
