# -*- coding: utf-8 -*-
import json

import pytest

from wavefront3d import (
    GPU_LOAD_OPTIONS,
    OFFLINE_RENDERING_LOAD_OPTIONS,
    InvalidLoadOptions,
    LoadOptions,
    load_from_buffers,
)


def test_defaults():
    options = LoadOptions()
    assert not options.triangulate
    assert not options.single_index
    assert not options.reorder_by_material
    assert options.granularity == "material"
    assert options.float_dtype.name == "float32"


def test_presets():
    assert GPU_LOAD_OPTIONS.triangulate and GPU_LOAD_OPTIONS.single_index
    assert GPU_LOAD_OPTIONS.ignore_lines and GPU_LOAD_OPTIONS.ignore_points
    assert OFFLINE_RENDERING_LOAD_OPTIONS.reorder_by_material
    assert not OFFLINE_RENDERING_LOAD_OPTIONS.triangulate


@pytest.mark.parametrize("kwargs", [{"granularity": "face"}, {"dtype": "float16"}])
def test_invalid_options(kwargs, triangle_obj):
    with pytest.raises(InvalidLoadOptions):
        LoadOptions(**kwargs).validate()
    # также ValueError – для кода, не знающего о загрузчике
    with pytest.raises(ValueError):
        load_from_buffers(triangle_obj, options=LoadOptions(**kwargs))


def test_with_changes_validates():
    assert GPU_LOAD_OPTIONS.with_changes(granularity="single").granularity == "single"
    with pytest.raises(InvalidLoadOptions):
        GPU_LOAD_OPTIONS.with_changes(granularity="nope")


def test_from_dict_ignores_unknown_keys():
    options = LoadOptions.from_dict({"triangulate": True, "colour": "blue"})
    assert options.triangulate
    assert options == LoadOptions(triangulate=True)


def test_json_save_and_load(tmp_path):
    path = tmp_path / "options.json"
    GPU_LOAD_OPTIONS.save(path)
    assert json.loads(path.read_text(encoding="utf-8"))["single_index"] is True
    assert LoadOptions.from_json(path) == GPU_LOAD_OPTIONS


def test_json_fallbacks(tmp_path):
    assert LoadOptions.from_json(tmp_path / "absent.json") == LoadOptions()
    broken = tmp_path / "broken.json"
    broken.write_text("{ not json", encoding="utf-8")
    assert LoadOptions.from_json(broken) == LoadOptions()
    listing = tmp_path / "list.json"
    listing.write_text("[1, 2]", encoding="utf-8")
    assert LoadOptions.from_json(listing) == LoadOptions()
