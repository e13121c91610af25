# wavefront3d/__main__.py
# -*- coding: utf-8 -*-
"""
``python -m wavefront3d model.obj`` – краткая сводка по загруженному файлу.
"""

import argparse
import logging
import sys

from wavefront3d.errors import LoadError
from wavefront3d.loader import load
from wavefront3d.utils.config import GRANULARITIES, LoadOptions
from wavefront3d.utils.logger import logger


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="wavefront3d",
        description="Load a Wavefront OBJ file and print a summary of its meshes and materials.",
    )
    parser.add_argument("path", help="OBJ file to load")
    parser.add_argument("--triangulate", action="store_true", help="fan-triangulate polygons")
    parser.add_argument("--single-index", action="store_true", help="merge identical corners into one vertex")
    parser.add_argument("--reorder", action="store_true", help="sort primitives by material id")
    parser.add_argument("--granularity", choices=GRANULARITIES, default="material",
                        help="what starts a new mesh (default: material)")
    parser.add_argument("--ignore-lines", action="store_true")
    parser.add_argument("--ignore-points", action="store_true")
    parser.add_argument("-v", "--verbose", action="store_true", help="debug logging")
    return parser


def print_summary(result, out=sys.stdout) -> None:
    print(f"# of meshes: {len(result.meshes)}", file=out)
    print(f"# of materials: {len(result.materials)}", file=out)

    for i, mesh in enumerate(result.meshes):
        print(f"mesh[{i}].name = {mesh.name}", file=out)
        print(f"mesh[{i}].groups = {', '.join(mesh.groups)}", file=out)
        print(f"mesh[{i}].vertices: {mesh.num_vertices}", file=out)
        print(f"mesh[{i}].primitives: {mesh.num_primitives}", file=out)
        print(f"mesh[{i}].indices: {mesh.indices.size}", file=out)
        print(f"mesh[{i}].normals: {mesh.normals.shape[0]}", file=out)
        print(f"mesh[{i}].texcoords: {mesh.texcoords.shape[0]}", file=out)
        print(f"mesh[{i}].vertex_colors: {mesh.vertex_colors.shape[0]}", file=out)
        print(f"mesh[{i}].material = {mesh.material_name}", file=out)
        centre, radius = mesh.bounding_sphere
        print(f"mesh[{i}].bounds: centre={centre.tolist()} radius={radius:.4f}", file=out)

    for i, material in enumerate(result.materials):
        print(f"material[{i}].name = '{material.name}'", file=out)
        print(f"    material.Ka = {material.ambient}", file=out)
        print(f"    material.Kd = {material.diffuse}", file=out)
        print(f"    material.Ks = {material.specular}", file=out)
        print(f"    material.Ns = {material.shininess}", file=out)
        print(f"    material.d = {material.dissolve}", file=out)
        print(f"    material.Ni = {material.optical_density}", file=out)
        if material.illumination_model is not None:
            print(f"    material.illum = {material.illumination_model}", file=out)
        for slot, path in material.textures.items():
            print(f"    material.{slot}_texture = {path}", file=out)
        for key, value in material.unknown_params.items():
            print(f"    material.{key} = {value}", file=out)

    for warning in result.warnings:
        print(f"warning: {warning}", file=out)
    for name in result.unresolved_materials:
        print(f"warning: unresolved material '{name}'", file=out)


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)
    if args.verbose:
        logger.setLevel(logging.DEBUG)

    options = LoadOptions(
        triangulate=args.triangulate,
        single_index=args.single_index,
        reorder_by_material=args.reorder,
        ignore_lines=args.ignore_lines,
        ignore_points=args.ignore_points,
        granularity=args.granularity,
    )
    try:
        result = load(args.path, options)
    except FileNotFoundError as exc:
        logger.error(f"[CLI] {exc}")
        return 2
    except LoadError as exc:
        logger.error(f"[CLI] {exc}")
        return 1

    print_summary(result)
    return 0


if __name__ == "__main__":
    sys.exit(main())
