# -*- coding: utf-8 -*-
"""
conftest.py – общие фикстуры: небольшие OBJ/MTL‑тексты, файлы на
диске (tmp_path) и резолвер библиотек материалов из словаря.
"""

from pathlib import Path
from typing import Callable, Dict

import pytest

DATA_DIR = Path(__file__).parent / "data"


TRIANGLE_OBJ = """\
v 0 0 0
v 1 0 0
v 0 1 0
f 1 2 3
"""

# o/g/usemtl вперемешку – для проверки гранулярности
MIXED_OBJ = """\
v 0 0 0
v 1 0 0
v 0 1 0
o first
g g1
usemtl m1
f 1 2 3
usemtl m2
f 1 2 3
g g2
f 1 2 3
o second
f 1 2 3
"""

BASIC_MTL = """\
newmtl red
Kd 1 0 0

newmtl green
Kd 0 1 0
"""


# ----------------------------------------------------------------------
@pytest.fixture
def data_dir() -> Path:
    return DATA_DIR


@pytest.fixture
def two_quads_obj() -> str:
    return (DATA_DIR / "two_quads.obj").read_text(encoding="utf-8")


@pytest.fixture
def two_quads_mtl() -> str:
    return (DATA_DIR / "two_quads.mtl").read_text(encoding="utf-8")


@pytest.fixture
def dict_resolver() -> Callable[[Dict[str, str]], Callable[[str], str]]:
    """Фабрика резолвера: имя библиотеки → текст, иначе KeyError."""
    def make(libraries: Dict[str, str]) -> Callable[[str], str]:
        def resolve(name: str) -> str:
            return libraries[name]
        return resolve
    return make


@pytest.fixture
def write_files(tmp_path):
    """Записать {имя: текст} в tmp_path и вернуть путь к каталогу."""
    def write(files: Dict[str, str]) -> Path:
        for name, text in files.items():
            (tmp_path / name).write_text(text, encoding="utf-8")
        return tmp_path
    return write


@pytest.fixture
def triangle_obj() -> str:
    return TRIANGLE_OBJ


@pytest.fixture
def mixed_obj() -> str:
    return MIXED_OBJ


@pytest.fixture
def basic_mtl() -> str:
    return BASIC_MTL
