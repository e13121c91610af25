# wavefront3d/assets/material.py
# -*- coding: utf-8 -*-
"""
Материал из MTL‑библиотеки и таблица материалов.

Материал хранит стандартные параметры (Ka, Kd, Ks, Ns, d, Ni, illum) и
имена файлов текстур – сами текстуры здесь не загружаются. Всё, что
парсер не узнал, складывается в ``unknown_params`` как есть.

Идентичность материала – порядок объявления; поиск по имени
регистрозависимый. При слиянии нескольких библиотек более поздний
материал с тем же именем перекрывает ранний в поиске по имени.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Iterator, List, Optional, Tuple, Union

Color = Tuple[float, float, float]


@dataclass
class Material:
    """Параметры одного ``newmtl``."""
    name: str
    ambient: Color = (0.0, 0.0, 0.0)
    diffuse: Color = (0.0, 0.0, 0.0)
    specular: Color = (0.0, 0.0, 0.0)
    shininess: float = 0.0
    # alpha‑составляющая; «dissolve» – так её называет формат MTL
    dissolve: float = 1.0
    # показатель преломления, 1.0 – свет не преломляется
    optical_density: float = 1.0
    illumination_model: Optional[int] = None

    ambient_texture: Optional[str] = None
    diffuse_texture: Optional[str] = None
    specular_texture: Optional[str] = None
    normal_texture: Optional[str] = None
    shininess_texture: Optional[str] = None
    dissolve_texture: Optional[str] = None

    unknown_params: Dict[str, str] = field(default_factory=dict)

    @property
    def textures(self) -> Dict[str, str]:
        """Только заданные карты: слот → имя файла."""
        slots = {
            "ambient": self.ambient_texture,
            "diffuse": self.diffuse_texture,
            "specular": self.specular_texture,
            "normal": self.normal_texture,
            "shininess": self.shininess_texture,
            "dissolve": self.dissolve_texture,
        }
        return {slot: path for slot, path in slots.items() if path}


class MaterialTable:
    """Упорядоченный список материалов + индекс по имени."""

    def __init__(self, materials: Optional[List[Material]] = None):
        self._materials: List[Material] = []
        self._index: Dict[str, int] = {}
        for m in materials or ():
            self.add(m)

    # -----------------------------------------------------------------
    def add(self, material: Material) -> int:
        index = len(self._materials)
        self._materials.append(material)
        self._index[material.name] = index
        return index

    def merge(self, other: "MaterialTable") -> int:
        """Дописать чужую таблицу в конец; вернуть смещение её индексов."""
        offset = len(self._materials)
        for m in other:
            self.add(m)
        return offset

    # -----------------------------------------------------------------
    def index_of(self, name: str) -> Optional[int]:
        return self._index.get(name)

    def get(self, name: str) -> Optional[Material]:
        index = self._index.get(name)
        return None if index is None else self._materials[index]

    def names(self) -> List[str]:
        return [m.name for m in self._materials]

    def __contains__(self, name: object) -> bool:
        return name in self._index

    def __getitem__(self, key: Union[int, str]) -> Material:
        if isinstance(key, str):
            index = self._index.get(key)
            if index is None:
                raise KeyError(key)
            return self._materials[index]
        return self._materials[key]

    def __iter__(self) -> Iterator[Material]:
        return iter(self._materials)

    def __len__(self) -> int:
        return len(self._materials)

    def __repr__(self) -> str:
        return f"MaterialTable({self.names()!r})"
