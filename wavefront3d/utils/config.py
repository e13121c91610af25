# wavefront3d/utils/config.py
"""
Опции загрузки OBJ и их хранение в JSON.

Если файл с опциями не найден – используются значения по‑умолчанию;
битый JSON логируется и тоже заменяется умолчаниями.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, asdict, fields, replace
from pathlib import Path

import numpy as np

from wavefront3d.errors import InvalidLoadOptions
from wavefront3d.utils.logger import logger

GRANULARITIES = ("material", "group", "object", "single")
FLOAT_DTYPES = ("float32", "float64")

DEFAULT_OPTIONS = {
    "triangulate": False,
    "single_index": False,
    "reorder_by_material": False,
    "ignore_lines": False,
    "ignore_points": False,
    "granularity": "material",
    "dtype": "float32",
}


@dataclass(frozen=True)
class LoadOptions:
    """
    Флаги обработки меша во время загрузки.

    * ``triangulate`` – веерная триангуляция граней с числом углов > 3;
      точки и линии превращаются в вырожденные треугольники.
    * ``single_index`` – один общий индексный буфер: одинаковые тройки
      (v, vt, vn) сливаются в одну вершину.
    * ``reorder_by_material`` – стабильная перестановка примитивов так,
      чтобы примитивы одного материала шли подряд.
    * ``ignore_lines`` / ``ignore_points`` – отбрасывать ``l`` / ``p``.
    * ``granularity`` – когда начинать новый Mesh:
      material | group | object | single.
    * ``dtype`` – тип float‑буферов (float32 | float64).
    """
    triangulate: bool = False
    single_index: bool = False
    reorder_by_material: bool = False
    ignore_lines: bool = False
    ignore_points: bool = False
    granularity: str = "material"
    dtype: str = "float32"

    def validate(self) -> "LoadOptions":
        if self.granularity not in GRANULARITIES:
            raise InvalidLoadOptions(
                f"unknown granularity {self.granularity!r}, expected one of {GRANULARITIES}"
            )
        if self.dtype not in FLOAT_DTYPES:
            raise InvalidLoadOptions(
                f"unsupported dtype {self.dtype!r}, expected one of {FLOAT_DTYPES}"
            )
        return self

    @property
    def float_dtype(self) -> np.dtype:
        return np.dtype(self.dtype)

    def with_changes(self, **kwargs) -> "LoadOptions":
        return replace(self, **kwargs).validate()

    # -----------------------------------------------------------------
    # (де)сериализация
    # -----------------------------------------------------------------
    def to_dict(self) -> dict:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: dict) -> "LoadOptions":
        known = {f.name for f in fields(cls)}
        unknown = set(data) - known
        if unknown:
            logger.warning(f"[Config] Ignoring unknown load options: {sorted(unknown)}")
        merged = dict(DEFAULT_OPTIONS)
        merged.update({k: v for k, v in data.items() if k in known})
        return cls(**merged).validate()

    @classmethod
    def from_json(cls, path) -> "LoadOptions":
        path = Path(path)
        if not path.is_file():
            logger.info(f"[Config] No options file at {path} – using defaults.")
            return cls()
        try:
            with path.open("r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as exc:
            logger.error(f"[Config] Failed to read options {path}: {exc}")
            return cls()
        if not isinstance(data, dict):
            logger.error(f"[Config] Options file {path} must hold a JSON object.")
            return cls()
        logger.info(f"[Config] Loaded load options from {path}.")
        return cls.from_dict(data)

    def save(self, path) -> None:
        path = Path(path)
        with path.open("w", encoding="utf-8") as f:
            json.dump(self.to_dict(), f, indent=4)
        logger.info(f"[Config] Load options saved to {path}.")


# Типичные наборы – для realtime (GPU) и для оффлайн‑рендера.
GPU_LOAD_OPTIONS = LoadOptions(
    triangulate=True,
    single_index=True,
    ignore_lines=True,
    ignore_points=True,
)

OFFLINE_RENDERING_LOAD_OPTIONS = LoadOptions(
    triangulate=False,
    single_index=False,
    reorder_by_material=True,
    ignore_lines=True,
    ignore_points=True,
)
