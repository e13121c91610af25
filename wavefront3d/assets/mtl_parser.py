# wavefront3d/assets/mtl_parser.py
# -*- coding: utf-8 -*-
"""
Парсер библиотек материалов (MTL).

Каждый ``newmtl`` открывает новый материал, последующие директивы
заполняют его до следующего ``newmtl`` или конца потока. Неизвестные
директивы не считаются ошибкой – они сохраняются в
``Material.unknown_params``. Фатальны только битые числа.
"""

from __future__ import annotations

from typing import Callable, Dict, Iterable, List, Optional, Union

from wavefront3d.assets.material import Material, MaterialTable
from wavefront3d.errors import EmptyOrTruncatedFile, MalformedNumber
from wavefront3d.parser.tokenizer import LogicalLine, iter_logical_lines, parse_number
from wavefront3d.utils.logger import logger

# ключ директивы → атрибут Material с именем текстуры
TEXTURE_KEYS = {
    "map_Ka": "ambient_texture",
    "map_Kd": "diffuse_texture",
    "map_Ks": "specular_texture",
    "map_Bump": "normal_texture",
    "map_bump": "normal_texture",
    "bump": "normal_texture",
    "map_Ns": "shininess_texture",
    "map_ns": "shininess_texture",
    "map_NS": "shininess_texture",
    "map_d": "dissolve_texture",
}

COLOR_KEYS = {
    "Ka": "ambient",
    "Kd": "diffuse",
    "Ks": "specular",
}


class MaterialParser:
    """Интерпретатор директив MTL поверх LogicalLine."""

    def __init__(self, source: str = "<buffer>"):
        self.source = source
        self.table = MaterialTable()
        self.directives = 0
        self._current: Optional[Material] = None
        self._handlers: Dict[str, Callable[[LogicalLine], None]] = {
            "newmtl": self._newmtl,
            "Ns": self._scalar("shininess"),
            "Ni": self._scalar("optical_density"),
            "d": self._dissolve,
            "Tr": self._transparency,
            "illum": self._illum,
        }

    # -----------------------------------------------------------------
    def handle(self, line: LogicalLine) -> None:
        self.directives += 1
        keyword = line.keyword
        handler = self._handlers.get(keyword)
        if handler is not None and keyword == "newmtl":
            handler(line)
            return

        if self._current is None:
            logger.debug(f"[MTL] {self.source}:{line.lineno}: '{keyword}' outside of newmtl – skipped")
            return

        if handler is not None:
            handler(line)
        elif keyword in COLOR_KEYS:
            self._color(line, COLOR_KEYS[keyword])
        elif keyword in TEXTURE_KEYS:
            self._texture(line, TEXTURE_KEYS[keyword])
        else:
            self._current.unknown_params[keyword] = line.args

    def finish(self) -> MaterialTable:
        if self.directives == 0:
            raise EmptyOrTruncatedFile("material library holds no directives", source=self.source)
        self._flush()
        return self.table

    # -----------------------------------------------------------------
    # директивы
    # -----------------------------------------------------------------
    def _flush(self) -> None:
        if self._current is not None:
            self.table.add(self._current)
            self._current = None

    def _newmtl(self, line: LogicalLine) -> None:
        self._flush()
        if not line.args:
            # директивы безымянного материала пропускаются до следующего newmtl
            logger.debug(f"[MTL] {self.source}:{line.lineno}: newmtl without a name – skipped")
            return
        self._current = Material(name=line.args)

    def _color(self, line: LogicalLine, attr: str) -> None:
        words = line.words()
        # спектральные и CIEXYZ‑цвета не поддерживаем – сохраняем как есть
        if words and words[0] in ("spectral", "xyz"):
            self._current.unknown_params[line.keyword] = line.args
            return
        values = self._floats(line, words)
        if len(values) == 1:
            values = values * 3
        elif len(values) < 3:
            raise self._error(MalformedNumber, "expected 1 or 3 colour components", line)
        setattr(self._current, attr, tuple(values[:3]))

    def _scalar(self, attr: str) -> Callable[[LogicalLine], None]:
        def handler(line: LogicalLine) -> None:
            values = self._floats(line, line.words()[:1])
            if not values:
                raise self._error(MalformedNumber, "expected a number", line)
            setattr(self._current, attr, values[0])
        return handler

    def _dissolve(self, line: LogicalLine) -> None:
        # "d -halo 0.5" – значение всегда последнее слово
        words = [w for w in line.words() if w != "-halo"]
        values = self._floats(line, words[:1])
        if not values:
            raise self._error(MalformedNumber, "expected a number", line)
        self._current.dissolve = values[0]

    def _transparency(self, line: LogicalLine) -> None:
        values = self._floats(line, line.words()[:1])
        if not values:
            raise self._error(MalformedNumber, "expected a number", line)
        self._current.dissolve = 1.0 - values[0]

    def _illum(self, line: LogicalLine) -> None:
        words = line.words()
        if not words:
            raise self._error(MalformedNumber, "expected an illumination model", line)
        try:
            self._current.illumination_model = parse_number(words[0], int)
        except ValueError:
            raise self._error(MalformedNumber, f"illumination model {words[0]!r} is not an integer", line) from None

    def _texture(self, line: LogicalLine, attr: str) -> None:
        if not line.args:
            logger.debug(f"[MTL] {self.source}:{line.lineno}: '{line.keyword}' without a file name – skipped")
            return
        setattr(self._current, attr, line.args)

    # -----------------------------------------------------------------
    def _floats(self, line: LogicalLine, words: List[str]) -> List[float]:
        try:
            return [parse_number(w) for w in words]
        except ValueError:
            raise self._error(MalformedNumber, "non-numeric value", line) from None

    def _error(self, cls, reason: str, line: LogicalLine):
        return cls(reason, source=self.source, line=line.lineno, keyword=line.keyword, args=line.args)


def parse_materials(source: Union[str, bytes, Iterable[Union[str, bytes]]],
                    source_name: str = "<buffer>") -> MaterialTable:
    """Разобрать MTL целиком и вернуть таблицу материалов."""
    parser = MaterialParser(source_name)
    for line in iter_logical_lines(source, source_name):
        parser.handle(line)
    table = parser.finish()
    logger.debug(f"[MTL] {source_name}: {len(table)} material(s)")
    return table
