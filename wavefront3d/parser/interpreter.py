# wavefront3d/parser/interpreter.py
# -*- coding: utf-8 -*-
"""
Интерпретатор директив OBJ.

Держит изменяемое состояние разбора (хранилища атрибутов, текущие
группы/объект/сглаживание/материал) и раздаёт директивы по ключевому
слову. Грани сразу превращаются в FaceRecord и уходят в сборщик.

Ссылки на библиотеки материалов (``mtllib``) только складываются в
очередь – их разрешает загрузчик (синхронно или через ``await``).
"""

from __future__ import annotations

from typing import Callable, Dict, List, Optional, Set, Tuple

from wavefront3d.assets.material import MaterialTable
from wavefront3d.errors import (
    EmptyOrTruncatedFile,
    InvalidPolygon,
    LoadError,
    MalformedNumber,
    MissingArgument,
)
from wavefront3d.mesh.assembler import MeshAssembler, VertexStores
from wavefront3d.mesh.mesh import Mesh
from wavefront3d.parser.faces import (
    FACE,
    LINE,
    POINT,
    FaceRecord,
    StoreSizes,
    parse_corners,
)
from wavefront3d.parser.tokenizer import LogicalLine, parse_number
from wavefront3d.utils.config import LoadOptions
from wavefront3d.utils.logger import logger

DEFAULT_GROUP = "default"
UNNAMED_OBJECT = "unnamed_object"
# цвет вершин, объявленных без цвета, если в файле цвета вообще есть
DEFAULT_VERTEX_COLOR = (1.0, 1.0, 1.0)


class ParseState:
    """Изменяемое состояние одного разбора."""

    def __init__(self) -> None:
        # плоские списки: [x, y, z, x, y, z, ...]
        self.positions: List[float] = []
        self.texcoords: List[float] = []
        self.normals: List[float] = []
        self.colors: Optional[List[float]] = None

        self.groups: Tuple[str, ...] = (DEFAULT_GROUP,)
        self.object_name: Optional[str] = None
        self.label = UNNAMED_OBJECT
        self.smoothing = 0
        self.material: Optional[str] = None

        self.material_libraries: List[str] = []
        self.pending_libraries: List[str] = []

    def sizes(self) -> StoreSizes:
        return StoreSizes(
            len(self.positions) // 3,
            len(self.texcoords) // 2,
            len(self.normals) // 3,
        )


def _floats(words: List[str]) -> List[float]:
    try:
        return [parse_number(w) for w in words]
    except ValueError:
        raise MalformedNumber("non-numeric value where a number was expected") from None


class DirectiveInterpreter:
    """Разбор логических строк OBJ в состояние + сборщик мешей."""

    def __init__(self, options: Optional[LoadOptions] = None, source: str = "<buffer>"):
        self.options = (options or LoadOptions()).validate()
        self.source = source
        self.state = ParseState()
        self.assembler = MeshAssembler(self.options)
        self.directives = 0
        self._skipped: Set[str] = set()
        self._handlers: Dict[str, Callable[[LogicalLine], None]] = {
            "v": self._vertex,
            "vt": self._texcoord,
            "vn": self._normal,
            "f": self._face,
            "l": self._line,
            "p": self._point,
            "g": self._group,
            "o": self._object,
            "s": self._smoothing,
            "usemtl": self._usemtl,
            "mtllib": self._mtllib,
        }

    # -----------------------------------------------------------------
    def handle(self, line: LogicalLine) -> None:
        self.directives += 1
        handler = self._handlers.get(line.keyword)
        if handler is None:
            if line.keyword not in self._skipped:
                self._skipped.add(line.keyword)
                logger.debug(f"[Loader] {self.source}:{line.lineno}: ignoring '{line.keyword}' directives")
            return
        try:
            handler(line)
        except LoadError as exc:
            if exc.line is not None:
                raise
            raise exc.at(self.source, line.lineno, line.keyword, line.args) from None

    def take_libraries(self) -> List[str]:
        """Забрать накопленные, ещё не загруженные ``mtllib``."""
        pending, self.state.pending_libraries = self.state.pending_libraries, []
        return pending

    def finish(self, materials: MaterialTable) -> Tuple[List[Mesh], Set[str]]:
        if self.directives == 0:
            raise EmptyOrTruncatedFile("no directives found", source=self.source)
        state = self.state
        stores = VertexStores(state.positions, state.texcoords, state.normals,
                              state.colors, self.options.float_dtype)
        return self.assembler.finish(stores, materials,
                                     fallback_name=self._mesh_name(),
                                     fallback_object=state.object_name)

    # -----------------------------------------------------------------
    # вершинные атрибуты
    # -----------------------------------------------------------------
    def _vertex(self, line: LogicalLine) -> None:
        words = line.words()
        if len(words) < 3:
            raise MalformedNumber("vertex needs three coordinates")
        state = self.state
        state.positions.extend(_floats(words[:3]))

        # "v x y z r g b" – цвет вершины; "v x y z w" – w игнорируем
        if len(words) >= 6:
            color = _floats(words[3:6])
            if state.colors is None:
                state.colors = list(DEFAULT_VERTEX_COLOR) * (len(state.positions) // 3 - 1)
            state.colors.extend(color)
        else:
            if len(words) > 3:
                _floats(words[3:])
            if state.colors is not None:
                state.colors.extend(DEFAULT_VERTEX_COLOR)

    def _texcoord(self, line: LogicalLine) -> None:
        words = line.words()
        if not words:
            raise MalformedNumber("texture coordinate needs at least one value")
        values = _floats(words[:3])
        if len(values) == 1:
            values.append(0.0)
        self.state.texcoords.extend(values[:2])

    def _normal(self, line: LogicalLine) -> None:
        words = line.words()
        if len(words) < 3:
            raise MalformedNumber("normal needs three components")
        self.state.normals.extend(_floats(words[:3]))

    # -----------------------------------------------------------------
    # примитивы
    # -----------------------------------------------------------------
    def _record(self, kind: str, corners, line: LogicalLine) -> None:
        state = self.state
        record = FaceRecord(kind, corners, line.lineno, state.groups, state.smoothing, state.material)
        self.assembler.add(record, self._mesh_name(), state.object_name)

    def _face(self, line: LogicalLine) -> None:
        corners = parse_corners(line.words(), self.state.sizes())
        # "f 1" / "f 1 2" – точка / линия, как у большинства экспортёров
        kind = {1: POINT, 2: LINE}.get(len(corners), FACE)
        self._record(kind, corners, line)

    def _line(self, line: LogicalLine) -> None:
        corners = parse_corners(line.words(), self.state.sizes())
        if len(corners) < 2:
            raise InvalidPolygon("line needs at least two vertices")
        for a, b in zip(corners, corners[1:]):
            self._record(LINE, (a, b), line)

    def _point(self, line: LogicalLine) -> None:
        for corner in parse_corners(line.words(), self.state.sizes()):
            self._record(POINT, (corner,), line)

    # -----------------------------------------------------------------
    # группировка и материалы
    # -----------------------------------------------------------------
    def _mesh_name(self) -> str:
        state = self.state
        if self.options.granularity in ("object", "single"):
            return state.object_name or UNNAMED_OBJECT
        return state.label

    def _group(self, line: LogicalLine) -> None:
        state = self.state
        self.assembler.boundary("group")
        state.groups = tuple(line.words()) or (DEFAULT_GROUP,)
        state.label = line.args or UNNAMED_OBJECT

    def _object(self, line: LogicalLine) -> None:
        state = self.state
        self.assembler.boundary("object")
        state.object_name = line.args or None
        state.label = line.args or UNNAMED_OBJECT

    def _smoothing(self, line: LogicalLine) -> None:
        value = line.args.split()[0] if line.args else "off"
        if value == "off":
            self.state.smoothing = 0
            return
        try:
            self.state.smoothing = max(parse_number(value, int), 0)
        except ValueError:
            raise MalformedNumber(f"smoothing group {value!r} is not an integer") from None

    def _usemtl(self, line: LogicalLine) -> None:
        if not line.args:
            raise MissingArgument("usemtl without a material name")
        self.state.material = line.args

    def _mtllib(self, line: LogicalLine) -> None:
        names = line.words()
        if not names:
            raise MissingArgument("mtllib without a library name")
        self.state.material_libraries.extend(names)
        self.state.pending_libraries.extend(names)
