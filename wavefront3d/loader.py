# wavefront3d/loader.py
# -*- coding: utf-8 -*-
"""
Публичные точки входа загрузчика.

* ``load(path)``                    – OBJ с диска, MTL ищутся рядом;
* ``load_from_buffers(text, ...)``  – OBJ из памяти, MTL через callback;
* ``load_async`` / ``load_from_buffers_async`` – то же, но чтение
  кусков и библиотек материалов может «уступать» event‑loop;
* ``load_materials_from_buffer`` / ``load_materials`` – только MTL;
* ``load_many``                     – пачка независимых загрузок в пуле.

Нечитаемая библиотека материалов не прерывает загрузку: ошибка
попадает в ``LoadResult.warnings``, а примитивы с этим материалом
получают ``NO_MATERIAL``.
"""

from __future__ import annotations

import asyncio
import inspect
from pathlib import Path
from typing import (
    AsyncIterable,
    Awaitable,
    Callable,
    Iterable,
    List,
    Optional,
    Sequence,
    Union,
)

from wavefront3d.assets.material import MaterialTable
from wavefront3d.assets.mtl_parser import parse_materials
from wavefront3d.errors import EmptyOrTruncatedFile, MaterialLibraryUnreadable, MissingArgument
from wavefront3d.mesh.mesh import Mesh
from wavefront3d.multithread.task_pool import TaskPool
from wavefront3d.parser.interpreter import DirectiveInterpreter
from wavefront3d.parser.tokenizer import LineTokenizer
from wavefront3d.utils.config import LoadOptions
from wavefront3d.utils.logger import logger
from wavefront3d.utils.profiler import Profiler

CHUNK_SIZE = 1 << 16

Text = Union[str, bytes, bytearray]
MaterialResolver = Callable[[str], Text]
AsyncMaterialResolver = Callable[[str], Union[Text, Awaitable[Text]]]


class LoadResult:
    """Всё, что получилось из одного OBJ: меши, материалы, предупреждения."""

    def __init__(self,
                 meshes: List[Mesh],
                 materials: MaterialTable,
                 warnings: List[MaterialLibraryUnreadable],
                 unresolved_materials: Sequence[str],
                 material_libraries: Sequence[str],
                 source: str):
        self.meshes = meshes
        self.materials = materials
        self.warnings = warnings
        self.unresolved_materials = sorted(unresolved_materials)
        self.material_libraries = list(material_libraries)
        self.source = source

    def mesh(self, name: str) -> Mesh:
        """Первый меш с данным именем."""
        for m in self.meshes:
            if m.name == name:
                return m
        raise KeyError(name)

    def __iter__(self):
        return iter(self.meshes)

    def __len__(self) -> int:
        return len(self.meshes)

    def __repr__(self) -> str:
        return (f"LoadResult(source={self.source!r}, meshes={len(self.meshes)}, "
                f"materials={len(self.materials)}, warnings={len(self.warnings)})")


class _LoadJob:
    """Состояние одной загрузки: токенайзер, интерпретатор, материалы."""

    def __init__(self, options: Optional[LoadOptions], source: str):
        self.source = source
        self.tokenizer = LineTokenizer(source)
        self.interpreter = DirectiveInterpreter(options, source)
        self.materials = MaterialTable()
        self.warnings: List[MaterialLibraryUnreadable] = []

    # -----------------------------------------------------------------
    def feed(self, chunk: Text) -> List[str]:
        """Разобрать кусок; вернуть имена библиотек, которые пора загрузить."""
        for line in self.tokenizer.feed(chunk):
            self.interpreter.handle(line)
        return self.interpreter.take_libraries()

    def close(self) -> List[str]:
        for line in self.tokenizer.close():
            self.interpreter.handle(line)
        return self.interpreter.take_libraries()

    # -----------------------------------------------------------------
    def unreadable(self, name: str, reason: str) -> None:
        warning = MaterialLibraryUnreadable(
            f"material library {name!r} unreadable: {reason}",
            source=self.source,
        )
        logger.warning(f"[Loader] {warning}")
        self.warnings.append(warning)

    def merge(self, name: str, text: Optional[Text]) -> None:
        if text is None:
            self.unreadable(name, "resolver returned nothing")
            return
        try:
            table = parse_materials(text, source_name=name)
        except (EmptyOrTruncatedFile, MissingArgument) as exc:
            self.unreadable(name, exc.reason)
            return
        self.materials.merge(table)
        logger.debug(f"[Loader] {self.source}: merged {len(table)} material(s) from {name}")

    def fetch(self, name: str, resolver: Optional[MaterialResolver]) -> None:
        if resolver is None:
            self.unreadable(name, "no material resolver supplied")
            return
        try:
            text = resolver(name)
        except Exception as exc:
            self.unreadable(name, str(exc) or type(exc).__name__)
            return
        self.merge(name, text)

    async def fetch_async(self, name: str, resolver: Optional[AsyncMaterialResolver]) -> None:
        if resolver is None:
            self.unreadable(name, "no material resolver supplied")
            return
        try:
            text = resolver(name)
            if inspect.isawaitable(text):
                text = await text
        except Exception as exc:
            self.unreadable(name, str(exc) or type(exc).__name__)
            return
        self.merge(name, text)

    # -----------------------------------------------------------------
    def result(self) -> LoadResult:
        meshes, unresolved = self.interpreter.finish(self.materials)
        for name in sorted(unresolved):
            logger.warning(f"[Loader] {self.source}: material '{name}' not found in any library")
        return LoadResult(
            meshes=meshes,
            materials=self.materials,
            warnings=self.warnings,
            unresolved_materials=unresolved,
            material_libraries=self.interpreter.state.material_libraries,
            source=self.source,
        )


def _log_done(result: LoadResult, elapsed_ms: float) -> None:
    logger.info(f"[Loader] Loaded {result.source}: {len(result.meshes)} mesh(es), "
                f"{len(result.materials)} material(s) in {elapsed_ms:.1f} ms")


def _file_resolver(base_dir: Path) -> MaterialResolver:
    def resolve(name: str) -> bytes:
        return (base_dir / name).read_bytes()
    return resolve


def _read_chunks(path: Path) -> Iterable[bytes]:
    with path.open("rb") as f:
        yield from iter(lambda: f.read(CHUNK_SIZE), b"")


# ---------------------------------------------------------------------
# синхронные точки входа
# ---------------------------------------------------------------------
def load_from_buffers(source: Union[Text, Iterable[Text]],
                      material_resolver: Optional[MaterialResolver] = None,
                      options: Optional[LoadOptions] = None,
                      source_name: str = "<buffer>") -> LoadResult:
    """
    Загрузить OBJ из памяти.

    ``source`` – строка/байты целиком или итерируемое кусков.
    ``material_resolver(name)`` возвращает текст MTL или бросает
    исключение – тогда библиотека считается нечитаемой (предупреждение).
    """
    job = _LoadJob(options, source_name)
    chunks = (source,) if isinstance(source, (str, bytes, bytearray)) else source
    with Profiler(f"load {source_name}") as prof:
        for chunk in chunks:
            for name in job.feed(chunk):
                job.fetch(name, material_resolver)
        for name in job.close():
            job.fetch(name, material_resolver)
        result = job.result()
    _log_done(result, prof.elapsed_ms)
    return result


def load(path, options: Optional[LoadOptions] = None) -> LoadResult:
    """Загрузить OBJ с диска; ``mtllib`` ищутся относительно его папки."""
    p = Path(path)
    if not p.is_file():
        raise FileNotFoundError(f"OBJ file not found: {p}")
    return load_from_buffers(_read_chunks(p), _file_resolver(p.parent), options, str(p))


def load_materials_from_buffer(text: Union[Text, Iterable[Text]],
                               source_name: str = "<buffer>") -> MaterialTable:
    """Разобрать одну библиотеку MTL из памяти."""
    return parse_materials(text, source_name)


def load_materials(path) -> MaterialTable:
    p = Path(path)
    if not p.is_file():
        raise FileNotFoundError(f"MTL file not found: {p}")
    return parse_materials(_read_chunks(p), str(p))


# ---------------------------------------------------------------------
# асинхронные точки входа
# ---------------------------------------------------------------------
async def _achunks(source) -> AsyncIterable[Text]:
    if isinstance(source, (str, bytes, bytearray)):
        yield source
    elif hasattr(source, "__aiter__"):
        async for chunk in source:
            yield chunk
    else:
        for chunk in source:
            yield chunk


async def load_from_buffers_async(source,
                                  material_resolver: Optional[AsyncMaterialResolver] = None,
                                  options: Optional[LoadOptions] = None,
                                  source_name: str = "<buffer>") -> LoadResult:
    """
    Асинхронный вариант ``load_from_buffers``.

    ``source`` может быть и асинхронным итерируемым кусков, а
    ``material_resolver`` – корутиной. Семантика разбора та же.
    """
    job = _LoadJob(options, source_name)
    with Profiler(f"load {source_name}") as prof:
        async for chunk in _achunks(source):
            for name in job.feed(chunk):
                await job.fetch_async(name, material_resolver)
        for name in job.close():
            await job.fetch_async(name, material_resolver)
        result = job.result()
    _log_done(result, prof.elapsed_ms)
    return result


async def _read_chunks_async(path: Path):
    f = await asyncio.to_thread(path.open, "rb")
    try:
        while True:
            chunk = await asyncio.to_thread(f.read, CHUNK_SIZE)
            if not chunk:
                break
            yield chunk
    finally:
        f.close()


async def load_async(path, options: Optional[LoadOptions] = None) -> LoadResult:
    """Асинхронный ``load``: файл и библиотеки читаются в worker‑потоке."""
    p = Path(path)
    if not await asyncio.to_thread(p.is_file):
        raise FileNotFoundError(f"OBJ file not found: {p}")

    async def resolve(name: str) -> bytes:
        return await asyncio.to_thread((p.parent / name).read_bytes)

    return await load_from_buffers_async(_read_chunks_async(p), resolve, options, str(p))


# ---------------------------------------------------------------------
# пачка загрузок
# ---------------------------------------------------------------------
def load_many(paths: Sequence, options: Optional[LoadOptions] = None,
              max_workers: Optional[int] = None) -> List[LoadResult]:
    """Независимые загрузки в пуле потоков; результаты в порядке ``paths``."""
    with TaskPool(max_workers=max_workers) as pool:
        return pool.map(lambda p: load(p, options), paths)
