# wavefront3d/errors.py
# -*- coding: utf-8 -*-
"""
Иерархия ошибок загрузчика.

Каждая фатальная ошибка несёт имя источника, номер строки (1‑based),
ключевое слово директивы и её «сырые» аргументы, чтобы вызывающий код
мог показать понятную диагностику без повторного парсинга.
"""

from __future__ import annotations

from typing import Optional


class LoadError(Exception):
    """Базовая ошибка загрузки OBJ/MTL."""

    def __init__(self,
                 reason: str,
                 source: str = "<buffer>",
                 line: Optional[int] = None,
                 keyword: Optional[str] = None,
                 args: Optional[str] = None):
        self.reason = reason
        self.source = source
        self.line = line
        self.keyword = keyword
        self.args_text = args
        super().__init__(self._format())

    def at(self, source: str, line: int, keyword: str, args: str) -> "LoadError":
        """Та же ошибка, привязанная к конкретной директиве."""
        return type(self)(self.reason, source=source, line=line, keyword=keyword, args=args)

    def _format(self) -> str:
        where = self.source if self.line is None else f"{self.source}:{self.line}"
        msg = f"{where}: {self.reason}"
        if self.keyword is not None:
            directive = self.keyword if not self.args_text else f"{self.keyword} {self.args_text}"
            msg += f" [{directive}]"
        return msg


class MalformedNumber(LoadError):
    """Нечисловое поле там, где ожидался скаляр."""


class InvalidFaceIndex(LoadError):
    """Нулевой, выходящий за границы или неразрешимый индекс вершины."""


class InvalidPolygon(LoadError):
    """Директива грани без единого угла."""


class MissingArgument(LoadError):
    """Директива, требующая аргумент (usemtl, mtllib, newmtl), пришла пустой."""


class EmptyOrTruncatedFile(LoadError):
    """Пустой источник или поток, оборванный на продолжении строки."""


class InvalidLoadOptions(LoadError, ValueError):
    """Недопустимая комбинация/значение опций загрузки."""

    def __init__(self, reason: str, **kwargs):
        kwargs.setdefault("source", "<options>")
        super().__init__(reason, **kwargs)


class MaterialLibraryUnreadable(LoadError):
    """
    Библиотеку материалов не удалось получить.

    Не фатальна: загрузчик кладёт экземпляр в ``LoadResult.warnings``
    и продолжает разбирать геометрию.
    """


# Предупреждения – это те же объекты, просто не выброшенные.
LoadWarning = MaterialLibraryUnreadable

__all__ = [
    "LoadError",
    "MalformedNumber",
    "InvalidFaceIndex",
    "InvalidPolygon",
    "MissingArgument",
    "EmptyOrTruncatedFile",
    "InvalidLoadOptions",
    "MaterialLibraryUnreadable",
    "LoadWarning",
]
