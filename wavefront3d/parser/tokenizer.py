# wavefront3d/parser/tokenizer.py
# -*- coding: utf-8 -*-
"""
Разбиение текста OBJ/MTL на логические строки.

* ``#`` и всё до конца строки – комментарий;
* ``\\`` в конце физической строки склеивает её со следующей;
* пустые строки пропускаются;
* счётчик физических строк (1‑based) растёт на каждую прочитанную
  строку, даже внутри продолжения – ошибки ссылаются на реальную
  строку файла.

Токенайзер «push»‑типа: ему можно скармливать куски произвольного
размера (``str`` или ``bytes``), что позволяет использовать его и в
синхронной, и в асинхронной загрузке.
"""

from __future__ import annotations

import codecs
from typing import Iterable, Iterator, List, NamedTuple, Union

from wavefront3d.errors import EmptyOrTruncatedFile

Chunk = Union[str, bytes, bytearray]


def parse_number(word: str, cast=float):
    """float/int без питоновских расширений вроде "1_0" – ValueError."""
    if "_" in word:
        raise ValueError(word)
    return cast(word)


class LogicalLine(NamedTuple):
    """Одна директива: номер первой физической строки, ключ, аргументы."""
    lineno: int
    keyword: str
    args: str

    def words(self) -> List[str]:
        return self.args.split()


class LineTokenizer:
    """Инкрементальный токенайзер: ``feed()`` кусками, затем ``close()``."""

    def __init__(self, source: str = "<buffer>"):
        self.source = source
        self.lineno = 0
        self.emitted = 0
        self._decoder = codecs.getincrementaldecoder("utf-8-sig")(errors="replace")
        self._tail = ""
        self._pending: List[str] = []
        self._pending_start = 0
        self._at_start = True

    # -----------------------------------------------------------------
    def feed(self, chunk: Chunk) -> List[LogicalLine]:
        """Принять очередной кусок и вернуть завершённые логические строки."""
        if isinstance(chunk, (bytes, bytearray)):
            chunk = self._decoder.decode(bytes(chunk))
        if not chunk:
            return []
        if self._at_start:
            # BOM в начале текста (экспортёры под Windows)
            chunk = chunk[1:] if chunk.startswith("\ufeff") else chunk
            self._at_start = False

        parts = (self._tail + chunk).split("\n")
        self._tail = parts.pop()

        out: List[LogicalLine] = []
        for raw in parts:
            self._consume(raw, out)
        return out

    # -----------------------------------------------------------------
    def close(self) -> List[LogicalLine]:
        """Дочитать хвост без перевода строки; проверить продолжения."""
        out: List[LogicalLine] = []
        tail = self._tail + self._decoder.decode(b"", final=True)
        self._tail = ""
        if tail:
            self._consume(tail, out)
        if self._pending:
            start = self._pending_start
            self._pending = []
            raise EmptyOrTruncatedFile(
                "stream ended inside a line continuation",
                source=self.source,
                line=start,
            )
        return out

    # -----------------------------------------------------------------
    def _consume(self, raw: str, out: List[LogicalLine]) -> None:
        self.lineno += 1
        if not self._pending:
            self._pending_start = self.lineno

        text = raw.rstrip("\r")
        hash_pos = text.find("#")
        if hash_pos >= 0:
            text = text[:hash_pos]

        stripped = text.rstrip()
        if stripped.endswith("\\"):
            self._pending.append(stripped[:-1])
            return

        self._pending.append(text)
        logical = " ".join(self._pending).strip()
        self._pending = []
        if not logical:
            return

        parts = logical.split(None, 1)
        args = parts[1].strip() if len(parts) > 1 else ""
        out.append(LogicalLine(self._pending_start, parts[0], args))
        self.emitted += 1


def iter_logical_lines(source: Union[Chunk, Iterable[Chunk]],
                       source_name: str = "<buffer>") -> Iterator[LogicalLine]:
    """
    Синхронный помощник: строка/байты целиком или итерируемое кусков
    (например, открытый файл).
    """
    tokenizer = LineTokenizer(source_name)
    if isinstance(source, (str, bytes, bytearray)):
        source = (source,)
    for chunk in source:
        yield from tokenizer.feed(chunk)
    yield from tokenizer.close()
