# wavefront3d/parser/__init__.py
"""
Разбор текста OBJ: токенайзер логических строк и разбор углов граней.

``DirectiveInterpreter`` импортируется напрямую из
``wavefront3d.parser.interpreter`` – он зависит от пакета ``mesh``.
"""

from .tokenizer import LineTokenizer, LogicalLine, iter_logical_lines
from .faces import CornerIndex, FaceRecord, StoreSizes, parse_corner, parse_corners, triangulate_fan

__all__ = [
    "LineTokenizer",
    "LogicalLine",
    "iter_logical_lines",
    "CornerIndex",
    "FaceRecord",
    "StoreSizes",
    "parse_corner",
    "parse_corners",
    "triangulate_fan",
]
