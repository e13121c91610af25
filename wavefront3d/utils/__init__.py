# wavefront3d/utils/__init__.py
"""
Пакет утилит.

Экспортируем:
    * logger      – готовый объект logging.Logger (с level INFO)
    * LoadOptions – опции загрузки + готовые пресеты
    * Profiler    – замер времени блока кода
"""

from .logger import logger
from .config import LoadOptions, GPU_LOAD_OPTIONS, OFFLINE_RENDERING_LOAD_OPTIONS
from .profiler import Profiler

__all__ = [
    "logger",
    "LoadOptions",
    "GPU_LOAD_OPTIONS",
    "OFFLINE_RENDERING_LOAD_OPTIONS",
    "Profiler",
]
