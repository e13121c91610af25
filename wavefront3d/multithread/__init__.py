# wavefront3d/multithread/__init__.py
from .task_pool import TaskPool

__all__ = ["TaskPool"]
