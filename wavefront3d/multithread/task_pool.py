# wavefront3d/multithread/task_pool.py
# ---------------------------------------------------------------
# Простой пул задач на основе concurrent.futures.
# Загрузки разных файлов не делят состояния, поэтому их можно
# раздавать по потокам: чтение диска и numpy отпускают GIL.
# ---------------------------------------------------------------

from concurrent.futures import Future, ThreadPoolExecutor
import queue
from typing import Callable, Iterable, List, Optional

from wavefront3d.utils.logger import logger


class TaskPool:
    """Пул потоков; задачи принимаются как callables."""

    def __init__(self, max_workers: Optional[int] = None):
        self.executor = ThreadPoolExecutor(max_workers=max_workers,
                                           thread_name_prefix="wavefront3d")
        self.tasks: "queue.Queue[Future]" = queue.Queue()
        self._shutdown = False

    def submit(self, fn: Callable, *args, **kwargs) -> Future:
        """Отправить задачу в пул, вернуть Future."""
        if self._shutdown:
            raise RuntimeError("TaskPool already shut down")
        future = self.executor.submit(fn, *args, **kwargs)
        self.tasks.put(future)
        return future

    def map(self, fn: Callable, items: Iterable) -> List:
        """Выполнить ``fn`` для каждого элемента; результаты в исходном порядке."""
        futures = [self.submit(fn, item) for item in items]
        logger.debug(f"[TaskPool] {len(futures)} task(s) queued")
        self.wait_all()
        return [f.result() for f in futures]

    def wait_all(self) -> None:
        """Блокировать до завершения всех поставленных задач."""
        while not self.tasks.empty():
            future = self.tasks.get()
            future.result()  # пробрасывает исключения, если они возникли

    def shutdown(self, wait: bool = True) -> None:
        self._shutdown = True
        self.executor.shutdown(wait=wait)

    def __enter__(self) -> "TaskPool":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.shutdown()
