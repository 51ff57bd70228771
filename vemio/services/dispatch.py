# vemio/services/dispatch.py

import logging
from concurrent.futures import ThreadPoolExecutor
from typing import Callable, List, Sequence, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")

def run_ordered(calls: Sequence[Callable[[], T]], *, max_workers: int) -> List[T]:
    """
    Ejecuta llamadas independientes y devuelve sus resultados en el MISMO
    orden de `calls`, sin importar cuál termina primero.

    Si alguna falla, la excepción se propaga, las llamadas pendientes se
    cancelan y no se devuelve ningún resultado parcial.
    """
    if max_workers <= 1 or len(calls) <= 1:
        return [call() for call in calls]

    workers = min(max_workers, len(calls))
    logger.debug("Dispatching %d calls on %d workers", len(calls), workers)
    executor = ThreadPoolExecutor(max_workers=workers)
    try:
        futures = [executor.submit(call) for call in calls]
        return [future.result() for future in futures]
    finally:
        executor.shutdown(wait=True, cancel_futures=True)
