import re
import time
import logging
from contextlib import contextmanager

log = logging.getLogger("utils")


def snake_case(s: str) -> str:
    return re.sub(r"_+", "_", re.sub(r"[^0-9a-zA-Z]+", "_", s)).strip("_").lower()


def clean_sequence(s: str) -> str:
    """Normaliza entrada de usuário: remove espaços e passa para maiúsculas."""
    return re.sub(r"\s+", "", str(s)).upper()


@contextmanager
def timed(msg: str):
    log.info(msg + "…")
    t0 = time.perf_counter()
    try:
        yield
    finally:
        log.info("%s em %.2fs", msg, time.perf_counter() - t0)
