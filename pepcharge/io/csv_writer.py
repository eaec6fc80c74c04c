import csv
import logging
from pathlib import Path
from typing import Iterable

log = logging.getLogger("csv_writer")


def write_csv(path: Path, header: list[str], rows: Iterable[list]) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    n = 0
    with path.open("w", newline="", encoding="utf-8") as f:
        w = csv.writer(f)
        w.writerow(header)
        for row in rows:
            w.writerow([f"{v:.6g}" if isinstance(v, float) else v for v in row])
            n += 1
    log.info("CSV salvo → %s (%d linhas)", path, n)
    return path
