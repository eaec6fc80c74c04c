import logging
import logging.handlers
from pathlib import Path
from rich.console import Console


def setup(level: str = "INFO", log_dir: Path | None = None) -> Console:
    console = Console()
    lvl     = getattr(logging, level.upper(), logging.INFO)
    handlers = []

    # Handler de console (stderr)
    sh = logging.StreamHandler()
    sh.setLevel(lvl)
    sh.setFormatter(logging.Formatter("%(asctime)s %(levelname)s %(message)s",
                                      "%H:%M:%S"))
    handlers.append(sh)

    # Handler de arquivo rotativo
    if log_dir is not None:
        log_dir.mkdir(parents=True, exist_ok=True)
        fh = logging.handlers.RotatingFileHandler(
            log_dir / "run.log", maxBytes=2_000_000, backupCount=3, encoding="utf-8"
        )
        fh.setLevel(logging.DEBUG)
        fh.setFormatter(logging.Formatter(
            "%(asctime)s | %(levelname)-7s | %(name)s | %(message)s",
            "%Y-%m-%d %H:%M:%S"))
        handlers.append(fh)

    logging.basicConfig(level=lvl, handlers=handlers, force=True)
    logging.getLogger("log").debug("Log level → %s", logging.getLevelName(lvl))
    return console
