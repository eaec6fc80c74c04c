import logging
from datetime import datetime
from pathlib import Path

from rich.progress import Progress, TimeElapsedColumn

from . import settings, console
from .errors import InvalidSequenceError
from .io.peptide_loader import PeptideLoader
from .io.csv_writer import write_csv
from .analysis.charge import ChargeAnalyzer, ChargeCalculator, ph_grid
from .utils import timed, snake_case

log = logging.getLogger("pipeline")

RESULT_FIELDS = ["name", "sequence", "length", "ph", "net_charge",
                 "major_z", "major_frac", "minor_z", "minor_frac", "pi"]


def _stamp() -> str:
    return datetime.now().strftime("%Y%m%d_%H%M%S")


def run_charge(source: Path, ph: float | None = None, out_dir: Path | None = None) -> list[Path]:
    """Carga líquida de cada peptídeo de cada lista → CSV de resultados + CSV de erros."""
    ph = settings.DEFAULT_PH if ph is None else ph
    out_dir = Path(out_dir or settings.PRODUCT_DIR)
    analyzer = ChargeAnalyzer()
    ts = _stamp()

    with timed(f"Carregando {source}"):
        lists = PeptideLoader(source).load()

    written = []
    for col, peptides in lists.items():
        ok, err = [], []
        log.info("→ Charge: lista %s (%d peptídeos, pH %.2f)", col, len(peptides), ph)
        with Progress("{task.description}", TimeElapsedColumn(),
                      console=console, transient=True) as prog:
            task = prog.add_task(col, total=len(peptides))
            for name, seq in peptides:
                try:
                    res = analyzer.analyze(name, seq, ph)
                    ok.append([res[k] for k in RESULT_FIELDS])
                except InvalidSequenceError as e:
                    err.append([name, seq, str(e)])
                    log.warning("%s → %s", name, e)
                prog.advance(task)
        base = snake_case(col)
        written.append(write_csv(out_dir / f"{base}_charge_{ts}.csv", RESULT_FIELDS, ok))
        written.append(write_csv(out_dir / f"{base}_charge_err_{ts}.csv",
                                 ["name", "sequence", "error"], err))
    return written


def run_profile(sequences: list[str], start: float | None = None, stop: float | None = None,
                step: float | None = None, out: Path | None = None) -> Path:
    """Curvas carga × pH (uma coluna por peptídeo).  Sequência inválida aborta."""
    grid = ph_grid(settings.PH_START if start is None else start,
                   settings.PH_STOP if stop is None else stop,
                   settings.PH_STEP if step is None else step)
    calc = ChargeCalculator()
    profiles = [calc.profile(s, grid) for s in sequences]
    cols = [[z for _, z in p] for p in profiles]
    rows = [[ph, *(c[i] for c in cols)] for i, ph in enumerate(grid)]
    out = Path(out or settings.PRODUCT_DIR / f"profile_{_stamp()}.csv")
    return write_csv(out, ["ph", *sequences], rows)
