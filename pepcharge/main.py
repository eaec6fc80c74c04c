# pepcharge/main.py
import argparse
import sys
from pathlib import Path

from rich.table import Table

from . import settings, console
from .errors import PepChargeError
from .analysis.charge import ChargeCalculator, charge_state_split
from .pipeline import run_charge, run_profile
from .utils import clean_sequence


def _cmd_charge(args, calc: ChargeCalculator):
    ph = settings.DEFAULT_PH if args.ph is None else args.ph
    t = Table(title=f"Carga líquida (pH {ph:g})")
    for col in ("peptídeo", "carga", "estados"):
        t.add_column(col)
    for seq in args.sequences:
        z = calc.net_charge(seq, ph)
        states = ", ".join(f"{k:+d}: {v:.0%}" for k, v in
                           sorted(charge_state_split(z).items(), key=lambda kv: -kv[1]))
        t.add_row(seq, f"{z:+.2f}", states)
        if args.sites:
            for g, n, c in calc.site_contributions(seq, ph):
                t.add_row(f"  {g.site_kind.value} ×{n}", f"{c:+.3f}", f"pKa {g.pka:.2f}")
    console.print(t)


def _cmd_pi(args, calc: ChargeCalculator):
    t = Table(title="Ponto isoelétrico")
    t.add_column("peptídeo")
    t.add_column("pI")
    for seq in args.sequences:
        t.add_row(seq, f"{calc.isoelectric_point(seq):.2f}")
    console.print(t)


def _cmd_profile(args, calc: ChargeCalculator):
    path = run_profile(args.sequences, args.start, args.stop, args.step, args.out)
    console.print(f"Perfil salvo em [bold]{path}[/]")


def _cmd_batch(args, calc: ChargeCalculator):
    for path in run_charge(args.input, args.ph, args.out_dir):
        console.print(f"→ {path}")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="pepcharge",
        description="Carga líquida de peptídeos (pKa de Bjellqvist)",
    )
    sub = parser.add_subparsers(dest="cmd", required=True)

    p = sub.add_parser("charge", help="Carga líquida em um pH")
    p.add_argument("sequences", nargs="+", type=clean_sequence)
    p.add_argument("--ph", type=float, help="pH (padrão: settings.DEFAULT_PH)")
    p.add_argument("--sites", action="store_true", help="Mostra contribuição por sítio")
    p.set_defaults(func=_cmd_charge)

    p = sub.add_parser("pi", help="Ponto isoelétrico")
    p.add_argument("sequences", nargs="+", type=clean_sequence)
    p.set_defaults(func=_cmd_pi)

    p = sub.add_parser("profile", help="Curva carga × pH em CSV")
    p.add_argument("sequences", nargs="+", type=clean_sequence)
    p.add_argument("--start", type=float)
    p.add_argument("--stop",  type=float)
    p.add_argument("--step",  type=float)
    p.add_argument("--out",   type=Path)
    p.set_defaults(func=_cmd_profile)

    p = sub.add_parser("batch", help="Listas de peptídeos (Excel/CSV/FASTA)")
    p.add_argument("--input",   type=Path, required=True)
    p.add_argument("--ph",      type=float)
    p.add_argument("--out-dir", type=Path)
    p.set_defaults(func=_cmd_batch)
    return parser


def main(argv=None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    try:
        args.func(args, ChargeCalculator())
    except (PepChargeError, ValueError) as e:
        console.print(f"[bold red]Erro:[/] {e}")
        return 2
    return 0


if __name__ == "__main__":
    sys.exit(main())
