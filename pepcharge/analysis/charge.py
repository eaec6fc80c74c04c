"""
Carga líquida esperada de peptídeos (Henderson–Hasselbalch, constantes de Bjellqvist).

Cada sítio ionizável contribui com a média ponderada entre a forma carregada
e a neutra, logo a carga líquida é contínua (ex.: 1.79 ≈ 79 % z=2 / 21 % z=1).
"""
import logging
import math
from collections import Counter
from dataclasses import dataclass
from enum import Enum
from functools import cached_property
from typing import Iterable, Iterator

from ..errors import InvalidSequenceError
from .pka_table import ResidueConstantTable, default_table

log = logging.getLogger("charge")


class Polarity(Enum):
    POSITIVE_WHEN_PROTONATED = 1
    NEGATIVE_WHEN_DEPROTONATED = -1


class SiteKind(str, Enum):
    N_TERM = "N-terminus"
    C_TERM = "C-terminus"
    ARG = "Arginine-sidechain"
    HIS = "Histidine-sidechain"
    LYS = "Lysine-sidechain"
    ASP = "Aspartate-sidechain"
    GLU = "Glutamate-sidechain"
    CYS = "Cysteine-sidechain"
    TYR = "Tyrosine-sidechain"


# ordem fixa: básicos primeiro, depois ácidos
SIDE_CHAINS = {
    "R": (SiteKind.ARG, Polarity.POSITIVE_WHEN_PROTONATED),
    "H": (SiteKind.HIS, Polarity.POSITIVE_WHEN_PROTONATED),
    "K": (SiteKind.LYS, Polarity.POSITIVE_WHEN_PROTONATED),
    "D": (SiteKind.ASP, Polarity.NEGATIVE_WHEN_DEPROTONATED),
    "E": (SiteKind.GLU, Polarity.NEGATIVE_WHEN_DEPROTONATED),
    "C": (SiteKind.CYS, Polarity.NEGATIVE_WHEN_DEPROTONATED),
    "Y": (SiteKind.TYR, Polarity.NEGATIVE_WHEN_DEPROTONATED),
}


def _fraction(x: float) -> float:
    """1 / (10**x + 1) sem overflow para |x| grande."""
    if x > 0:
        t = 10.0 ** -x
        return t / (1.0 + t)
    return 1.0 / (1.0 + 10.0 ** x)


def _check_ph(ph) -> float:
    ph = float(ph)
    if math.isnan(ph):
        raise ValueError("pH não pode ser NaN")
    return ph


@dataclass(frozen=True)
class IonizableGroup:
    site_kind: SiteKind
    pka: float
    polarity: Polarity

    def charge(self, ph: float) -> float:
        """Carga média de um único sítio no pH dado."""
        if self.polarity is Polarity.POSITIVE_WHEN_PROTONATED:
            return _fraction(ph - self.pka)
        return -_fraction(self.pka - ph)


@dataclass(frozen=True)
class Peptide:
    sequence: str

    @classmethod
    def parse(cls, sequence: str, table: ResidueConstantTable) -> "Peptide":
        if not isinstance(sequence, str) or not sequence:
            raise InvalidSequenceError(sequence if isinstance(sequence, str) else repr(sequence))
        bad = [(i, c) for i, c in enumerate(sequence) if c not in table]
        if bad:
            raise InvalidSequenceError(sequence, bad)
        return cls(sequence)

    @cached_property
    def composition(self) -> Counter:
        return Counter(self.sequence)

    @property
    def n_term(self) -> str:
        return self.sequence[0]

    @property
    def c_term(self) -> str:
        return self.sequence[-1]

    def __len__(self) -> int:
        return len(self.sequence)


class ChargeCalculator:
    """Calculadora ligada a uma tabela de constantes (somente leitura)."""

    def __init__(self, table: ResidueConstantTable | None = None):
        self.table = table if table is not None else default_table()

    def peptide(self, sequence: str) -> Peptide:
        return Peptide.parse(sequence, self.table)

    def groups(self, sequence: str) -> list[tuple[IonizableGroup, int]]:
        """Sítios ionizáveis e suas multiplicidades."""
        pep = self.peptide(sequence)
        out = [
            (IonizableGroup(SiteKind.N_TERM, self.table[pep.n_term].pk2,
                            Polarity.POSITIVE_WHEN_PROTONATED), 1),
            (IonizableGroup(SiteKind.C_TERM, self.table[pep.c_term].pk1,
                            Polarity.NEGATIVE_WHEN_DEPROTONATED), 1),
        ]
        for aa, (kind, polarity) in SIDE_CHAINS.items():
            n = pep.composition.get(aa, 0)
            if n:
                out.append((IonizableGroup(kind, self.table[aa].pkr, polarity), n))
        return out

    def site_contributions(self, sequence: str, ph: float) -> list[tuple[IonizableGroup, int, float]]:
        ph = _check_ph(ph)
        return [(g, n, n * g.charge(ph)) for g, n in self.groups(sequence)]

    def net_charge(self, sequence: str, ph: float) -> float:
        ph = _check_ph(ph)
        return sum(n * g.charge(ph) for g, n in self.groups(sequence))

    def bounds(self, sequence: str) -> tuple[int, int]:
        """(-sítios negativos, +sítios positivos): limites assintóticos da carga."""
        neg = pos = 0
        for g, n in self.groups(sequence):
            if g.polarity is Polarity.POSITIVE_WHEN_PROTONATED:
                pos += n
            else:
                neg += n
        return -neg, pos

    def profile(self, sequence: str, ph_values: Iterable[float]) -> "ChargeProfile":
        return ChargeProfile(self, sequence, ph_values)

    def isoelectric_point(self, sequence: str, lo: float = 0.0, hi: float = 14.0,
                          tol: float = 1e-4) -> float:
        """pH em que a carga líquida cruza zero (bisseção; a curva é decrescente)."""
        groups = self.groups(sequence)

        def z(ph):
            return sum(n * g.charge(ph) for g, n in groups)

        if lo >= hi or tol <= 0:
            raise ValueError(f"Intervalo inválido: [{lo}, {hi}] tol={tol}")
        if z(lo) < 0 or z(hi) > 0:
            raise ValueError(f"Carga de {sequence!r} não muda de sinal em [{lo}, {hi}]")
        while hi - lo > tol:
            mid = (lo + hi) / 2
            if z(mid) > 0:
                lo = mid
            else:
                hi = mid
        pi = (lo + hi) / 2
        log.debug("pI(%s) = %.4f", sequence, pi)
        return pi


class ChargeProfile:
    """Sequência preguiçosa e reiniciável de pares (pH, carga)."""

    def __init__(self, calc: ChargeCalculator, sequence: str, ph_values: Iterable[float]):
        self._groups = calc.groups(sequence)
        self.sequence = sequence
        self.ph_values = tuple(_check_ph(p) for p in ph_values)

    def __iter__(self) -> Iterator[tuple[float, float]]:
        for ph in self.ph_values:
            yield ph, sum(n * g.charge(ph) for g, n in self._groups)

    def __len__(self) -> int:
        return len(self.ph_values)


def charge_state_split(charge: float) -> dict[int, float]:
    """Lê a carga fracionária como população de dois estados inteiros vizinhos."""
    if not math.isfinite(charge):
        raise ValueError(f"Carga não finita: {charge!r}")
    low = math.floor(charge)
    frac = charge - low
    if frac == 0:
        return {low: 1.0}
    return {low: 1.0 - frac, low + 1: frac}


def ph_grid(start: float, stop: float, step: float) -> list[float]:
    """Valores de pH igualmente espaçados, incluindo `stop` quando cai na grade."""
    if not all(math.isfinite(v) for v in (start, stop, step)):
        raise ValueError(f"Grade de pH precisa de valores finitos: {start}, {stop}, {step}")
    if step <= 0:
        raise ValueError("step deve ser positivo")
    if stop < start:
        raise ValueError("stop < start")
    n = int(math.floor((stop - start) / step + 1e-9))
    return [round(start + i * step, 10) for i in range(n + 1)]


_default: ChargeCalculator | None = None


def _calculator(table: ResidueConstantTable | None) -> ChargeCalculator:
    global _default
    if table is not None:
        return ChargeCalculator(table)
    if _default is None:
        _default = ChargeCalculator()
    return _default


def compute_net_charge(sequence: str, ph: float, table: ResidueConstantTable | None = None) -> float:
    return _calculator(table).net_charge(sequence, ph)


def charge_profile(sequence: str, ph_values: Iterable[float],
                   table: ResidueConstantTable | None = None) -> ChargeProfile:
    return _calculator(table).profile(sequence, ph_values)


def isoelectric_point(sequence: str, lo: float = 0.0, hi: float = 14.0, tol: float = 1e-4,
                      table: ResidueConstantTable | None = None) -> float:
    return _calculator(table).isoelectric_point(sequence, lo, hi, tol)


class ChargeAnalyzer:
    """Linha de resultado (carga, estados dominantes, pI) para uso em lote."""

    def __init__(self, calc: ChargeCalculator | None = None):
        self.calc = calc or _calculator(None)

    def analyze(self, name: str, seq: str, ph: float) -> dict:
        z = self.calc.net_charge(seq, ph)
        states = sorted(charge_state_split(z).items(), key=lambda kv: -kv[1])
        major, major_frac = states[0]
        minor, minor_frac = states[1] if len(states) > 1 else ("", 0.0)
        return {
            "name": name,
            "sequence": seq,
            "length": len(seq),
            "ph": ph,
            "net_charge": z,
            "major_z": major,
            "major_frac": major_frac,
            "minor_z": minor,
            "minor_frac": minor_frac,
            "pi": self._pi(seq),
        }

    def _pi(self, seq: str) -> float:
        # carga sem troca de sinal em [0, 14] (ex.: poli-Arg longo) → sem pI
        try:
            return self.calc.isoelectric_point(seq)
        except ValueError as e:
            log.info("%s: pI indefinido (%s)", seq, e)
            return math.nan
