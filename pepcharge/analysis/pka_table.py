import logging
import math
from collections.abc import Mapping
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
from types import MappingProxyType

import pandas as pd

from .. import settings
from ..errors import ConfigurationLoadError

log = logging.getLogger("pka_table")

CANONICAL = frozenset("ACDEFGHIKLMNPQRSTVWY")
SIDE_CHAIN = frozenset("RHKDECY")
COLUMNS = ("aa", "pk1", "pk2", "pkr")


@dataclass(frozen=True)
class ResidueConstants:
    """pK1 = C‑terminal, pK2 = N‑terminal, pKr = cadeia lateral (ou None)."""
    pk1: float
    pk2: float
    pkr: float | None = None


class ResidueConstantTable(Mapping):
    """Mapeamento imutável aminoácido → ResidueConstants."""

    def __init__(self, rows: Mapping[str, ResidueConstants], source: str = "<memória>"):
        self._rows = MappingProxyType(dict(rows))
        self.source = source
        _check(self._rows, source)

    def __getitem__(self, aa: str) -> ResidueConstants:
        return self._rows[aa]

    def __iter__(self):
        return iter(self._rows)

    def __len__(self) -> int:
        return len(self._rows)

    def __repr__(self) -> str:
        return f"ResidueConstantTable({len(self)} resíduos, fonte={self.source})"


def _check(rows: Mapping[str, ResidueConstants], source: str):
    missing = CANONICAL - set(rows)
    extra = set(rows) - CANONICAL
    if missing or extra:
        raise ConfigurationLoadError(
            f"{source}: resíduos ausentes {sorted(missing)} / inesperados {sorted(extra)}")
    for aa, c in rows.items():
        for name in ("pk1", "pk2"):
            v = getattr(c, name)
            if not isinstance(v, (int, float)) or not math.isfinite(v):
                raise ConfigurationLoadError(f"{source}: {name} inválido para {aa}: {v!r}")
        has_side = c.pkr is not None
        if has_side != (aa in SIDE_CHAIN):
            raise ConfigurationLoadError(
                f"{source}: pKr {'inesperado' if has_side else 'ausente'} para {aa}")
        if has_side and not math.isfinite(c.pkr):
            raise ConfigurationLoadError(f"{source}: pKr inválido para {aa}: {c.pkr!r}")


def load_table(path: Path | None = None) -> ResidueConstantTable:
    """Lê o CSV de constantes (sep=';', decimal=',').  Qualquer falha é fatal."""
    path = Path(path or settings.PKA_TABLE)
    try:
        df = pd.read_csv(path, sep=";", decimal=",", engine="python")
    except (OSError, pd.errors.ParserError, pd.errors.EmptyDataError) as e:
        raise ConfigurationLoadError(f"Não foi possível ler {path}: {e}") from e

    df.columns = [str(c).strip().lower() for c in df.columns]
    missing = [c for c in COLUMNS if c not in df.columns]
    if missing:
        raise ConfigurationLoadError(f"{path}: colunas ausentes {missing}")

    df["aa"] = df["aa"].fillna("").astype(str).str.strip().str.upper()
    dup = sorted(set(df.loc[df["aa"].duplicated(), "aa"]))
    if dup:
        raise ConfigurationLoadError(f"{path}: resíduos duplicados {dup}")

    rows = {}
    for _, r in df.iterrows():
        try:
            pkr = None if pd.isna(r["pkr"]) else float(r["pkr"])
            rows[r["aa"]] = ResidueConstants(float(r["pk1"]), float(r["pk2"]), pkr)
        except (TypeError, ValueError) as e:
            raise ConfigurationLoadError(f"{path}: linha {r['aa']!r} malformada ({e})") from e

    table = ResidueConstantTable(rows, source=path.name)
    log.info("Tabela de pKa carregada (%d resíduos) ← %s", len(table), path.name)
    return table


@lru_cache(maxsize=None)
def default_table() -> ResidueConstantTable:
    """Tabela de Bjellqvist do processo (carregada uma única vez)."""
    return load_table(settings.PKA_TABLE)
