import logging
from pathlib import Path

import pandas as pd
from Bio import SeqIO

from ..utils import snake_case, clean_sequence

log = logging.getLogger("peptide_loader")

EXCEL = {".xlsx", ".xls"}
FASTA = {".fasta", ".fa", ".faa"}


class PeptideLoader:
    """Carrega listas de peptídeos (uma coluna = uma lista; FASTA = uma lista).

    Retorna {lista: [(rótulo, sequência), ...]}.  As sequências são apenas
    normalizadas (maiúsculas, sem espaços); a validação fica com a calculadora.
    """

    def __init__(self, path: Path, sheet: int = 0):
        self._path = Path(path)
        self._sheet = sheet

    def load(self) -> dict[str, list[tuple[str, str]]]:
        suffix = self._path.suffix.lower()
        if suffix in FASTA:
            lists = self._load_fasta()
        elif suffix in EXCEL:
            lists = self._load_table(pd.read_excel(self._path, sheet_name=self._sheet))
        else:
            lists = self._load_table(pd.read_csv(self._path))
        log.info("%s: %d lista(s), %d peptídeos", self._path.name, len(lists),
                 sum(len(v) for v in lists.values()))
        return lists

    def _load_fasta(self) -> dict[str, list[tuple[str, str]]]:
        with self._path.open(encoding="utf-8") as fh:
            recs = [(r.id, clean_sequence(r.seq)) for r in SeqIO.parse(fh, "fasta")]
        return {snake_case(self._path.stem): recs}

    @staticmethod
    def _load_table(df: pd.DataFrame) -> dict[str, list[tuple[str, str]]]:
        df.columns = [snake_case(str(c)) for c in df.columns]

        for col in df.select_dtypes(include=["object", "string"]):
            df[col] = (
                df[col]
                .fillna("")
                .astype(str)
                .str.split(r"[;,]")
                .apply(lambda lst: [clean_sequence(p) for p in lst if p.strip()])
            )
        return {c: [(p, p) for sub in df[c] for p in sub]
                for c in df.select_dtypes(include=["object", "string"])}
