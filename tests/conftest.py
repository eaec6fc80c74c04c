"""Shared test fixtures for pepcharge tests."""

import numpy as np
import pytest

from pepcharge import settings
from pepcharge.analysis.charge import ChargeCalculator
from pepcharge.analysis.pka_table import default_table

AMINO_ACIDS = list("ACDEFGHIKLMNPQRSTVWY")


@pytest.fixture
def table():
    return default_table()


@pytest.fixture
def calc(table):
    return ChargeCalculator(table)


@pytest.fixture
def random_peptides():
    """Peptídeos aleatórios (semente fixa) de 1 a 40 resíduos."""
    rng = np.random.default_rng(42)
    return ["".join(rng.choice(AMINO_ACIDS, size=int(n)))
            for n in rng.integers(1, 41, size=50)]


@pytest.fixture
def table_text():
    """Conteúdo do CSV de Bjellqvist distribuído com o pacote."""
    return settings.PKA_TABLE.read_text(encoding="utf-8")
