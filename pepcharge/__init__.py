"""Convenience re‑exports."""
from .settings import Settings
from .log import setup as _setup_logging

settings = Settings()
console  = _setup_logging(settings.LOG_LEVEL, settings.LOG_DIR)

from .errors import PepChargeError, InvalidSequenceError, ConfigurationLoadError  # noqa: E402
from .analysis.pka_table import ResidueConstantTable, load_table, default_table  # noqa: E402
from .analysis.charge import (  # noqa: E402
    ChargeCalculator,
    compute_net_charge,
    charge_profile,
    charge_state_split,
    isoelectric_point,
    ph_grid,
)

__version__ = "0.1.0"

# tabela de pKa carregada na importação; falha aqui é fatal
default_table()
