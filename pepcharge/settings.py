from pathlib import Path
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Camada única de configuração.
    Pode ser sobrescrita por .env ou variáveis de ambiente prefixadas com PEPCHARGE_*
    """
    model_config = SettingsConfigDict(env_file=".env", env_prefix="PEPCHARGE_")

    # ---- caminhos principais ----
    BASE_DIR: Path = Path(__file__).resolve().parent
    DATA_DIR: Path = BASE_DIR / "data"
    WORK_DIR: Path = Path.cwd()
    LOG_DIR: Path = WORK_DIR / "logs"
    PRODUCT_DIR: Path = WORK_DIR / "product"

    PKA_TABLE: Path = DATA_DIR / "bjellqvist.csv"

    # ---- logging ----
    LOG_LEVEL: str = "INFO"

    # ---- parâmetros de análise ----
    DEFAULT_PH: float = 7.0
    PH_START: float = 0.0
    PH_STOP: float = 14.0
    PH_STEP: float = 0.1

    def __init__(self, **kw):
        super().__init__(**kw)
        # cria pastas de saída se não existirem
        for p in (self.LOG_DIR, self.PRODUCT_DIR):
            p.mkdir(parents=True, exist_ok=True)
