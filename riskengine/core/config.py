from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import List, Optional

class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_prefix="RISKENGINE_")

    # Application Settings
    app_name: str = "Behavioral Risk Engine"
    debug: bool = False
    host: str = "0.0.0.0"
    port: int = 8000

    # API Settings
    api_v1_str: str = "/api/v1"
    cors_origins: List[str] = [
        "http://localhost:3000",
        "http://127.0.0.1:3000",
        "http://localhost:5173",
    ]

    # Logging
    log_level: str = "INFO"
    log_file: Optional[str] = None

    # Anomaly scorer ensemble
    anomaly_num_trees: int = 150
    anomaly_contamination: float = 0.1
    anomaly_weight_jitter: float = 0.1
    anomaly_tree_jitter: float = 0.2

    # Pattern classifier ensemble
    pattern_num_trees: int = 150
    pattern_max_depth: int = 12
    pattern_jitter: float = 0.1

    # Shared model state
    history_capacity: int = 1000

    # Activity refresher
    refresh_enabled: bool = True
    refresh_interval_seconds: float = 30.0

    # Demo activity store
    demo_entity_count: int = 100

    # Seed for jitter and demo data; None draws fresh OS entropy
    random_seed: Optional[int] = None

settings = Settings()
