import os
from dataclasses import dataclass
from typing import Tuple
from dotenv import load_dotenv

load_dotenv()

DEFAULT_ALLOWED_ORIGINS = "http://localhost:5173,https://animedaily.vercel.app"

@dataclass(frozen=True)
class AppConfig:
    env: str
    api_key: str
    data_file: str
    max_request_bytes: int
    allowed_origins: Tuple[str, ...]
    port: int

    @property
    def cors_allow_all(self) -> bool:
        # development accepts any origin, everything else uses the allow-list
        return self.env == "development"

def _split_origins(raw: str) -> Tuple[str, ...]:
    return tuple(o.strip().rstrip("/") for o in raw.split(",") if o.strip())

def load_config() -> AppConfig:
    return AppConfig(
        env=os.getenv("APP_ENV", "production").strip().lower(),
        api_key=os.getenv("API_KEY", ""),
        data_file=os.getenv("DATA_FILE", os.path.join(os.getcwd(), "public", "data", "anime.json")),
        max_request_bytes=int(os.getenv("MAX_REQUEST_BYTES", 52428800)),
        allowed_origins=_split_origins(os.getenv("CORS_ALLOWED_ORIGINS", DEFAULT_ALLOWED_ORIGINS)),
        port=int(os.getenv("PORT", 3000)),
    )
