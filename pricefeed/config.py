import os
from dataclasses import dataclass
from dotenv import load_dotenv

# Loads variables from a local .env file into environment variables (dev only).
load_dotenv()


class ConfigError(ValueError):
    """Bad or missing configuration; raised at startup, never at runtime."""


@dataclass(frozen=True)
class Settings:
    # App config
    app_env: str
    log_level: str
    provider: str

    # Feed config
    symbols: tuple[str, ...]
    ws_url: str
    api_key: str

    # Engine tuning
    history_capacity: int = 50
    candle_bucket_size: int = 30
    highlight_clear_ms: int = 500
    reconnect_delay_ms: int = 3000

    def __post_init__(self) -> None:
        if not self.symbols:
            raise ConfigError("At least one feed symbol is required (FEED_SYMBOLS)")
        for name in ("history_capacity", "candle_bucket_size", "highlight_clear_ms", "reconnect_delay_ms"):
            value = getattr(self, name)
            if value <= 0:
                raise ConfigError(f"{name} must be positive, got {value}")

    @property
    def highlight_clear_seconds(self) -> float:
        return self.highlight_clear_ms / 1000.0

    @property
    def reconnect_delay_seconds(self) -> float:
        return self.reconnect_delay_ms / 1000.0


def parse_symbols(raw: str) -> tuple[str, ...]:
    """Comma list -> ordered, de-duplicated symbols."""
    out: list[str] = []
    for s in raw.split(","):
        s = s.strip()
        if s and s not in out:
            out.append(s)
    return tuple(out)


def _int_env(name: str, default: int) -> int:
    raw = os.getenv(name, "").strip()
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        raise ConfigError(f"{name} must be an integer, got {raw!r}") from None


def get_settings() -> Settings:
    """
    Reads env vars and returns a Settings object.
    """
    api_key = os.getenv("TWELVEDATA_API_KEY", "").strip()
    if not api_key:
        raise ConfigError("TWELVEDATA_API_KEY is missing. Add it to .env")

    return Settings(
        app_env=os.getenv("APP_ENV", "local"),
        log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
        provider=os.getenv("PROVIDER", "TWELVEDATA"),
        symbols=parse_symbols(os.getenv("FEED_SYMBOLS", "BTC/USD")),
        ws_url=os.getenv("TWELVEDATA_WS_URL", "wss://ws.twelvedata.com/v1/quotes/price"),
        api_key=api_key,
        history_capacity=_int_env("HISTORY_CAPACITY", 50),
        candle_bucket_size=_int_env("CANDLE_BUCKET_SIZE", 30),
        highlight_clear_ms=_int_env("HIGHLIGHT_CLEAR_MS", 500),
        reconnect_delay_ms=_int_env("RECONNECT_DELAY_MS", 3000),
    )
