import os
from typing import Optional

from dotenv import load_dotenv
from pydantic import BaseModel

PAGESPEED_ENDPOINT = "https://www.googleapis.com/pagespeedonline/v5/runPagespeed"


def _env_bool(name: str, default: bool = False) -> bool:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    return raw.strip().lower() in ("1", "true", "yes", "on")


def _env_str(name: str) -> Optional[str]:
    raw = (os.getenv(name) or "").strip()
    return raw or None


def _env_float(name: str, default: float) -> float:
    return float(_env_str(name) or default)


def _env_int(name: str, default: int) -> int:
    return int(_env_str(name) or default)


class Settings(BaseModel):
    pagespeed_api_key: Optional[str] = None
    pagespeed_endpoint: str = PAGESPEED_ENDPOINT
    openai_api_key: Optional[str] = None
    openai_model: str = "gpt-4o-mini"

    # seconds
    page_timeout: float = 20
    pagespeed_timeout: float = 60
    llm_timeout: float = 60

    render_js: bool = False
    html_parser: str = "lxml"

    host: str = "0.0.0.0"
    port: int = 4000
    log_level: str = "INFO"

    @classmethod
    def from_env(cls) -> "Settings":
        load_dotenv()
        return cls(
            pagespeed_api_key=_env_str("PAGESPEED_API_KEY"),
            pagespeed_endpoint=_env_str("PAGESPEED_ENDPOINT") or PAGESPEED_ENDPOINT,
            openai_api_key=_env_str("OPENAI_API_KEY"),
            openai_model=_env_str("OPENAI_MODEL") or "gpt-4o-mini",
            page_timeout=_env_float("PAGE_TIMEOUT", 20),
            pagespeed_timeout=_env_float("PAGESPEED_TIMEOUT", 60),
            llm_timeout=_env_float("LLM_TIMEOUT", 60),
            render_js=_env_bool("RENDER_JS"),
            html_parser=_env_str("HTML_PARSER") or "lxml",
            host=_env_str("HOST") or "0.0.0.0",
            port=_env_int("PORT", 4000),
            log_level=(_env_str("LOG_LEVEL") or "INFO").upper(),
        )
