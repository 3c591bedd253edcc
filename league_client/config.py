from __future__ import annotations

import pathlib
from dataclasses import dataclass

import yaml

from .utils import LOCAL_TZ, read_env

CONFIG_PATH = pathlib.Path(__file__).resolve().parent / "config.yaml"


@dataclass(frozen=True)
class Settings:
    base_url: str = "http://localhost:8000"
    timeout: float = 15.0
    timezone: str = LOCAL_TZ
    token_path: str = "~/.league_client/session.json"
    league_title: str = "Premier Soccer League"
    season_title: str = ""
    fixtures_page_size: int = 9
    results_page_size: int = 10


def load_config(path: str | pathlib.Path | None = None) -> Settings:
    """Read the YAML config, then apply ``LEAGUE_*`` environment overrides."""
    cfg_path = pathlib.Path(path) if path else CONFIG_PATH
    cfg = yaml.safe_load(cfg_path.read_text(encoding="utf-8")) or {}
    pages = cfg.get("page_sizes", {}) or {}
    defaults = Settings()
    return Settings(
        base_url=read_env("LEAGUE_BASE_URL") or cfg.get("base_url", defaults.base_url),
        timeout=float(cfg.get("timeout", defaults.timeout)),
        timezone=read_env("LEAGUE_TIMEZONE") or cfg.get("timezone", defaults.timezone),
        token_path=read_env("LEAGUE_TOKEN_PATH") or cfg.get("token_path", defaults.token_path),
        league_title=cfg.get("league_title", defaults.league_title),
        season_title=cfg.get("season_title", defaults.season_title),
        fixtures_page_size=int(pages.get("fixtures", defaults.fixtures_page_size)),
        results_page_size=int(pages.get("results", defaults.results_page_size)),
    )
