from dataclasses import dataclass, field
from pathlib import Path
import json
import logging
import os

import yaml

from cache import DayCache
from config_models import AppConfigModel
from services.price_service import PriceService
from services.price_source import HvaKosterStrommenSource


logger = logging.getLogger("uvicorn.error")


@dataclass
class AppConfig:
    config_file: Path
    options_files: list[Path] = field(default_factory=list)


@dataclass
class AppContainer:
    config: AppConfig
    settings: AppConfigModel
    cache: DayCache
    prices: PriceService


def merge_config(base, override):
    if not isinstance(base, dict):
        base = {}
    if not isinstance(override, dict):
        return base
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(base.get(key), dict):
            base[key] = merge_config(base.get(key), value)
        else:
            base[key] = value
    return base


def load_config(config_file, options_files=()):
    cfg = {}
    config_path = Path(config_file)
    if config_path.exists():
        with open(config_path, "r", encoding="utf-8") as f:
            cfg = yaml.safe_load(f) or {}

    for options_path in options_files:
        options_path = Path(options_path)
        if not options_path.exists():
            continue
        try:
            with open(options_path, "r", encoding="utf-8") as f:
                options = json.load(f)
        except (OSError, json.JSONDecodeError) as exc:
            logger.warning("Ignoring unreadable options file %s: %s", options_path, exc)
            continue
        cfg = merge_config(cfg, options)
        break

    return AppConfigModel.model_validate(cfg)


def build_app_config():
    config_file = Path(os.getenv("SPOTPRICE_CONFIG", "config.yaml"))
    options_file = Path(os.getenv("SPOTPRICE_OPTIONS", "/data/options.json"))
    return AppConfig(config_file=config_file, options_files=[options_file])


def build_container(config=None, settings=None, source=None) -> AppContainer:
    config = config or build_app_config()
    if settings is None:
        settings = load_config(config.config_file, config.options_files)
    if source is None:
        source = HvaKosterStrommenSource(
            base_url=settings.source.base_url,
            area=settings.source.area,
            logger=logger,
            timeout=settings.source.timeout_seconds,
        )
    cache = DayCache(capacity=settings.cache_retention)
    return AppContainer(
        config=config,
        settings=settings,
        cache=cache,
        prices=PriceService(source=source, cache=cache, settings=settings, logger=logger),
    )
