from functools import lru_cache

import httpx
from fastapi import Depends, Request

from ogmeta.app_shell.config import (
    Settings,
    create_direct_source,
    load_rules_or_defaults,
)
from ogmeta.components.bots import BotRulesPort
from ogmeta.components.site_settings import SettingsCachePort
from ogmeta.edge import DirectMetaSource
from ogmeta.rules.models import Rules


# --- Settings ---
@lru_cache
def load_settings() -> Settings:
    return Settings()


@lru_cache
def load_default_rules() -> Rules:
    return load_rules_or_defaults(load_settings().rules_path)


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_rules(request: Request) -> Rules:
    return request.app.state.rules


# --- Adapters ---
def get_http_client(request: Request) -> httpx.AsyncClient:
    return request.app.state.http_client


def get_settings_cache(request: Request) -> SettingsCachePort:
    return request.app.state.settings_cache


class BotRulesAdapter:
    """Adapter to map generic Rules to the bots component RulesPort."""

    def __init__(self, rules: Rules):
        self._rules = rules.bots

    def get_bot_signatures(self) -> list[str]:
        return self._rules.signatures


def get_bot_rules(rules: Rules = Depends(get_rules)) -> BotRulesPort:
    return BotRulesAdapter(rules)


# --- Services ---
def get_meta_source(
    settings: Settings = Depends(get_settings),
    rules: Rules = Depends(get_rules),
    client: httpx.AsyncClient = Depends(get_http_client),
    cache: SettingsCachePort = Depends(get_settings_cache),
) -> DirectMetaSource | None:
    """Direct source, or None when the content store is not configured."""
    if not settings.is_store_configured:
        return None
    return create_direct_source(settings, rules, client, cache=cache)
