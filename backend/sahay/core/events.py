from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator, Literal, cast
from fastapi import FastAPI

from sahay.core.config import get_settings
from sahay.core.logging import setup_logging
from sahay.domain.llm.gateway import get_gateway
from sahay.domain.safety.keywords import get_keyword_table
from sahay.utils.http import close_http_client, get_http_client

log = logging.getLogger("sahay.core")


def _startup_checks() -> None:
    """
    Load the crisis keyword table eagerly so a bad CRISIS_KEYWORDS_FILE fails the boot,
    build the shared clients before requests arrive, and warn (don't fail) when the
    gateway has no key.
    """
    table = get_keyword_table()
    log.info("crisis keywords: %s", {sev.value: len(p) for sev, p in table.items()})

    gateway = get_gateway()
    if not gateway.configured:
        log.warning("LLM_API_KEY not set (chat and generators will return 503)")
        return
    get_http_client(get_settings().LLM_TIMEOUT_S)


def _shutdown() -> None:
    close_http_client()
    # the cached gateway holds an SDK client bound to the closed http client
    get_gateway.cache_clear()


def configure_logging() -> None:
    settings = get_settings()
    fmt: Literal["console", "json"] = cast(Literal["console", "json"], settings.LOG_FORMAT)
    setup_logging(level=settings.LOG_LEVEL, fmt=fmt)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """
    Startup/shutdown for the FastAPI app. Safe to run more than once per process.
    """
    settings = get_settings()
    log.info("starting %s (env=%s)", settings.APP_NAME, settings.ENV)
    _startup_checks()
    try:
        yield
    finally:
        log.info("shutting down %s", settings.APP_NAME)
        _shutdown()
