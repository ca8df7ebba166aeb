"""
FastAPI Application

Serves the landing routes the payment provider redirects back to.
"""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI

from filmpass.platform.app_factory import create_app
from filmpass.platform.config.di import cleanup, container, setup
from filmpass.platform.config.wire_modules import WIRE_MODULES
from filmpass.platform.logging.loguru_io import Logger


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    Logger.base.info('🚀 [FilmPass] Starting up...')

    setup()
    container.wire(modules=WIRE_MODULES)
    Logger.base.info('🔌 [FilmPass] Dependency injection wired')

    yield

    Logger.base.info('🛑 [FilmPass] Shutting down...')
    await container.backend_api_client().aclose()
    Logger.base.info('🌐 [FilmPass] Backend HTTP client closed')

    container.unwire()
    cleanup()
    Logger.base.info('👋 [FilmPass] Shutdown complete')


app = create_app(lifespan=lifespan)
