#!/usr/bin/env python3
# main.py
"""
Точка входа: HTTP API pet-care Mini App под uvicorn.
"""

from __future__ import annotations

import asyncio
import sys

import uvicorn

from petcare.common.logger import log_info, setup_logging
from petcare.config import settings


async def main() -> None:
    """Запуск API сервера."""
    setup_logging()
    await log_info(f"Запуск API на {settings.server.HOST}:{settings.server.PORT}")

    config = uvicorn.Config(
        "petcare.api.app:app",
        host=settings.server.HOST,
        port=settings.server.PORT,
        reload=settings.system.DEBUG,
        log_level="debug" if settings.system.DEBUG else "info",
    )

    server = uvicorn.Server(config)
    try:
        await server.serve()
    except asyncio.CancelledError:
        await log_info("API: graceful shutdown")
        await server.shutdown()


if __name__ == "__main__":
    try:
        asyncio.run(main())
    except KeyboardInterrupt:
        print("\nПолучен сигнал остановки, завершение работы...")
    except Exception as e:
        print(f"\nКритическая ошибка: {e}")
        sys.exit(1)
