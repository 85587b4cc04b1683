import logging
import time

from fastapi import FastAPI, Request
from fastapi.routing import APIRoute

logger = logging.getLogger("twilight.access")


def configure_logging(level: str = "INFO"):
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def add_request_logging(app: FastAPI):
    @app.middleware("http")
    async def log_request(request: Request, call_next):
        start = time.perf_counter()
        response = await call_next(request)
        elapsed_ms = (time.perf_counter() - start) * 1000
        logger.info(
            "%s %s %s %.1fms",
            request.method,
            request.url.path,
            response.status_code,
            elapsed_ms,
        )
        return response


def log_routes(app: FastAPI):
    logger.debug("Registered routes:")
    for route in app.routes:
        if isinstance(route, APIRoute):
            for method in sorted(route.methods):
                logger.debug("%s %s", method, route.path)
