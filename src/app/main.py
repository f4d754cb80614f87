"""Definition of FastAPI based web service."""

import os
from contextlib import asynccontextmanager
from typing import AsyncIterator, Awaitable, Callable

from fastapi import FastAPI, Request, Response
from fastapi.middleware.cors import CORSMiddleware
from starlette.routing import Mount, Route, WebSocketRoute

import constants
import metrics
import version
from app import routers
from cache.cache_factory import CacheFactory
from configuration import configuration
from log import get_logger
from metrics.utils import setup_provider_metrics
from services.orchestrator import RequestOrchestrator
from services.targets import ConfiguredTargetSource

logger = get_logger(__name__)

logger.info("Initializing app")

if not configuration.is_loaded():
    configuration.load_configuration(
        os.environ.get(
            constants.CONFIG_PATH_ENV_VARIABLE, constants.DEFAULT_CONFIG_PATH
        )
    )

service_name = configuration.configuration.name


# running on FastAPI startup
@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """
    Initialize app resources.

    FastAPI lifespan context: creates summary cache, the request orchestrator
    and target source, starts periodic cleanup of finished requests and stops
    it on shutdown.
    """
    config = configuration.configuration

    cache = CacheFactory.summary_cache(config.summary_cache)
    orchestrator = RequestOrchestrator.from_configuration(config, cache)
    app.state.orchestrator = orchestrator
    app.state.target_source = ConfiguredTargetSource(
        config.targets, timeout=config.orchestrator.provider_timeout
    )
    app.state.default_language = config.default_language

    setup_provider_metrics(config.providers)
    orchestrator.start()
    logger.info("App startup complete")

    yield

    await orchestrator.stop()
    logger.info("App shutdown complete")


app = FastAPI(
    title=f"{service_name} service - OpenAPI",
    summary=f"{service_name} service API specification.",
    description=f"{service_name} service API specification.",
    version=version.__version__,
    license_info={
        "name": "Apache 2.0",
        "url": "https://www.apache.org/licenses/LICENSE-2.0.html",
    },
    servers=[
        {"url": "http://localhost:8080/", "description": "Locally running service"}
    ],
    lifespan=lifespan,
)

cors = configuration.service_configuration.cors

app.add_middleware(
    CORSMiddleware,
    allow_origins=cors.allow_origins,
    allow_credentials=cors.allow_credentials,
    allow_methods=cors.allow_methods,
    allow_headers=cors.allow_headers,
)


@app.middleware("")
async def rest_api_metrics(
    request: Request, call_next: Callable[[Request], Awaitable[Response]]
) -> Response:
    """Middleware with REST API counter update logic."""
    path = request.url.path
    logger.debug("Received request for path: %s", path)

    # ignore paths that are not part of the app routes
    if path not in app_routes_paths:
        return await call_next(request)

    logger.debug("Processing API request for path: %s", path)

    # measure time to handle duration + update histogram
    with metrics.response_duration_seconds.labels(path).time():
        response = await call_next(request)

    # ignore /metrics endpoint that will be called periodically
    if not path.endswith("/metrics"):
        # just update metrics
        metrics.rest_api_calls_total.labels(path, response.status_code).inc()
    return response


logger.info("Including routers")
routers.include_routers(app)

app_routes_paths = [
    route.path
    for route in app.routes
    if isinstance(route, (Mount, Route, WebSocketRoute))
]
