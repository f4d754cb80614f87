"""REST API routers."""

from fastapi import FastAPI

from app.endpoints import (
    actions,
    cache,
    chat,
    contexts,
    health,
    info,
    metrics,
    root,
    summaries,
    targets,
)


def include_routers(app: FastAPI) -> None:
    """Include FastAPI routers for different endpoints.

    Args:
        app: The `FastAPI` app instance.
    """
    app.include_router(root.router)

    app.include_router(info.router, prefix="/v1")
    app.include_router(targets.router, prefix="/v1")
    app.include_router(summaries.router, prefix="/v1")
    app.include_router(chat.router, prefix="/v1")
    app.include_router(cache.router, prefix="/v1")
    app.include_router(contexts.router, prefix="/v1")
    app.include_router(actions.router, prefix="/v1")

    # health and metrics endpoints are not versioned
    app.include_router(health.router)
    app.include_router(metrics.router)
