"""
REST API main application.
Entry point for the FastAPI REST server.
"""

from fastapi import FastAPI

from rest_api.core.cors import configure_cors
from rest_api.core.exception_handlers import register_exception_handlers
from rest_api.core.lifespan import lifespan
from rest_api.core.middlewares import register_middlewares
from rest_api.routers.analytics import router as analytics_router
from rest_api.routers.auth import router as auth_router
from rest_api.routers.inventory import router as inventory_router
from rest_api.routers.orders import router as orders_router
from rest_api.routers.public import health_router
from rest_api.routers.recipes import router as recipes_router
from rest_api.routers.subscriptions import router as subscriptions_router
from rest_api.routers.tables import router as tables_router
from rest_api.routers.users import router as users_router
from shared.config.settings import settings
from shared.security.rate_limit import limiter


# Create FastAPI application
app = FastAPI(
    title="Recipe Master REST API",
    description="Restaurant management API: orders, tables, inventory, recipes and subscriptions",
    version="1.0.0",
    lifespan=lifespan,
)

# Rate limiting
app.state.limiter = limiter

register_exception_handlers(app)
register_middlewares(app)
configure_cors(app)


# =============================================================================
# Routers
# =============================================================================

app.include_router(health_router)
app.include_router(auth_router)
app.include_router(users_router)
app.include_router(orders_router)
app.include_router(tables_router)
app.include_router(inventory_router)
app.include_router(recipes_router)
app.include_router(analytics_router)
app.include_router(subscriptions_router)


def main() -> None:
    import uvicorn

    uvicorn.run(
        "rest_api.main:app",
        host="0.0.0.0",
        port=settings.rest_api_port,
        reload=settings.debug and settings.environment == "development",
    )


if __name__ == "__main__":
    main()
