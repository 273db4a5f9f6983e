# API routes module
from app.api.routes.health import router as health_router
from app.api.routes.leaf import router as leaf_router
from app.api.routes.pest import router as pest_router
from app.api.routes.soil import router as soil_router

__all__ = ["health_router", "leaf_router", "pest_router", "soil_router"]
