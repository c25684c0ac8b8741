# =============================================================================
# app/ - FastAPI Application Package
# =============================================================================
# HTTP layer of FileNest:
# - main.py: App entry point, lifespan, middleware, error handlers
# - config.py: Settings loaded from environment / .env
# - dependencies.py: Wiring of stores and services for route handlers
# - exceptions.py: Error taxonomy and its JSON rendering
# - auth/, routers/: Endpoints grouped by feature
#
# Route handlers stay thin and delegate to core/services.
# =============================================================================
