"""Application wiring: lifespan, CORS, middlewares, error handlers."""
