# vigil/main.py
from fastapi import FastAPI

from vigil.api.monitors import router as monitors_router
from vigil.runner import MonitorRegistry


def create_app(registry: MonitorRegistry) -> FastAPI:
    """Build the status API around an already populated registry."""
    app = FastAPI(title="Vigil", version="0.1.0")
    app.state.registry = registry

    app.include_router(monitors_router)

    @app.get("/health")
    async def health():
        return {"status": "healthy", "monitors": len(registry)}

    return app
