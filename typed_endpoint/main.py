"""FastAPI application entrypoint for the typed-endpoint demo."""

from fastapi import FastAPI

from typed_endpoint.api.items import router as items_router
from typed_endpoint.core.errors import register_error_handlers

app = FastAPI(title="typed-endpoint demo")
register_error_handlers(app)
app.include_router(items_router)


@app.get("/health")
def health() -> dict[str, str]:
    """Health check stub endpoint for service readiness."""
    return {"status": "ok"}
