import logging

from fastapi import FastAPI

from pricefeed.api.routes import router as api_router
from pricefeed.config import get_settings
from pricefeed.engine import MarketEngine
from pricefeed.providers.loader import get_transport

settings = get_settings()
logging.basicConfig(
    level=settings.log_level,
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
)

app = FastAPI(title="Price Feed API", version="0.1.0")
app.include_router(api_router)


@app.on_event("startup")
async def _startup():
    # One engine per process; the supervisor keeps the feed connected.
    app.state.engine = MarketEngine(settings, get_transport(settings))
    app.state.engine.start()


@app.on_event("shutdown")
async def _shutdown():
    engine = getattr(app.state, "engine", None)
    if engine is not None:
        await engine.stop()


@app.get("/health")
def health():
    engine = getattr(app.state, "engine", None)
    return {
        "status": "ok",
        "app_env": settings.app_env,
        "provider_config": settings.provider,
        "symbols": list(settings.symbols),
        "feed_live": bool(engine and engine.is_live),
    }
