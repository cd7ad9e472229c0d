"""
examples/main.py

Minimal FastAPI app wired with request logging.

Run with:
    uvicorn examples.main:app
"""
from fastapi import FastAPI
from fastapi.responses import PlainTextResponse

from structhttplog import Recoverer, RequestLoggingMiddleware, configure_logging
from structhttplog.config import settings

logger = configure_logging(settings)

app = FastAPI(title="structhttplog example")

# ── Middleware ────────────────────────────────────────────
# Last added runs outermost: the recoverer must sit inside the logger.

app.add_middleware(Recoverer)
app.add_middleware(RequestLoggingMiddleware, logger=logger, options=settings.options())


# ── Routes ───────────────────────────────────────────────

@app.get("/")
async def root() -> PlainTextResponse:
    return PlainTextResponse("root.")


@app.get("/widgets")
async def widgets() -> PlainTextResponse:
    return PlainTextResponse("not found", status_code=404)


@app.get("/panic")
async def panic() -> None:
    raise RuntimeError("boom")
