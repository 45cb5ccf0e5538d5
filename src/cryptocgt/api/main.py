import logging
import traceback
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from starlette.requests import Request
from starlette.responses import JSONResponse

from cryptocgt.api.fx import router as fx_router
from cryptocgt.api.tax import router as tax_router
from cryptocgt.config import settings
from cryptocgt.container import Container

logger = logging.getLogger("cryptocgt.api")


@asynccontextmanager
async def lifespan(app: FastAPI):
    logging.basicConfig(level=settings.log_level)
    container = Container()
    app.state.container = container
    yield
    await container.rate_provider().close()


app = FastAPI(title="cryptocgt", version="0.1.0", lifespan=lifespan)


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    tb = traceback.format_exception(type(exc), exc, exc.__traceback__)
    logger.error("Unhandled error on %s %s:\n%s", request.method, request.url.path, "".join(tb))
    return JSONResponse(status_code=500, content={"detail": str(exc)})


app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(tax_router)
app.include_router(fx_router)


@app.get("/api/health")
async def health():
    return {"status": "ok", "version": "0.1.0"}
