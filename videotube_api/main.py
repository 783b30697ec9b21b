import logging

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from contextlib import asynccontextmanager
from videotube_api.db.mongo import close_client, get_client

from videotube_api.core.logger import setup_json_logging, shutdown_logging
from videotube_api.core.sentry import init_sentry
from videotube_api.core.config import settings
from videotube_api.core.middleware import RequestContextMiddleware

from videotube_api.api.v1.auth import router as auth_router
from videotube_api.api.v1.users import router as users_router
from videotube_api.api.v1.channels import router as channels_router
from videotube_api.api.v1.videos import router as videos_router
from videotube_api.api.v1.comments import router as comments_router
from videotube_api.api.v1.debug import include_debug_routes


@asynccontextmanager
async def lifespan(app: FastAPI):
    # logging before anything else
    setup_json_logging(service=settings.app_name)
    init_sentry(settings.sentry_dsn, environment=settings.env)

    await get_client()

    try:
        yield
    finally:
        await close_client()
        shutdown_logging()


app = FastAPI(title="VideoTube API", lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=[settings.client_url],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)
# trace_id + JSON access log
app.add_middleware(RequestContextMiddleware)

# the access middleware already logs every request
logging.getLogger("uvicorn.access").setLevel("WARNING")


@app.exception_handler(StarletteHTTPException)
async def http_error_handler(request: Request, exc: StarletteHTTPException):
    return JSONResponse(
        status_code=exc.status_code,
        content={"success": False, "message": exc.detail},
        headers=getattr(exc, "headers", None),
    )


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request,
                                   exc: RequestValidationError):
    return JSONResponse(
        status_code=400,
        content={
            "success": False,
            "message": "validation_error",
            "errors": jsonable_encoder(exc.errors()),
        },
    )


include_debug_routes(app)


@app.get("/health")
def health():
    return {"success": True, "message": "Server is running"}


app.include_router(auth_router)
app.include_router(users_router)
app.include_router(channels_router)
app.include_router(videos_router)
app.include_router(comments_router)
