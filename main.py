from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from starlette.middleware.cors import CORSMiddleware
from core.config import settings
from core.errors import ValidationError, InvalidStateError, NotFoundError, StoreUnavailableError
from core.logging import setup_logging

from member.router import member_router
from pattern.router import pattern_router
from override.router import override_router
from timeoff.router import timeoff_router
from approval.router import approval_router
from resolution.router import availability_router
from team.router import team_router
import models_bootstrap

setup_logging("availability", settings.LOG_LEVEL, settings.LOG_DIR)

openapi_tags = [
    {
        "name": "Availability",
        "description": "Resolved availability per worker and date",
    },
    {
        "name": "Health Checks",
        "description": "Application health checks",
    }
]

app = FastAPI(title=settings.APP_NAME, openapi_tags=openapi_tags)

if settings.cors_origins:
    app.add_middleware(
        CORSMiddleware,
        allow_origins=[
            str(origin).strip("/") for origin in settings.cors_origins
        ],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )


@app.exception_handler(ValidationError)
def validation_error_handler(request: Request, exc: ValidationError):
    return JSONResponse(status_code=422, content={"detail": exc.detail})


@app.exception_handler(InvalidStateError)
def invalid_state_handler(request: Request, exc: InvalidStateError):
    code = 404 if isinstance(exc, NotFoundError) else 409
    return JSONResponse(status_code=code, content={"detail": exc.detail})


@app.exception_handler(StoreUnavailableError)
def store_unavailable_handler(request: Request, exc: StoreUnavailableError):
    return JSONResponse(status_code=503, content={"detail": exc.detail})


app.include_router(member_router, prefix="/api")
app.include_router(pattern_router, prefix="/api")
app.include_router(override_router, prefix="/api")
app.include_router(timeoff_router, prefix="/api")
app.include_router(approval_router, prefix="/api")
app.include_router(availability_router, prefix="/api")
app.include_router(team_router, prefix="/api")


@app.get("/health", tags=['Health Checks'])
def read_root():
    return {"health": "true"}


def run():
    import uvicorn
    uvicorn.run("main:app", host="0.0.0.0", port=8000)


if __name__ == "__main__":
    run()
