from __future__ import annotations

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.middleware.base import BaseHTTPMiddleware

from app.actions import ask_ai, send_chat_message, submit_contact_form
from app.config import get_settings
from app.logging import default_recorder, json_logger_middleware
from app.models import QAInput
from api.models import AskRequest, ChatRequest, ErrorEnvelope

settings = get_settings()

app = FastAPI(title=settings.APP_NAME, version=settings.APP_VERSION)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)
app.add_middleware(BaseHTTPMiddleware, dispatch=json_logger_middleware())


# ------------ Routes ------------


@app.get("/health")
def health() -> dict:
    return {"ok": True, "service": settings.APP_NAME, "version": settings.APP_VERSION}


@app.post("/api/contact")
async def contact(request: Request):
    # Validation failures are a normal 200 response carrying per-field errors
    form = await request.form()
    state = await submit_contact_form(None, form)
    return state.model_dump(exclude_none=True)


@app.post("/api/ask")
async def ask(payload: AskRequest):
    result = await ask_ai(QAInput(question=payload.question))
    return result.model_dump()


@app.post("/api/chat")
async def chat(payload: ChatRequest):
    result = await send_chat_message(payload.current_message, payload.history)
    return result.model_dump()


@app.get("/")
def root():
    return {"message": f"{settings.APP_NAME}. See /health, POST /api/contact, /api/ask, /api/chat"}


# ------------ Exception Handlers ------------


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    env = ErrorEnvelope(
        code=str(exc.status_code),
        message=str(exc.detail or "HTTP error"),
        details={"path": str(request.url)},
    )
    return JSONResponse(
        status_code=exc.status_code, content=env.model_dump(), headers=getattr(exc, "headers", None)
    )


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    env = ErrorEnvelope(
        code="invalid_request",
        message="Request body failed validation",
        details={"path": str(request.url), "errors": jsonable_errors(exc)},
    )
    return JSONResponse(status_code=422, content=env.model_dump())


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception):
    default_recorder.record(
        {
            "event": "http.unhandled_error",
            "level": "error",
            "path": request.url.path,
            "error_type": type(exc).__name__,
            "error": str(exc),
        }
    )
    env = ErrorEnvelope(
        code="internal_error",
        message="Unexpected server error",
        details={"path": str(request.url)},
    )
    return JSONResponse(status_code=500, content=env.model_dump())


def jsonable_errors(exc: RequestValidationError) -> list:
    return [
        {"loc": [str(p) for p in err.get("loc", ())], "msg": err.get("msg", "")}
        for err in exc.errors()
    ]
