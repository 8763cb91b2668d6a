import logging
from contextlib import asynccontextmanager
from datetime import datetime, timezone
from typing import List

from fastapi import Depends, FastAPI, HTTPException, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.routing import APIRoute
from starlette.exceptions import HTTPException as StarletteHTTPException

from . import assistant, leave
from .config import get_settings
from .database import InMemoryLeaveStore, LeaveStore, seed_sample_data
from .errors import LeavePortalError
from .schemas import (ChatMessageIn, ChatReply, LeaveBalance, LeaveDecisionIn, LeaveRequest,
                      LeaveRequestIn, LeaveStatistics, TeamRequest, User)

logger = logging.getLogger(__name__)
settings = get_settings()


def configure_logging(level: str = settings.log_level):
    logging.basicConfig(level=level.upper(), format="%(asctime)s %(levelname)s %(name)s: %(message)s")


configure_logging()

# Initialize the in-memory store & seed demo data on import
_store = InMemoryLeaveStore()
if settings.seed_demo_data:
    seed_sample_data(_store)


def get_store() -> LeaveStore:
    return _store


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("%s %s ready. Available endpoints:", app.title, app.version)
    for route in app.routes:
        if isinstance(route, APIRoute):
            logger.info("  %-6s %s", ",".join(sorted(route.methods)), route.path)
    yield


app = FastAPI(title=settings.app_title, version=settings.app_version, lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


def jsonable_errors(exc: RequestValidationError):
    return [{"loc": list(err.get("loc", ())), "msg": err.get("msg")} for err in exc.errors()]


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError):
    # Malformed or missing fields are client errors like any other validation failure
    logger.info("Invalid payload for %s %s: %s", request.method, request.url.path, exc.errors())
    return JSONResponse(status_code=400,
                        content={"error": "Invalid request", "detail": "Invalid request", "errors": jsonable_errors(exc)})


@app.exception_handler(StarletteHTTPException)
async def http_error_handler(request: Request, exc: StarletteHTTPException):
    # The web client reads the message from "error"; "detail" is kept for FastAPI tooling
    return JSONResponse(status_code=exc.status_code, content={"error": exc.detail, "detail": exc.detail},
                        headers=getattr(exc, "headers", None))


def _http_error(e: LeavePortalError) -> HTTPException:
    return HTTPException(status_code=e.status_code, detail=e.detail)


@app.get("/health")
def health():
    return {"status": "OK", "timestamp": datetime.now(timezone.utc)}


@app.get("/api/user/{user_id}", response_model=User)
def get_user(user_id: int, store: LeaveStore = Depends(get_store)):
    user = store.get_user(user_id)
    if not user: raise HTTPException(status_code=404, detail="User not found")
    return user


@app.get("/api/leave-balance/{user_id}", response_model=LeaveBalance)
def get_leave_balance(user_id: int, store: LeaveStore = Depends(get_store)):
    balance = store.get_balance(user_id)
    if not balance: raise HTTPException(status_code=404, detail="Balance not found")
    return balance


@app.get("/api/leave-requests/{user_id}", response_model=List[LeaveRequest])
def get_leave_requests(user_id: int, store: LeaveStore = Depends(get_store)):
    return leave.list_user_requests(store, user_id)


@app.post("/api/leave-requests", response_model=LeaveRequest, status_code=201)
def create_leave_request(payload: LeaveRequestIn, store: LeaveStore = Depends(get_store)):
    try:
        return leave.submit(store, payload.user_id, payload.type, payload.start_date, payload.end_date,
                            days=payload.days, reason=payload.reason)
    except LeavePortalError as e:
        raise _http_error(e)


@app.get("/api/team-requests/{manager_id}", response_model=List[TeamRequest])
def get_team_requests(manager_id: int, store: LeaveStore = Depends(get_store)):
    return leave.team_requests(store, manager_id)


@app.patch("/api/leave-requests/{request_id}", response_model=LeaveRequest)
def update_leave_status(request_id: int, payload: LeaveDecisionIn, store: LeaveStore = Depends(get_store)):
    try:
        return leave.decide(store, request_id, payload.status, payload.manager_id)
    except LeavePortalError as e:
        raise _http_error(e)


@app.post("/api/ai-chat", response_model=ChatReply)
def ai_chat(payload: ChatMessageIn, store: LeaveStore = Depends(get_store)):
    if not payload.message or not payload.user_id:
        raise HTTPException(status_code=400, detail="Message and userId are required")
    try:
        content = assistant.generate_reply(payload.message, payload.user_id, store)
    except LeavePortalError as e:
        raise _http_error(e)
    return ChatReply(content=content, timestamp=datetime.now(timezone.utc))


@app.get("/api/statistics/{user_id}", response_model=LeaveStatistics)
def get_statistics(user_id: int, store: LeaveStore = Depends(get_store)):
    return leave.user_statistics(store, user_id)
