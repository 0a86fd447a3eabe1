"""FastAPI application entrypoint."""

from __future__ import annotations

from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.api import matches, ops, profile, sports
from app.api.errors import install_error_handlers
from app.api.middleware_request_id import RequestIdMiddleware
from app.infra import postgres
from app.obs import init as obs_init
from app.settings import settings

DEV_ORIGINS = [
	"http://localhost:3000",
	"http://127.0.0.1:3000",
	"http://localhost:4321",
	"http://127.0.0.1:4321",
]


@asynccontextmanager
async def lifespan(app: FastAPI):
	await postgres.init_pool()
	try:
		yield
	finally:
		await postgres.close_pool()


app = FastAPI(title="BuddyFinder API", lifespan=lifespan)
install_error_handlers(app)

allow_origins = list(settings.cors_allow_origins)
# Starlette disallows wildcard '*' with allow_credentials=True.
if not allow_origins or "*" in allow_origins:
	allow_origins = DEV_ORIGINS if settings.is_dev() else [origin for origin in allow_origins if origin != "*"]

app.add_middleware(
	CORSMiddleware,
	allow_origins=allow_origins,
	allow_credentials=True,
	allow_methods=["*"],
	allow_headers=["*"],
)

obs_init(app)

# Ensure every request carries an X-Request-Id and make it available on request.state
app.add_middleware(RequestIdMiddleware)

app.include_router(matches.router, tags=["matches"])
app.include_router(profile.router, tags=["profile"])
app.include_router(sports.router, tags=["sports"])
app.include_router(ops.router, tags=["ops"])
