"""FastAPI application for learner achievement progress."""

import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded

from config import CORS_ORIGINS, LOG_LEVEL, validate_config
from routers import achievements, activity


logging.basicConfig(
    level=LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

validate_config()

app = FastAPI(title="Course Progress API")

app.state.limiter = activity.limiter
app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)

app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(achievements.router, tags=["achievements"])
app.include_router(activity.router, tags=["activity"])


@app.get("/health")
def health():
    return {"status": "ok"}
