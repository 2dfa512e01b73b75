from fastapi import FastAPI

from likedsongs.api.auth.routes import router as auth_router
from likedsongs.core import configure_logging

configure_logging()

app = FastAPI(
    title="Liked Songs Organizer token helper",
    version="0.1.0",
    description="One-shot Spotify OAuth helper that mints the refresh token.",
)

app.include_router(auth_router, prefix="/auth", tags=["auth"])
