"""API routes, mounted under settings.API_PREFIX."""

from fastapi import APIRouter

from app.api.routes import auth, bookings, categories, events, health

router = APIRouter()
router.include_router(auth.router, prefix="/auth", tags=["auth"])
router.include_router(categories.router, prefix="/categories", tags=["categories"])
router.include_router(events.router, prefix="/events", tags=["events"])
router.include_router(bookings.router, prefix="/bookings", tags=["bookings"])
router.include_router(health.router, prefix="/health", tags=["health"])
