"""
Main API router that includes all route modules.
"""
from fastapi import APIRouter
from app.api.routes import tutorials, bookings, stats, categories, users

api_router = APIRouter()

# Include all route modules
api_router.include_router(tutorials.router)
api_router.include_router(bookings.router)
api_router.include_router(stats.router)
api_router.include_router(categories.router)
api_router.include_router(users.router)
