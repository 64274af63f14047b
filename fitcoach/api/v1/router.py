from fastapi import APIRouter
from fitcoach.api.v1.endpoints import reminders, notifications, wearables, coach

# ============================================================
# Main API v1 Router
# ============================================================

api_router = APIRouter()

# Routes define their own prefixes (/reminders, /notifications, ...)
api_router.include_router(reminders.router)
api_router.include_router(notifications.router)
api_router.include_router(wearables.router)
api_router.include_router(coach.router)
