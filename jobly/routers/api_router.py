from fastapi import APIRouter
from jobly.routers import auth, companies, jobs

# Centralized API router hub
# Routers are aggregated here, and main.py only imports this single hub.
api_router = APIRouter()

api_router.include_router(auth.router, tags=["Authentication"])
api_router.include_router(companies.router, tags=["Companies"])
api_router.include_router(jobs.router, tags=["Jobs"])
