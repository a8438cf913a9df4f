# routes/__init__.py
from fastapi import APIRouter
from globetrotter.routes.users import auth, password_reset
from globetrotter.routes.trips import catalog, places, trip_routes

api_router = APIRouter()

# User routes
api_router.include_router(auth.router)
api_router.include_router(password_reset.router)

# Trip routes; static /trips/* paths before /trips/{trip_id}
api_router.include_router(catalog.router)
api_router.include_router(places.router)
api_router.include_router(trip_routes.router)
