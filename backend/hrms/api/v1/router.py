from fastapi import APIRouter

from hrms.api.v1.endpoints import employees, health, registration

api_router = APIRouter(prefix="/api/v1")
api_router.include_router(health.router)
api_router.include_router(employees.router)
api_router.include_router(registration.router)
