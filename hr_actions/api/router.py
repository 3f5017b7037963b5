from fastapi import APIRouter

from hr_actions.api.employees import employees_router
from hr_actions.api.requests import requests_router

api_router = APIRouter()
api_router.include_router(requests_router)
api_router.include_router(employees_router)
