from fastapi import APIRouter

from alumni_portal.api.endpoints import admin, auth, health, messages, posts, university, users, workshops

api_router = APIRouter()

api_router.include_router(health.router)
api_router.include_router(university.router, tags=["Universities"])
api_router.include_router(auth.router, tags=["Auth"])
api_router.include_router(users.router, tags=["Users"])
api_router.include_router(posts.router, tags=["Feed"])
api_router.include_router(messages.router)
api_router.include_router(admin.router)
api_router.include_router(workshops.router)
