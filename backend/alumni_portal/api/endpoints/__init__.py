# API endpoints
from . import admin, auth, health, messages, posts, university, users, workshops

__all__ = ["admin", "auth", "health", "messages", "posts", "university", "users", "workshops"]
