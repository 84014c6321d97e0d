# Authentication module

from alumni_portal.modules.auth.dependencies import (
    AuthContext,
    get_current_account,
    get_current_member,
    get_current_institution,
    ensure_moderator,
)

__all__ = [
    "AuthContext",
    "get_current_account",
    "get_current_member",
    "get_current_institution",
    "ensure_moderator",
]
