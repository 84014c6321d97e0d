# Re-export all models for convenient imports
from alumni_portal.models.institution import Institution, slugify
from alumni_portal.models.member import Member, MemberRole, MemberStatus, MODERATOR_ROLES
from alumni_portal.models.post import Post, PostType, Comment, post_likes
from alumni_portal.models.workshop import Workshop, workshop_attendees
from alumni_portal.models.message import DirectMessage

__all__ = [
    # Accounts
    "Institution",
    "slugify",
    "Member",
    "MemberRole",
    "MemberStatus",
    "MODERATOR_ROLES",
    # Feed
    "Post",
    "PostType",
    "Comment",
    "post_likes",
    # Events
    "Workshop",
    "workshop_attendees",
    # Messaging
    "DirectMessage",
]
