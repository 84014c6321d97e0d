from alumni_portal.schemas.base import CamelModel, MessageResponse
from alumni_portal.schemas.university import (
    UniversityRegister,
    UniversityLogin,
    UniversityProfileUpdate,
    UniversityResponse,
    UniversitySummary,
    UniversityAuthResponse,
    UniversityUpdateResponse,
)
from alumni_portal.schemas.member import (
    MemberSignup,
    MemberLogin,
    ProfileUpdate,
    MemberResponse,
    MemberDetailResponse,
    MemberAuthResponse,
    MemberUpdateResponse,
    DirectoryEntry,
    SearchResult,
)
from alumni_portal.schemas.post import (
    AuthorSummary,
    PostCreate,
    PostUpdate,
    PostResponse,
    PostEnvelope,
    LikeResponse,
    CommentCreate,
    CommentResponse,
    CommentEnvelope,
)
from alumni_portal.schemas.workshop import (
    WorkshopCreate,
    WorkshopResponse,
    WorkshopEnvelope,
)
from alumni_portal.schemas.message import (
    DirectMessageCreate,
    DirectMessageResponse,
    DirectMessageEnvelope,
)
