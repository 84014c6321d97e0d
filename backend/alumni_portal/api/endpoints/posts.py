"""
Feed: posts, likes and comments.

Posts are scoped to the author's university, copied at creation. Editing or
deleting a post is open to its author and to moderators of its university.
"""

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, delete
from sqlalchemy.orm import selectinload
from typing import List

from alumni_portal.core.database import get_db, utcnow
from alumni_portal.core.exceptions import NotFoundError
from alumni_portal.core.logging_config import logger
from alumni_portal.models.member import Member
from alumni_portal.models.post import Comment, Post, PostType, post_likes
from alumni_portal.modules.auth.dependencies import (
    AuthContext,
    ensure_moderator,
    get_current_account,
    get_current_member,
)
from alumni_portal.schemas.base import MessageResponse
from alumni_portal.schemas.post import (
    CommentCreate,
    CommentEnvelope,
    CommentResponse,
    LikeResponse,
    PostCreate,
    PostEnvelope,
    PostResponse,
    PostUpdate,
)

router = APIRouter()


async def get_post_or_404(db: AsyncSession, post_id: str) -> Post:
    """Load a post with author and likes"""
    result = await db.execute(
        select(Post)
        .options(selectinload(Post.author), selectinload(Post.likes))
        .where(Post.id == post_id)
    )
    post = result.scalar_one_or_none()
    if not post:
        raise NotFoundError("Post", post_id)
    return post


async def ensure_can_modify(db: AsyncSession, context: AuthContext, post: Post) -> None:
    """Author, or a moderator of the post's university"""
    if context.is_member and context.account_id == post.author_id:
        return
    await ensure_moderator(db, context, post.university_id)


# ==================== Posts ====================

@router.post("/posts", response_model=PostEnvelope, status_code=status.HTTP_201_CREATED)
async def create_post(
    payload: PostCreate,
    member: Member = Depends(get_current_member),
    db: AsyncSession = Depends(get_db)
):
    """Create a post in the author's university feed"""
    post = Post(
        title=payload.title,
        content=payload.content,
        type=payload.type or PostType.GENERAL,
        image=payload.image,
        author=member,
        university_id=member.university_id,
        likes=[],
    )
    db.add(post)
    await db.commit()

    logger.info(f"[Posts] {member.id} created {post.type.value} post {post.id}")
    return {"message": "Post created", "post": post}


@router.get("/posts/{university_id}", response_model=List[PostResponse])
async def list_posts(university_id: str, db: AsyncSession = Depends(get_db)):
    """University feed, newest first"""
    result = await db.execute(
        select(Post)
        .options(selectinload(Post.author), selectinload(Post.likes))
        .where(Post.university_id == university_id)
        .order_by(Post.created_at.desc())
    )
    return result.scalars().all()


@router.put("/posts/{post_id}", response_model=PostEnvelope)
async def update_post(
    post_id: str,
    payload: PostUpdate,
    context: AuthContext = Depends(get_current_account),
    db: AsyncSession = Depends(get_db)
):
    """Edit title, content, type or image"""
    post = await get_post_or_404(db, post_id)
    await ensure_can_modify(db, context, post)

    for field, value in payload.model_dump(exclude_unset=True, exclude_none=True).items():
        setattr(post, field, value)
    post.updated_at = utcnow()
    await db.commit()

    return {"message": "Post updated", "post": post}


@router.delete("/posts/{post_id}", response_model=MessageResponse)
async def delete_post(
    post_id: str,
    context: AuthContext = Depends(get_current_account),
    db: AsyncSession = Depends(get_db)
):
    """Delete a post together with its comments and likes"""
    post = await get_post_or_404(db, post_id)
    await ensure_can_modify(db, context, post)

    await db.execute(delete(Comment).where(Comment.post_id == post.id))
    await db.execute(delete(post_likes).where(post_likes.c.post_id == post.id))
    await db.execute(delete(Post).where(Post.id == post.id))
    await db.commit()

    logger.info(f"[Posts] Post {post_id} deleted by {context.kind} {context.account_id}")
    return {"message": "Post deleted"}


@router.post("/posts/{post_id}/like", response_model=LikeResponse)
async def toggle_like(
    post_id: str,
    member: Member = Depends(get_current_member),
    db: AsyncSession = Depends(get_db)
):
    """Like a post, or take the like back if already liked"""
    post = await get_post_or_404(db, post_id)

    existing = next((m for m in post.likes if m.id == member.id), None)
    if existing is not None:
        post.likes.remove(existing)
        liked = False
    else:
        post.likes.append(member)
        liked = True
    await db.commit()

    return {
        "message": "Post liked" if liked else "Like removed",
        "liked": liked,
        "likes_count": len(post.likes),
    }


# ==================== Comments ====================

@router.post("/comments", response_model=CommentEnvelope, status_code=status.HTTP_201_CREATED)
async def add_comment(
    payload: CommentCreate,
    member: Member = Depends(get_current_member),
    db: AsyncSession = Depends(get_db)
):
    """Comment on a post"""
    post = await db.get(Post, payload.post_id)
    if not post:
        raise NotFoundError("Post", payload.post_id)

    comment = Comment(content=payload.content, author=member, post_id=post.id)
    db.add(comment)
    await db.commit()

    return {"message": "Comment added", "comment": comment}


@router.get("/comments/{post_id}", response_model=List[CommentResponse])
async def list_comments(post_id: str, db: AsyncSession = Depends(get_db)):
    """Comments on a post, newest first"""
    result = await db.execute(
        select(Comment)
        .options(selectinload(Comment.author))
        .where(Comment.post_id == post_id)
        .order_by(Comment.created_at.desc())
    )
    return result.scalars().all()
