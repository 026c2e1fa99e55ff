"""Feed routes."""
from __future__ import annotations

from fastapi import APIRouter, Depends, status

from ..models import Comment, Post, User
from ..schemas import (
    AuthorSummary,
    PostCommentCreate,
    PostCommentResponse,
    PostCreate,
    PostFeedResponse,
    PostResponse,
)
from ..services import ServiceContainer, get_current_user, get_services

router = APIRouter(prefix="/posts", tags=["posts"])


def _author(user: User) -> AuthorSummary:
    return AuthorSummary(id=user.id, full_name=user.full_name, major=user.major)


def _to_comment_response(post_id: str, comment: Comment) -> PostCommentResponse:
    return PostCommentResponse(
        id=comment.id,
        post_id=post_id,
        author=_author(comment.author),
        content=comment.content,
        timestamp=comment.timestamp,
    )


def _to_post_response(post: Post, comments: tuple[Comment, ...]) -> PostResponse:
    return PostResponse(
        id=post.id,
        author=_author(post.author),
        content=post.content,
        timestamp=post.timestamp,
        comment_count=len(comments),
        comments=[_to_comment_response(post.id, comment) for comment in comments],
    )


@router.get("/", response_model=PostFeedResponse)
async def feed_endpoint(
    current_user: User = Depends(get_current_user),
    services: ServiceContainer = Depends(get_services),
) -> PostFeedResponse:
    feed = services.feed
    return PostFeedResponse(items=[_to_post_response(post, feed.comments(post.id)) for post in feed.list_posts()])


@router.post("/", response_model=PostResponse, status_code=status.HTTP_201_CREATED)
async def create_post_endpoint(
    payload: PostCreate,
    current_user: User = Depends(get_current_user),
    services: ServiceContainer = Depends(get_services),
) -> PostResponse:
    post = services.feed.add_post(payload.content, current_user)
    return _to_post_response(post, ())


@router.get("/{post_id}", response_model=PostResponse)
async def post_detail_endpoint(
    post_id: str,
    current_user: User = Depends(get_current_user),
    services: ServiceContainer = Depends(get_services),
) -> PostResponse:
    post = services.feed.get_post(post_id)
    return _to_post_response(post, services.feed.comments(post.id))


@router.post("/{post_id}/comments", response_model=PostCommentResponse, status_code=status.HTTP_201_CREATED)
async def create_comment_endpoint(
    post_id: str,
    payload: PostCommentCreate,
    current_user: User = Depends(get_current_user),
    services: ServiceContainer = Depends(get_services),
) -> PostCommentResponse:
    comment = services.feed.add_comment(post_id, payload.content, current_user)
    return _to_comment_response(post_id, comment)


__all__ = ["router"]
