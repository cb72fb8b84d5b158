"""Post feed: public paginated listing and admin-only deletion."""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, Query, Request

from rbac_api.api.deps import authorize, get_post_repository
from rbac_api.core.errors import ResourceNotFound
from rbac_api.schemas.auth import CurrentUser, Role
from rbac_api.schemas.errors import ErrorResponse
from rbac_api.schemas.posts import DeletePostResponse, PostsPage
from rbac_api.services.pagination import paginate, parse_positive_int
from rbac_api.services.repository import PostRepository

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("", response_model=PostsPage, summary="Get paginated posts")
def list_posts(
    request: Request,
    posts: Annotated[PostRepository, Depends(get_post_repository)],
    page: Annotated[str | None, Query(description="Page number (default 1)")] = None,
    limit: Annotated[
        str | None, Query(description="Number of records per page (default 10)")
    ] = None,
) -> PostsPage:
    """Retrieves paginated posts (public endpoint, no authentication required)."""
    default_limit = request.app.state.settings.DEFAULT_PAGE_SIZE
    result = paginate(
        posts.list(),
        page=parse_positive_int(page, 1),
        limit=parse_positive_int(limit, default_limit),
    )
    return PostsPage(
        currentPage=result.current_page,
        totalPages=result.total_pages,
        totalPosts=result.total_items,
        posts=result.items,
    )


@router.delete(
    "/{post_id}",
    response_model=DeletePostResponse,
    responses={
        401: {"model": ErrorResponse, "description": "Invalid or missing token"},
        403: {"model": ErrorResponse, "description": "Insufficient permissions"},
        404: {"model": ErrorResponse, "description": "Post not found"},
    },
    summary="Delete a post",
)
def delete_post(
    post_id: str,
    admin: Annotated[CurrentUser, Depends(authorize(Role.ADMIN))],
    posts: Annotated[PostRepository, Depends(get_post_repository)],
) -> DeletePostResponse:
    """Deletes a post by ID (admin only)."""
    deleted = posts.remove_by_id(post_id)
    if deleted is None:
        raise ResourceNotFound()
    logger.info("Post %s deleted by %s", post_id, admin.id)
    return DeletePostResponse(deletedPost=deleted)
