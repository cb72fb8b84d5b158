"""Request/response schemas for post endpoints."""

from pydantic import BaseModel, Field


class Post(BaseModel):
    """A post in the feed."""

    id: str = Field(..., min_length=1, description="Post ID", examples=["1"])
    title: str = Field(..., description="Post title", examples=["First Post"])
    content: str = Field(..., description="Post content", examples=["Hello World!"])


class PostsPage(BaseModel):
    """One page of posts with pagination metadata."""

    message: str = Field(default="Posts retrieved successfully")
    currentPage: int
    totalPages: int
    totalPosts: int
    posts: list[Post]


class DeletePostResponse(BaseModel):
    message: str = Field(default="Post deleted successfully")
    deletedPost: Post
