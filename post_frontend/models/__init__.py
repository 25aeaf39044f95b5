# post_frontend/models/__init__.py
from post_frontend.models.schemas import Post, CreatePostDto, UpdatePostDto, SortOrder

__all__ = ["Post", "CreatePostDto", "UpdatePostDto", "SortOrder"]
