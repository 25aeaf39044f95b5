# post_frontend/__init__.py
from post_frontend.api_client import PostApiClient
from post_frontend.controller import PostPageController
from post_frontend.form import PostForm
from post_frontend.card import PostCard

__all__ = ["PostApiClient", "PostPageController", "PostForm", "PostCard"]
