# post_frontend/card.py
from datetime import datetime
from typing import Callable, Optional

from post_frontend.config import DATE_FORMAT
from post_frontend.models.schemas import Post


def format_date(timestamp: str) -> str:
    """Render an ISO-8601 timestamp as a date; unparseable values are shown as-is."""
    try:
        return datetime.fromisoformat(timestamp).strftime(DATE_FORMAT)
    except ValueError:
        return timestamp


class PostCard:
    """
    One post in the grid.

    Edit hands the full record to on_edit. Delete is confirmed in the
    browser with delete_confirmation and posts only the id back.
    """

    def __init__(self, post: Post, on_edit: Optional[Callable[[Post], None]] = None):
        self.post = post
        self.on_edit = on_edit

    @property
    def name(self) -> str:
        return self.post.name

    @property
    def description(self) -> str:
        return self.post.description

    @property
    def image_url(self) -> Optional[str]:
        return self.post.image_url

    @property
    def created_label(self) -> str:
        return f"Created: {format_date(self.post.created_at)}"

    @property
    def show_updated(self) -> bool:
        return self.post.was_edited

    @property
    def updated_label(self) -> str:
        return f"Updated: {format_date(self.post.updated_at)}"

    @property
    def delete_confirmation(self) -> str:
        return f'Are you sure you want to delete "{self.post.name}"?'

    @property
    def delete_action(self) -> str:
        return f"/posts/{self.post.id}/delete"

    def edit(self):
        if self.on_edit:
            self.on_edit(self.post)
