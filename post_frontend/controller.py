# post_frontend/controller.py
import logging
from typing import List, Optional

from post_frontend.api_client import PostApiClient
from post_frontend.card import PostCard
from post_frontend.errors import PostClientError
from post_frontend.form import PostForm
from post_frontend.models.schemas import Post, CreatePostDto, UpdatePostDto, SortOrder

logger = logging.getLogger(__name__)


class PostPageController:
    """
    State and commands behind the post management page.

    Owns the loaded list, the search/sort query, the create/edit modal and
    the page-level error. Every mutation is followed by a full reload of the
    list; nothing is patched locally.
    """

    def __init__(self, client: PostApiClient):
        self.client = client
        self.posts: List[Post] = []
        self.loading = True
        self.error: Optional[str] = None
        self.search = ''
        self.sort: SortOrder = 'asc'
        self.show_form = False
        self.editing_post: Optional[Post] = None
        self.form = PostForm()
        self._request_seq = 0

    # --- 목록 로딩 ---
    async def load_posts(self):
        """Reload the list for the current query; only the newest request's result is applied."""
        self._request_seq += 1
        seq = self._request_seq
        self.loading = True
        self.error = None
        try:
            posts = await self.client.list_posts(self.search or None, self.sort)
            if seq == self._request_seq:
                self.posts = posts
            else:
                logger.info(f"Discarding stale posts response (request {seq}, latest {self._request_seq})")
        except PostClientError as e:
            logger.error(f"Error loading posts: {e}")
            if seq == self._request_seq:
                self.error = str(e)
        finally:
            if seq == self._request_seq:
                self.loading = False

    async def apply_query(self, search: str, sort: SortOrder):
        """Set both query parameters and reload once."""
        self.search = search
        self.sort = sort
        await self.load_posts()

    # --- 변경 작업 ---
    async def create(self, dto: CreatePostDto):
        try:
            await self.client.create_post(dto)
        except PostClientError as e:
            self._report(e, 'create')
            raise
        self.show_form = False
        self.error = None
        await self.load_posts()

    async def update(self, dto: UpdatePostDto):
        if self.editing_post is None:
            return
        try:
            await self.client.update_post(self.editing_post.id, dto)
        except PostClientError as e:
            self._report(e, 'update')
            raise
        self._set_editing_target(None)
        self.error = None
        await self.load_posts()

    async def delete(self, post_id: int) -> bool:
        """
        Delete one post and reload the list once.

        Returns False only when the delete itself failed. A failed reload
        after a successful delete is left on the page error by load_posts.
        """
        try:
            await self.client.delete_post(post_id)
        except PostClientError as e:
            self._report(e, 'delete')
            return False
        await self.load_posts()
        return True

    async def submit_form(self) -> bool:
        handler = self.update if self.editing_post else self.create
        return await self.form.submit(handler)

    def _report(self, error: PostClientError, action: str):
        """Page-level sink for mutation failures; the caller decides whether to re-raise."""
        logger.error(f"Failed to {action} post: {error}")
        self.error = str(error)

    # --- 모달 상태 ---
    def open_create(self):
        self._set_editing_target(None, force_reset=True)
        self.show_form = True

    def open_edit(self, post: Post):
        self._set_editing_target(post)
        self.show_form = False

    def cancel(self):
        self.show_form = False
        self._set_editing_target(None)

    def _set_editing_target(self, post: Optional[Post], force_reset: bool = False):
        changed = post != self.editing_post
        self.editing_post = post
        if changed or force_reset:
            self.form.reset(post)

    @property
    def modal_mode(self) -> Optional[str]:
        if self.editing_post is not None:
            return 'edit'
        if self.show_form:
            return 'create'
        return None

    @property
    def modal_title(self) -> str:
        return 'Edit Post' if self.editing_post is not None else 'Create New Post'

    def dismiss_error(self):
        self.error = None

    @property
    def empty_message(self) -> str:
        if self.search:
            return 'No posts found matching your search.'
        return 'No posts yet. Create your first post!'

    def cards(self) -> List[PostCard]:
        return [PostCard(post, on_edit=self.open_edit) for post in self.posts]

    def find_card(self, post_id: int) -> Optional[PostCard]:
        return next((card for card in self.cards() if card.post.id == post_id), None)
