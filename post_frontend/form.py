# post_frontend/form.py
import logging
from typing import Awaitable, Callable, Optional

from post_frontend.config import NAME_MAX_LENGTH, DESCRIPTION_MAX_LENGTH
from post_frontend.errors import PostClientError, PostValidationError
from post_frontend.models.schemas import Post, CreatePostDto, UpdatePostDto

logger = logging.getLogger(__name__)

SubmitHandler = Callable[[CreatePostDto], Awaitable[None]]


class PostForm:
    """
    Editor state for creating or updating a post.

    The owner calls reset() whenever it switches the editing target;
    cancelling is left to the owner and never touches the fields here.
    """

    def __init__(self, post: Optional[Post] = None):
        self.post: Optional[Post] = None
        self.name = ''
        self.description = ''
        self.image_url = ''
        self.is_submitting = False
        self.error: Optional[str] = None
        self.reset(post)

    def reset(self, post: Optional[Post] = None):
        """Mirror `post` (or blank fields for a new one) and clear the local error."""
        self.post = post
        if post:
            self.name = post.name or ''
            self.description = post.description or ''
            self.image_url = post.image_url or ''
        else:
            self.name = ''
            self.description = ''
            self.image_url = ''
        self.error = None

    @property
    def is_edit(self) -> bool:
        return self.post is not None

    @property
    def name_counter(self) -> str:
        return f"{len(self.name)}/{NAME_MAX_LENGTH}"

    @property
    def description_counter(self) -> str:
        return f"{len(self.description)}/{DESCRIPTION_MAX_LENGTH}"

    @property
    def submit_label(self) -> str:
        if self.is_submitting:
            return 'Saving...'
        return 'Update Post' if self.is_edit else 'Create Post'

    @property
    def image_preview_url(self) -> Optional[str]:
        return self.image_url if self.image_url.strip() else None

    def validate(self):
        name = self.name.strip()
        description = self.description.strip()
        if not name or not description:
            raise PostValidationError('Name and description are required')
        if len(name) > NAME_MAX_LENGTH:
            raise PostValidationError(f'Name must be at most {NAME_MAX_LENGTH} characters')
        if len(description) > DESCRIPTION_MAX_LENGTH:
            raise PostValidationError(f'Description must be at most {DESCRIPTION_MAX_LENGTH} characters')

    def build_payload(self) -> CreatePostDto:
        dto_cls = UpdatePostDto if self.is_edit else CreatePostDto
        return dto_cls(
            name=self.name.strip(),
            description=self.description.strip(),
            image_url=self.image_url.strip() or None,
        )

    async def submit(self, on_submit: SubmitHandler) -> bool:
        """Validate, then hand the trimmed payload to `on_submit`. Returns True on success."""
        if self.is_submitting:
            logger.debug("Ignoring submit while a previous one is in flight")
            return False

        self.error = None
        try:
            self.validate()
        except PostValidationError as e:
            self.error = str(e)
            return False

        self.is_submitting = True
        try:
            await on_submit(self.build_payload())
            return True
        except PostClientError as e:
            self.error = str(e)
            return False
        finally:
            self.is_submitting = False
