# post_frontend/api_client.py
import json
import asyncio
import aiohttp
import logging
from typing import Optional, List

from post_frontend.config import POST_API_URL
from post_frontend.errors import ApiError, NetworkError
from post_frontend.models.schemas import Post, CreatePostDto, UpdatePostDto, SortOrder

logger = logging.getLogger(__name__)


class PostApiClient:
    """HTTP client for the backend's /api/posts endpoints."""

    def __init__(self, base_url: Optional[str] = None):
        self.base_url = (base_url or POST_API_URL).rstrip('/')
        self.posts_url = f"{self.base_url}/api/posts"
        self._session: Optional[aiohttp.ClientSession] = None
        logger.info(f"PostApiClient initialized (base_url: {self.base_url})")

    async def get_session(self) -> aiohttp.ClientSession:
        """Get or create the shared aiohttp ClientSession."""
        if self._session is None or self._session.closed:
            self._session = aiohttp.ClientSession()
            logger.info("Created new aiohttp ClientSession for the posts API")
        return self._session

    async def close(self):
        """Close the aiohttp ClientSession."""
        if self._session and not self._session.closed:
            await self._session.close()
            logger.info("Closed aiohttp ClientSession for the posts API")

    async def list_posts(self, search: Optional[str] = None, sort: SortOrder = 'asc') -> List[Post]:
        params = {}
        if search:
            params['search'] = search
        params['sort'] = sort

        logger.info(f"Fetching posts (search={search!r}, sort={sort})")
        try:
            session = await self.get_session()
            async with session.get(self.posts_url, params=params) as response:
                if response.status >= 400:
                    error_text = await response.text()
                    logger.warning(f"Listing posts failed with status {response.status}")
                    raise ApiError(
                        f"Failed to fetch posts: {response.status} {response.reason}. {error_text}",
                        status=response.status,
                    )
                data = await self._read_json(response)
        except (aiohttp.ClientConnectionError, asyncio.TimeoutError) as e:
            raise self._network_error(e) from e
        except aiohttp.ClientError as e:
            raise self._transport_error(e) from e

        if not isinstance(data, list):
            raise ApiError("Invalid response from backend API", status=200)
        return [self._to_post(item) for item in data]

    async def get_post_by_id(self, post_id: int) -> Post:
        url = f"{self.posts_url}/{post_id}"
        logger.info(f"Fetching post {post_id}")
        try:
            session = await self.get_session()
            async with session.get(url) as response:
                if response.status >= 400:
                    logger.warning(f"Fetching post {post_id} failed with status {response.status}")
                    raise ApiError("Failed to fetch post", status=response.status)
                data = await self._read_json(response)
        except (aiohttp.ClientConnectionError, asyncio.TimeoutError) as e:
            raise self._network_error(e) from e
        except aiohttp.ClientError as e:
            raise self._transport_error(e) from e
        return self._to_post(data)

    async def create_post(self, dto: CreatePostDto) -> Post:
        logger.info(f"Creating post {dto.name!r}")
        return await self._send_post('POST', self.posts_url, dto, 'create')

    async def update_post(self, post_id: int, dto: UpdatePostDto) -> Post:
        logger.info(f"Updating post {post_id}")
        return await self._send_post('PUT', f"{self.posts_url}/{post_id}", dto, 'update')

    async def delete_post(self, post_id: int) -> None:
        url = f"{self.posts_url}/{post_id}"
        logger.info(f"Deleting post {post_id}")
        try:
            session = await self.get_session()
            async with session.delete(url) as response:
                if response.status >= 400:
                    logger.warning(f"Deleting post {post_id} failed with status {response.status}")
                    raise ApiError("Failed to delete post", status=response.status)
        except (aiohttp.ClientConnectionError, asyncio.TimeoutError) as e:
            raise self._network_error(e) from e
        except aiohttp.ClientError as e:
            raise self._transport_error(e) from e

    async def _send_post(self, method: str, url: str, dto: CreatePostDto, action: str) -> Post:
        """Shared POST/PUT path: JSON body in, Post out, decoded error message on failure."""
        try:
            session = await self.get_session()
            async with session.request(method, url, json=dto.to_payload()) as response:
                if response.status >= 400:
                    error_text = await response.text()
                    message = self._decode_error_message(
                        error_text,
                        f"Failed to {action} post: {response.status} {response.reason}",
                    )
                    logger.warning(f"{method} {url} failed with status {response.status}: {message}")
                    raise ApiError(message, status=response.status)
                data = await self._read_json(response)
        except (aiohttp.ClientConnectionError, asyncio.TimeoutError) as e:
            raise self._network_error(e) from e
        except aiohttp.ClientError as e:
            raise self._transport_error(e) from e
        return self._to_post(data)

    @staticmethod
    def _decode_error_message(error_text: str, default: str) -> str:
        """
        Pick the most useful message out of an error response body.

        Priority: JSON "message", JSON "title", the status-line default.
        A body that is not JSON is appended to the default instead.
        """
        try:
            error_json = json.loads(error_text)
        except ValueError:
            return f"{default}. {error_text}" if error_text else default

        if isinstance(error_json, dict):
            return error_json.get('message') or error_json.get('title') or default
        return default

    @staticmethod
    async def _read_json(response: aiohttp.ClientResponse):
        text = await response.text()
        try:
            return json.loads(text)
        except ValueError:
            logger.error(f"Backend returned a non-JSON body (status {response.status})")
            raise ApiError("Invalid response from backend API", status=response.status)

    @staticmethod
    def _to_post(item) -> Post:
        try:
            return Post.model_validate(item)
        except ValueError as e:
            logger.error(f"Backend returned a malformed post: {e}")
            raise ApiError("Invalid response from backend API")

    def _network_error(self, exc: Exception) -> NetworkError:
        logger.error(f"Error connecting to posts API at {self.base_url}: {exc}")
        return NetworkError(self.base_url)

    def _transport_error(self, exc: aiohttp.ClientError) -> ApiError:
        """Any other aiohttp failure: truncated payload, invalid URL, redirect loop."""
        logger.error(f"Request to posts API at {self.base_url} failed: {exc!r}")
        return ApiError(f"Request to backend API failed: {exc}")
