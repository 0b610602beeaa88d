import json
import logging
import time
from typing import Callable, Dict, List, Optional, Tuple

import httpx
from pydantic import ValidationError

from blogfeed.schemas.blog import Post
from blogfeed.schemas.velog import FetchResult, FetchStatus, VelogPost, VelogPostDetail

logger = logging.getLogger(__name__)

VELOG_GRAPHQL_ENDPOINT = "https://v2cdn.velog.io/graphql"
VELOG_BASE_URL = "https://velog.io"

POSTS_QUERY = """
query Posts($cursor: ID, $username: String, $limit: Int) {
  posts(cursor: $cursor, username: $username, limit: $limit) {
    id
    title
    short_description
    thumbnail
    user {
      username
    }
    url_slug
    released_at
    updated_at
    tags
  }
}
"""

POST_QUERY = """
query Post($username: String, $url_slug: String) {
  post(username: $username, url_slug: $url_slug) {
    id
    title
    short_description
    thumbnail
    user {
      username
    }
    url_slug
    released_at
    updated_at
    tags
    body
  }
}
"""


def velog_post_url(username: str, url_slug: str) -> str:
    return f"{VELOG_BASE_URL}/@{username}/{url_slug}"


class VelogClient:
    """
    Minimal client for Velog's public GraphQL API.

    ``fetch_*`` return a ``FetchResult``. ``list_posts`` and ``get_post_detail``
    degrade to ``[]`` / ``None`` so page rendering never fails on an outage.
    With ``cache_ttl > 0`` successful answers are reused for that many seconds.
    """

    def __init__(
        self,
        endpoint: str = VELOG_GRAPHQL_ENDPOINT,
        *,
        http_client: httpx.Client | None = None,
        timeout: float = 10.0,
        cache_ttl: float = 0,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.endpoint = endpoint
        self._owns_client = http_client is None
        self.http = http_client or httpx.Client(timeout=timeout)
        self.cache_ttl = cache_ttl
        self.clock = clock
        self._cache: Dict[Tuple[str, str], Tuple[float, FetchResult]] = {}

    def close(self) -> None:
        if self._owns_client:
            self.http.close()

    def __enter__(self):
        return self

    def __exit__(self, *exc_info):
        self.close()

    def clear_cache(self) -> None:
        self._cache.clear()

    def fetch_posts(self, username: str, limit: int = 20) -> FetchResult:
        variables = {"username": username, "limit": limit}
        cached = self._cached("Posts", variables)
        if cached is not None:
            return cached

        result = self._execute("Posts", POSTS_QUERY, variables)
        if not result.is_ok:
            return result

        raw_posts = result.data.get("posts") or []
        if not isinstance(raw_posts, list):
            logger.error(f"Unexpected Velog posts payload for @{username}: {raw_posts!r}")
            return FetchResult.failed("posts is not a list")

        try:
            posts = [VelogPost.model_validate(p) for p in raw_posts]
        except ValidationError as e:
            logger.error(f"Unexpected Velog posts payload for @{username}: {e}")
            return FetchResult.failed(str(e))

        return self._store("Posts", variables, FetchResult.ok(posts))

    def fetch_post_detail(self, username: str, url_slug: str) -> FetchResult:
        variables = {"username": username, "url_slug": url_slug}
        cached = self._cached("Post", variables)
        if cached is not None:
            return cached

        result = self._execute("Post", POST_QUERY, variables)
        if not result.is_ok:
            return result

        payload = result.data.get("post")
        if not payload:
            logger.warning(f"Velog post @{username}/{url_slug} not found")
            return self._store("Post", variables, FetchResult.not_found())

        try:
            detail = VelogPostDetail.model_validate(payload)
        except ValidationError as e:
            logger.error(f"Unexpected Velog post payload for {url_slug}: {e}")
            return FetchResult.failed(str(e))

        return self._store("Post", variables, FetchResult.ok(detail))

    def list_posts(self, username: str, limit: int = 20) -> List[VelogPost]:
        result = self.fetch_posts(username, limit)
        return result.data if result.is_ok else []

    def get_post_detail(self, username: str, url_slug: str) -> Optional[VelogPostDetail]:
        result = self.fetch_post_detail(username, url_slug)
        return result.data if result.is_ok else None

    def _execute(self, operation_name: str, query: str, variables: dict) -> FetchResult:
        payload = {
            "operationName": operation_name,
            "variables": variables,
            "query": query,
        }
        try:
            response = self.http.post(self.endpoint, json=payload)
        except httpx.HTTPError as e:
            logger.error(f"Velog {operation_name} request failed: {e}")
            return FetchResult.failed(str(e))

        if not response.is_success:
            logger.error(
                f"Velog {operation_name} returned HTTP {response.status_code}: "
                f"{response.reason_phrase}"
            )
            return FetchResult.failed(f"HTTP {response.status_code}")

        try:
            body = response.json()
        except ValueError as e:
            logger.error(f"Velog {operation_name} returned invalid JSON: {e}")
            return FetchResult.failed(str(e))

        if not isinstance(body, dict):
            return FetchResult.failed("response body is not an object")
        if body.get("errors"):
            logger.error(f"Velog {operation_name} returned errors: {body['errors']}")
            return FetchResult.failed(str(body["errors"]))

        data = body.get("data") or {}
        if not isinstance(data, dict):
            logger.error(f"Velog {operation_name} returned non-object data: {data!r}")
            return FetchResult.failed("data is not an object")

        return FetchResult.ok(data)

    def _cache_key(self, operation_name: str, variables: dict) -> Tuple[str, str]:
        return operation_name, json.dumps(variables, sort_keys=True)

    def _cached(self, operation_name: str, variables: dict) -> Optional[FetchResult]:
        if self.cache_ttl <= 0:
            return None
        key = self._cache_key(operation_name, variables)
        entry = self._cache.get(key)
        if not entry:
            return None
        expires_at, result = entry
        if self.clock() >= expires_at:
            self._cache.pop(key, None)
            return None
        return result

    def _store(self, operation_name: str, variables: dict, result: FetchResult) -> FetchResult:
        if self.cache_ttl > 0 and result.status != FetchStatus.FAILED:
            key = self._cache_key(operation_name, variables)
            self._cache[key] = (self.clock() + self.cache_ttl, result)
        return result


def to_post(post: VelogPost) -> Post:
    """Listing entry -> canonical Post. The list query carries no body."""
    return Post(
        slug=post.url_slug,
        title=post.title,
        publishedAt=post.released_at,
        summary=post.short_description,
        image=post.thumbnail or None,
        tags=post.tags,
        content="",
        isVelogPost=True,
        velogUrl=velog_post_url(post.user.username, post.url_slug),
    )
