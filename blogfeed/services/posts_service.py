import logging
from typing import Iterable, List, Optional

from pydantic import ValidationError

from blogfeed.repos.posts_repo import LocalDocument, LocalPostsRepo
from blogfeed.schemas.blog import Post
from blogfeed.services.velog_client import VelogClient, to_post
from blogfeed.settings import Settings, settings

logger = logging.getLogger(__name__)

ALL_CATEGORY = "All"
VELOG_CATEGORY = "Velog"
UNCATEGORIZED = "Uncategorized"


class PostsService:
    """
    Merges local posts, mirrored Velog posts and (optionally) the live Velog
    listing into one newest-first collection.
    """

    def __init__(
        self,
        repo: LocalPostsRepo,
        velog_client: VelogClient | None = None,
        velog_username: str = "",
        velog_limit: int = 20,
    ):
        self.repo = repo
        self.velog_client = velog_client
        self.velog_username = velog_username
        self.velog_limit = velog_limit

    def list_posts(self) -> List[Post]:
        local_posts = _build_posts(self.repo.list_local_docs(), build_local_post)
        velog_posts = _build_posts(self.repo.list_velog_docs(), build_velog_post)
        live_posts = self._live_velog_posts(exclude={p.slug for p in velog_posts})
        return sort_posts(local_posts + velog_posts + live_posts)

    def get_post(self, slug: str) -> Optional[Post]:
        return next((post for post in self.list_posts() if post.slug == slug), None)

    def _live_velog_posts(self, exclude: set) -> List[Post]:
        if not self.velog_client or not self.velog_username:
            return []

        posts = []
        for summary in self.velog_client.list_posts(self.velog_username, self.velog_limit):
            if summary.url_slug in exclude:
                continue  # mirrored copy on disk has the body
            try:
                posts.append(to_post(summary))
            except ValidationError as e:
                logger.warning(f"Skipping Velog listing entry {summary.url_slug}: {e}")
        return posts


def build_local_post(doc: LocalDocument) -> Post:
    metadata = doc.metadata
    return Post(
        slug=doc.slug,
        title=metadata.get("title", ""),
        publishedAt=metadata.get("publishedAt", ""),
        summary=metadata.get("summary", ""),
        image=metadata.get("image") or None,
        tags=metadata.get("tags", []),
        content=doc.content,
    )


def build_velog_post(doc: LocalDocument) -> Post:
    metadata = doc.metadata
    velog_url = metadata.get("velogUrl") or None
    return Post(
        slug=velog_slug(velog_url, doc.slug),
        title=metadata.get("title", ""),
        publishedAt=metadata.get("publishedAt", ""),
        summary=metadata.get("summary", ""),
        image=metadata.get("image") or None,
        tags=metadata.get("tags", []),
        content=doc.content,
        isVelogPost=bool(velog_url),
        velogUrl=velog_url,
    )


def velog_slug(velog_url: str | None, fallback: str) -> str:
    """``https://velog.io/@alice/my-post`` -> ``my-post``; ``fallback`` otherwise."""
    if not velog_url:
        return fallback
    return velog_url.split("/")[-1] or fallback


def _build_posts(docs: Iterable[LocalDocument], build) -> List[Post]:
    posts = []
    for doc in docs:
        try:
            posts.append(build(doc))
        except ValidationError as e:
            logger.warning(f"Skipping invalid post {doc.path}: {e}")
    return posts


def sort_posts(posts: Iterable[Post]) -> List[Post]:
    # sorted() is stable with reverse=True, so ties keep local-before-velog order
    return sorted(posts, key=lambda p: p.published_date, reverse=True)


def get_category(post: Post) -> str:
    if post.tags:
        return post.tags[0]
    if post.isVelogPost:
        return VELOG_CATEGORY
    return UNCATEGORIZED


def get_categories(posts: Iterable[Post]) -> List[str]:
    return [ALL_CATEGORY, *sorted({get_category(p) for p in posts})]


def count_categories(posts: List[Post]) -> List[tuple]:
    counts = [(ALL_CATEGORY, len(posts))]
    for name in get_categories(posts)[1:]:
        counts.append((name, sum(1 for p in posts if get_category(p) == name)))
    return counts


def filter_posts(
    posts: List[Post], category: str = ALL_CATEGORY, limit: int | None = None
) -> List[Post]:
    if category and category != ALL_CATEGORY:
        posts = [p for p in posts if get_category(p) == category]
    return posts[:limit] if limit else posts


def get_blog_posts(settings_obj: Settings = settings, velog_client=None) -> List[Post]:
    """The full aggregated, date-sorted collection for the configured content dir."""
    repo = LocalPostsRepo(
        settings_obj.CONTENT_DIR,
        velog_subdir=settings_obj.VELOG_SUBDIR,
        extension=settings_obj.POST_EXTENSION,
    )
    service = PostsService(
        repo,
        velog_client=velog_client,
        velog_username=settings_obj.VELOG_USERNAME,
        velog_limit=settings_obj.VELOG_LIST_LIMIT,
    )
    return service.list_posts()
