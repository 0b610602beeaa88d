import logging
import time
from pathlib import Path
from typing import Callable, List

from pydantic import BaseModel, Field

from blogfeed.schemas.velog import VelogPostDetail
from blogfeed.services.frontmatter_parser import serialize_frontmatter
from blogfeed.services.velog_client import VelogClient, velog_post_url

logger = logging.getLogger(__name__)

MAX_SYNC_POSTS = 100
SYNC_DELAY_SECONDS = 0.5


class MissingAccountHandle(RuntimeError):
    """No Velog username was configured; nothing can be synced."""


class SyncConfig(BaseModel):
    account_handle: str = ""
    content_dir: Path = Path("posts")
    velog_subdir: str = "velog"
    extension: str = ".mdx"
    max_posts: int = MAX_SYNC_POSTS
    delay_seconds: float = SYNC_DELAY_SECONDS

    @property
    def velog_dir(self) -> Path:
        return self.content_dir / self.velog_subdir


class SyncReport(BaseModel):
    succeeded: int = 0
    failed: int = 0
    written: List[Path] = Field(default_factory=list)

    def summary(self) -> str:
        return f"Success: {self.succeeded}, Failed: {self.failed}"


def build_document(detail: VelogPostDetail, account_handle: str) -> str:
    """Render a Velog post as an MDX document the local loader can read back."""
    metadata = {
        "title": detail.title,
        "publishedAt": detail.released_at,
        "summary": detail.short_description or "",
    }
    if detail.thumbnail:
        metadata["image"] = detail.thumbnail
    if detail.tags:
        metadata["tags"] = detail.tags
    metadata["velogUrl"] = velog_post_url(account_handle, detail.url_slug)
    return serialize_frontmatter(metadata, detail.body)


def document_path(config: SyncConfig, url_slug: str) -> Path:
    if not url_slug or "/" in url_slug or "\\" in url_slug or url_slug in (".", ".."):
        raise ValueError(f"Unsafe url_slug for a filename: {url_slug!r}")
    return config.velog_dir / f"{url_slug}{config.extension}"


def sync_velog_posts(
    config: SyncConfig,
    client: VelogClient,
    *,
    sleep: Callable[[float], None] = time.sleep,
) -> SyncReport:
    """
    Mirror every Velog post of ``config.account_handle`` into the velog dir.

    Full re-fetch and overwrite on every run. Per-post failures are counted
    and skipped; only a missing account handle aborts.
    """
    account = config.account_handle.strip()
    if not account:
        raise MissingAccountHandle("VELOG_USERNAME is not set")

    logger.info(f"Fetching posts from @{account}...")
    posts = client.list_posts(account, config.max_posts)
    report = SyncReport()

    if not posts:
        logger.info("No posts found.")
        return report

    logger.info(f"Found {len(posts)} posts. Fetching details...")
    config.velog_dir.mkdir(parents=True, exist_ok=True)

    for index, post in enumerate(posts):
        if index and config.delay_seconds > 0:
            sleep(config.delay_seconds)

        try:
            logger.info(f"Fetching: {post.title}...")
            result = client.fetch_post_detail(account, post.url_slug)
            if not result.is_ok:
                logger.error(f"Failed to fetch details for: {post.title} ({result.status.value})")
                report.failed += 1
                continue

            path = document_path(config, result.data.url_slug)
            path.write_text(build_document(result.data, account), encoding="utf-8")
        except (OSError, ValueError) as e:
            logger.error(f"Error processing {post.title}: {e}")
            report.failed += 1
            continue

        logger.info(f"Saved: {path.name}")
        report.succeeded += 1
        report.written.append(path)

    return report
