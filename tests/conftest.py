import textwrap
from pathlib import Path

from blogfeed.repos.posts_repo import LocalDocument
from blogfeed.schemas.velog import FetchResult, VelogPost, VelogPostDetail


def write_post(directory: Path, filename: str, raw: str) -> Path:
    """Write a dedented document into ``directory`` (created if needed)."""
    directory.mkdir(parents=True, exist_ok=True)
    path = directory / filename
    path.write_text(textwrap.dedent(raw).lstrip(), encoding="utf-8")
    return path


def make_doc(slug: str, content: str = "body", **metadata) -> LocalDocument:
    return LocalDocument(
        slug=slug,
        path=Path(f"posts/{slug}.mdx"),
        metadata=metadata,
        content=content,
    )


def make_velog_post(slug: str, username: str = "alice", **overrides) -> dict:
    """Raw GraphQL payload for one post, as Velog returns it."""
    payload = {
        "id": f"id-{slug}",
        "title": slug.replace("-", " ").title(),
        "short_description": f"About {slug}",
        "thumbnail": None,
        "user": {"username": username},
        "url_slug": slug,
        "released_at": "2024-03-01T09:00:00.000Z",
        "updated_at": "2024-03-02T09:00:00.000Z",
        "tags": [],
    }
    payload.update(overrides)
    return payload


class FakeRepo:
    """
    Minimal LocalPostsRepo stand-in used in service tests.
    """

    def __init__(self, local_docs=None, velog_docs=None):
        self.local_docs = local_docs or []
        self.velog_docs = velog_docs or []

    def list_local_docs(self):
        return list(self.local_docs)

    def list_velog_docs(self):
        return list(self.velog_docs)


class FakeVelogClient:
    """
    In-memory VelogClient stand-in.
    ``details`` maps url_slug -> payload dict, or None to simulate a failed fetch.
    """

    def __init__(self, posts=None, details=None):
        self.posts = [VelogPost.model_validate(p) for p in (posts or [])]
        self.details = details or {}
        self.calls = []

    def list_posts(self, username, limit=20):
        self.calls.append(("Posts", username, limit))
        return list(self.posts)

    def fetch_post_detail(self, username, url_slug):
        self.calls.append(("Post", username, url_slug))
        payload = self.details.get(url_slug)
        if payload is None:
            return FetchResult.failed("boom")
        return FetchResult.ok(VelogPostDetail.model_validate(payload))

    def close(self):
        pass

    def __enter__(self):
        return self

    def __exit__(self, *exc_info):
        self.close()
