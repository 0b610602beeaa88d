import threading

from fastapi import Depends

from blogfeed.repos.posts_repo import LocalPostsRepo
from blogfeed.services.posts_service import PostsService
from blogfeed.services.velog_client import VelogClient
from blogfeed.settings import Settings, settings

# One client per process; its TTL cache spans requests.
_velog_client: VelogClient | None = None
_velog_client_lock = threading.Lock()  # sync endpoints run in a threadpool


def get_settings() -> Settings:
    """Small wrapper to allow dependency overrides in tests."""
    return settings


def get_velog_client(current_settings: Settings = Depends(get_settings)):
    global _velog_client
    if not current_settings.LIVE_MERGE_VELOG or not current_settings.VELOG_USERNAME:
        return None
    with _velog_client_lock:
        if _velog_client is None:
            _velog_client = VelogClient(
                current_settings.VELOG_GRAPHQL_URL,
                timeout=current_settings.VELOG_TIMEOUT_SECONDS,
                cache_ttl=current_settings.VELOG_CACHE_TTL_SECONDS,
            )
        return _velog_client


def close_velog_client() -> None:
    global _velog_client
    with _velog_client_lock:
        if _velog_client is not None:
            _velog_client.close()
            _velog_client = None


def get_posts_repo(current_settings: Settings = Depends(get_settings)):
    return LocalPostsRepo(
        current_settings.CONTENT_DIR,
        velog_subdir=current_settings.VELOG_SUBDIR,
        extension=current_settings.POST_EXTENSION,
    )


def get_posts_service(
    repo=Depends(get_posts_repo),
    velog_client=Depends(get_velog_client),
    current_settings: Settings = Depends(get_settings),
):
    return PostsService(
        repo=repo,
        velog_client=velog_client,
        velog_username=current_settings.VELOG_USERNAME,
        velog_limit=current_settings.VELOG_LIST_LIMIT,
    )
