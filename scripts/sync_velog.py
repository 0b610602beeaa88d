"""Mirror every Velog post of VELOG_USERNAME into the local content directory."""

import logging
import sys

from blogfeed.services.velog_client import VelogClient
from blogfeed.services.velog_sync import MissingAccountHandle, SyncConfig, sync_velog_posts
from blogfeed.settings import Settings, settings

logger = logging.getLogger(__name__)


def build_config(settings_obj: Settings) -> SyncConfig:
    return SyncConfig(
        account_handle=settings_obj.VELOG_USERNAME,
        content_dir=settings_obj.content_path,
        velog_subdir=settings_obj.VELOG_SUBDIR,
        extension=settings_obj.POST_EXTENSION,
        max_posts=settings_obj.SYNC_MAX_POSTS,
        delay_seconds=settings_obj.SYNC_DELAY_SECONDS,
    )


def main(settings_obj: Settings = settings, client: VelogClient | None = None) -> int:
    config = build_config(settings_obj)
    # the sync wants current data, so never reuse cached answers
    client = client or VelogClient(
        settings_obj.VELOG_GRAPHQL_URL,
        timeout=settings_obj.VELOG_TIMEOUT_SECONDS,
        cache_ttl=0,
    )

    try:
        with client:
            report = sync_velog_posts(config, client)
    except MissingAccountHandle as e:
        print(f"{e} (set it in .env.local)", file=sys.stderr)
        return 1

    print("\nSync completed!")
    print(report.summary())
    return 0


if __name__ == "__main__":
    logging.basicConfig(
        level=getattr(logging, settings.LOG_LEVEL.upper()),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )
    sys.exit(main())
