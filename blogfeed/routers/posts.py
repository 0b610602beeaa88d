import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query

from blogfeed import dependencies as deps
from blogfeed.schemas.blog import CategoryCount, Post, PostDetail, PostSummary
from blogfeed.services.posts_service import (
    ALL_CATEGORY,
    PostsService,
    count_categories,
    filter_posts,
    get_category,
)
from blogfeed.utils import calculate_reading_time, format_date

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/posts", response_model=List[PostSummary])
def list_posts(
    category: str = ALL_CATEGORY,
    limit: Optional[int] = Query(default=None, ge=1),
    service: PostsService = Depends(deps.get_posts_service),
):
    """Get all posts metadata, newest first."""
    try:
        posts = filter_posts(service.list_posts(), category, limit)
        return [_to_summary(post) for post in posts]
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Unexpected error listing posts: {e}")
        raise HTTPException(status_code=500, detail="Failed to retrieve posts")


@router.get("/posts/{slug}", response_model=PostDetail)
def get_post(
    slug: str,
    service: PostsService = Depends(deps.get_posts_service),
):
    """Get a single post by slug."""
    try:
        post = service.get_post(slug)
        if not post:
            raise HTTPException(status_code=404, detail="Post not found")
        return PostDetail(**_to_summary(post).model_dump(), content=post.content)
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Unexpected error retrieving post {slug}: {e}")
        raise HTTPException(status_code=500, detail="Failed to retrieve post")


@router.get("/categories", response_model=List[CategoryCount])
def list_categories(service: PostsService = Depends(deps.get_posts_service)):
    try:
        return [
            CategoryCount(name=name, count=count)
            for name, count in count_categories(service.list_posts())
        ]
    except Exception as e:
        logger.error(f"Unexpected error listing categories: {e}")
        raise HTTPException(status_code=500, detail="Failed to retrieve categories")


def _to_summary(post: Post) -> PostSummary:
    return PostSummary(
        slug=post.slug,
        title=post.title,
        summary=post.summary,
        image=post.image,
        publishedAt=post.publishedAt,
        formattedDate=format_date(post.publishedAt),
        tags=post.tags,
        category=get_category(post),
        readingTime=calculate_reading_time(post.content),
        isVelogPost=post.isVelogPost,
        velogUrl=post.velogUrl,
    )
