import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI

from blogfeed.dependencies import close_velog_client
from blogfeed.routers import posts
from blogfeed.settings import settings

# Configure logging
logging.basicConfig(
    level=getattr(logging, settings.LOG_LEVEL.upper()),
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info(f"Serving posts from {settings.content_path.resolve()}")
    try:
        yield
    finally:
        close_velog_client()
        logger.info("Velog client closed")


app = FastAPI(
    title="blogfeed",
    description="Local MDX posts and mirrored Velog posts",
    lifespan=lifespan,
)

app.include_router(posts.router)


@app.get("/")
async def root():
    return {"message": "blogfeed API is running"}
