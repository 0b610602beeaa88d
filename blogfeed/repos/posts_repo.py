import logging
from pathlib import Path
from typing import Any, Dict, List

from pydantic import BaseModel, Field

from blogfeed.services.frontmatter_parser import FrontmatterError, parse_frontmatter

logger = logging.getLogger(__name__)


class LocalDocument(BaseModel):
    slug: str
    path: Path
    metadata: Dict[str, Any] = Field(default_factory=dict)
    content: str = ""


class LocalPostsRepo:
    """
    Reads post documents from the content directory and its ``velog`` mirror.

    Files are returned in whatever order the filesystem lists them. A file
    that cannot be read or has no header block is logged and skipped.
    """

    def __init__(self, content_dir, velog_subdir: str = "velog", extension: str = ".mdx"):
        self.content_dir = Path(content_dir)
        self.velog_dir = self.content_dir / velog_subdir
        self.extension = extension

    def list_local_docs(self) -> List[LocalDocument]:
        if not self.content_dir.is_dir():
            logger.warning(f"Content directory {self.content_dir} does not exist")
            return []
        return self._read_dir(self.content_dir)

    def list_velog_docs(self) -> List[LocalDocument]:
        if not self.velog_dir.is_dir():
            return []
        return self._read_dir(self.velog_dir)

    def _read_dir(self, directory: Path) -> List[LocalDocument]:
        docs = []
        for path in directory.iterdir():
            # case-sensitive: .MDX is not a post
            if path.suffix != self.extension or not path.is_file():
                continue
            doc = self.read_doc(path)
            if doc:
                docs.append(doc)
        return docs

    @staticmethod
    def read_doc(path: Path) -> LocalDocument | None:
        try:
            raw = path.read_text(encoding="utf-8")
            parsed = parse_frontmatter(raw)
        except FrontmatterError as e:
            logger.warning(f"Skipping {path}: {e}")
            return None
        except (OSError, UnicodeDecodeError) as e:
            logger.error(f"Failed to read {path}: {e}")
            return None

        return LocalDocument(
            slug=path.stem,
            path=path,
            metadata=parsed.metadata,
            content=parsed.content,
        )
