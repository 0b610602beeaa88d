import json
import re
from typing import Any, Dict, List, Tuple

import frontmatter
from frontmatter.default_handlers import BaseHandler


# Serialization order for the keys the blog understands.
KNOWN_KEYS = ("title", "publishedAt", "summary", "image", "tags", "velogUrl")
_ALWAYS_QUOTED = ("title", "summary")
_QUOTES = ("'", '"')


class FrontmatterError(ValueError):
    """Raised when a document has no ``---`` delimited header block."""


class MdxFrontmatterHandler(BaseHandler):
    """
    Handler for the flat ``key: value`` header used by the blog's MDX posts.

    This is not YAML: values are plain strings with one optional layer of
    matching quotes, and only ``tags`` carries structure (a JSON array).
    """

    FM_BOUNDARY = re.compile(r"^---[ \t]*\r?\n(.*?)^---[ \t]*\r?$", re.MULTILINE | re.DOTALL)
    START_DELIMITER = END_DELIMITER = "---"

    def detect(self, text: str) -> bool:
        return bool(self.FM_BOUNDARY.search(text))

    def split(self, text: str) -> Tuple[str, str]:
        match = self.FM_BOUNDARY.search(text)
        if not match:
            raise FrontmatterError("no frontmatter block found")
        content = text[: match.start()] + text[match.end() :]
        return match.group(1), content

    def load(self, fm: str, **kwargs) -> Dict[str, Any]:
        metadata: Dict[str, Any] = {}
        for line in fm.strip().splitlines():
            if not line.strip():
                continue
            key, _sep, raw_value = line.partition(": ")
            key = key.strip()
            value = _strip_quotes(raw_value.strip())
            if key == "tags":
                metadata["tags"] = parse_tags(value)
            else:
                metadata[key] = value
        return metadata

    def export(self, metadata: Dict[str, Any], **kwargs) -> str:
        lines = []
        for key, value in metadata.items():
            if value is None:
                continue
            if key == "tags":
                lines.append(f"tags: {json.dumps(list(value), ensure_ascii=False)}")
                continue
            text = _single_line(str(value))
            if key in _ALWAYS_QUOTED or _needs_quotes(text):
                text = f'"{text}"'
            lines.append(f"{key}: {text}")
        return "\n".join(lines)


def parse_tags(value: str) -> List[str]:
    try:
        parsed = json.loads(value)
    except ValueError:
        return []
    if not isinstance(parsed, list):
        return []
    return [str(tag) for tag in parsed]


def _strip_quotes(value: str) -> str:
    if len(value) >= 2 and value[0] in _QUOTES and value[-1] == value[0]:
        return value[1:-1]
    return value


def _single_line(value: str) -> str:
    return " ".join(value.splitlines())


def _needs_quotes(value: str) -> bool:
    if not value or value != value.strip():
        return True
    return len(value) >= 2 and value[0] in _QUOTES and value[-1] == value[0]


def parse_frontmatter(text: str, handler: BaseHandler | None = None) -> frontmatter.Post:
    """
    Split ``text`` into header metadata and body.

    Raises ``FrontmatterError`` when the header block is missing; nothing is
    guessed from the body in that case.
    """
    handler = handler or MdxFrontmatterHandler()
    fm, content = handler.split(text.lstrip("\ufeff"))
    post = frontmatter.Post(content.strip(), handler=handler)
    post.metadata.update(handler.load(fm))
    return post


def serialize_frontmatter(
    metadata: Dict[str, Any], content: str, handler: BaseHandler | None = None
) -> str:
    """Inverse of ``parse_frontmatter`` for the known key set."""
    handler = handler or MdxFrontmatterHandler()
    ordered = {key: metadata[key] for key in KNOWN_KEYS if key in metadata}
    ordered.update({k: v for k, v in metadata.items() if k not in ordered})

    post = frontmatter.Post(content, handler=handler)
    post.metadata.update(ordered)
    return frontmatter.dumps(post, handler=handler)
