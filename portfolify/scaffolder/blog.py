"""Blog seed content.

The blog feature ships one welcome article under ``content/blog/`` plus a
JSON index the generated site lists posts from.
"""

from __future__ import annotations

import json
import math
import re
from datetime import date
from typing import Any

from pydantic import BaseModel, Field, computed_field

WORDS_PER_MINUTE = 200
BLOG_DIR = "content/blog"
BLOG_INDEX = "src/config/blog.json"


def reading_time_minutes(text: str) -> int:
    """Minutes needed to read *text* at 200 words per minute (at least 1)."""
    words = len(re.findall(r"\S+", text))
    return max(1, math.ceil(words / WORDS_PER_MINUTE))


class BlogPost(BaseModel):
    slug: str
    title: str
    published: date
    excerpt: str = ""
    tags: list[str] = Field(default_factory=list)
    body: str = ""

    @computed_field  # type: ignore[misc]
    @property
    def reading_time(self) -> int:
        return reading_time_minutes(self.body)

    @property
    def path(self) -> str:
        return f"{BLOG_DIR}/{self.slug}.md"

    def to_markdown(self) -> str:
        """Front matter followed by the body.

        Scalars are JSON-quoted, which keeps the front matter valid YAML
        for gray-matter whatever the title contains.
        """
        lines = [
            "---",
            f"title: {json.dumps(self.title, ensure_ascii=False)}",
            f"date: {self.published.isoformat()}",
            f"excerpt: {json.dumps(self.excerpt, ensure_ascii=False)}",
            f"tags: {json.dumps(self.tags, ensure_ascii=False)}",
            f"readingTime: {self.reading_time}",
            "---",
            "",
        ]
        return "\n".join(lines) + self.body.strip() + "\n"

    def summary(self) -> dict[str, Any]:
        """Entry of the JSON index read by the site's blog section."""
        return {
            "slug": self.slug,
            "title": self.title,
            "date": self.published.isoformat(),
            "excerpt": self.excerpt,
            "tags": list(self.tags),
            "readingTime": self.reading_time,
        }


def welcome_post(author: str, body: str, published: date) -> BlogPost:
    return BlogPost(
        slug="welcome",
        title="Welcome to My Blog",
        published=published,
        excerpt=f"The first post on {author}'s new site, and how to write the next one.",
        tags=["welcome", "intro"],
        body=body,
    )


def blog_index(posts: list[BlogPost]) -> list[dict[str, Any]]:
    """Newest first."""
    return [post.summary() for post in sorted(posts, key=lambda p: p.published, reverse=True)]
