"""Markdown files with YAML frontmatter."""

from typing import Any

import frontmatter


def render_frontmatter(metadata: dict[str, Any], body: str) -> str:
    """Render markdown with a YAML frontmatter block.

    Keys keep their insertion order and lists are written inline, which is
    the form Claude Code and Cursor both read.
    """
    post = frontmatter.Post(body.strip(), **metadata)
    return frontmatter.dumps(post, sort_keys=False, default_flow_style=None) + "\n"
