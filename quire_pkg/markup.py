"""Markdown to HTML conversion."""

import mistune

PLUGINS = ['table', 'strikethrough', 'footnotes', 'task_lists']


def create_markdown_parser():
    """Create a Mistune markdown parser that passes raw HTML through."""
    return mistune.create_markdown(
        renderer=mistune.HTMLRenderer(escape=False),
        plugins=PLUGINS
    )


_parser = create_markdown_parser()


def render_markdown(text: str) -> str:
    """Convert a Markdown body to an HTML fragment."""
    return _parser(text).strip()
