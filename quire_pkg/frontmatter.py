"""
Front matter parsing for Quire content files.

A content file starts with a TOML block fenced by '+++' lines:

    +++
    title = "Hello"
    date = 2025-01-15
    +++
    Markdown body...

Files that do not open with '+++' have no front matter at all.
"""

import tomllib
from datetime import date, datetime
from typing import Any, Dict, Optional, Tuple

import tomli_w

from .errors import InvalidFrontMatterSyntax, MalformedFrontMatter

DELIMITER = '+++'


class FrontMatter:
    """Typed view of a front matter block plus a bag of unrecognized keys."""

    FIELDS = ('title', 'date', 'summary', 'template', 'description', 'sort_by', 'slug')

    def __init__(self, title=None, date=None, summary=None, template=None,
                 description=None, sort_by=None, slug=None, extra=None):
        self.title = title
        self.date = date
        self.summary = summary
        self.template = template
        self.description = description
        self.sort_by = sort_by
        self.slug = slug
        self.extra = dict(extra or {})

    @classmethod
    def from_dict(cls, data: Dict[str, Any], source=None) -> 'FrontMatter':
        """
        Build front matter from a parsed TOML table.

        Args:
            data: The decoded front matter table
            source: Path of the file it came from, used in error messages

        Returns:
            FrontMatter instance with unrecognized keys kept in ``extra``
        """
        values = {}
        extra = {}
        for key, value in data.items():
            if key not in cls.FIELDS:
                extra[key] = value
            elif key == 'date':
                values[key] = _coerce_date(value, source)
            else:
                if not isinstance(value, str):
                    raise InvalidFrontMatterSyntax(
                        source, f"'{key}' must be a string, got {type(value).__name__}"
                    )
                values[key] = value
        return cls(extra=extra, **values)

    def to_dict(self) -> Dict[str, Any]:
        """Recognized fields that are set, followed by the extra fields."""
        data = {}
        for field in self.FIELDS:
            value = getattr(self, field)
            if value is not None:
                data[field] = value
        data.update(self.extra)
        return data

    def get(self, key, default=None):
        """Look up a recognized or extra field by name."""
        if key in self.FIELDS:
            value = getattr(self, key)
            return default if value is None else value
        return self.extra.get(key, default)

    def __eq__(self, other):
        if not isinstance(other, FrontMatter):
            return NotImplemented
        return self.to_dict() == other.to_dict()

    def __repr__(self):
        return f"FrontMatter({self.to_dict()!r})"


def _coerce_date(value, source) -> date:
    # datetime is a subclass of date, so check it first
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        text = value.strip()
        try:
            return date.fromisoformat(text)
        except ValueError:
            pass
        try:
            return datetime.fromisoformat(text).date()
        except ValueError:
            raise InvalidFrontMatterSyntax(source, f"'date' is not a calendar date: {value!r}")
    raise InvalidFrontMatterSyntax(source, f"'date' must be a date, got {type(value).__name__}")


def parse_front_matter(text: str, source=None) -> Tuple[FrontMatter, str]:
    """
    Split raw file text into front matter and body.

    Args:
        text: Full contents of a content file
        source: Path of the file, used in error messages

    Returns:
        Tuple of (FrontMatter, body text)

    Raises:
        MalformedFrontMatter: The opening marker has no matching closing marker
        InvalidFrontMatterSyntax: The block is not valid TOML or a field has the wrong type
    """
    text = text.lstrip('\ufeff')
    lines = text.splitlines(keepends=True)
    if not lines or lines[0].strip() != DELIMITER:
        return FrontMatter(), text

    end = None
    for index in range(1, len(lines)):
        if lines[index].strip() == DELIMITER:
            end = index
            break
    if end is None:
        raise MalformedFrontMatter(source)

    block = ''.join(lines[1:end])
    body = ''.join(lines[end + 1:])
    try:
        data = tomllib.loads(block)
    except tomllib.TOMLDecodeError as e:
        raise InvalidFrontMatterSyntax(source, str(e)) from e

    return FrontMatter.from_dict(data, source), body


def dump_front_matter(front_matter: FrontMatter, body: Optional[str] = '') -> str:
    """Serialize front matter (and an optional body) back to content file text."""
    block = tomli_w.dumps(front_matter.to_dict())
    return f"{DELIMITER}\n{block}{DELIMITER}\n{body or ''}"
