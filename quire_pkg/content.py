"""Discovery of Markdown content files."""

import os
import re
from typing import List

from .errors import BuildError

INDEX_FILENAME = '_index.md'


class ContentFile:
    """A Markdown file found under the content root."""

    def __init__(self, path, relative_path, section_path, is_index):
        self.path = path
        self.relative_path = relative_path
        self.section_path = section_path
        self.is_index = is_index

    @property
    def stem(self):
        return os.path.splitext(os.path.basename(self.path))[0]

    def read(self) -> str:
        """Read the file as UTF-8 text."""
        try:
            with open(self.path, 'r', encoding='utf-8') as f:
                return f.read()
        except UnicodeDecodeError as e:
            raise BuildError('read content file', self.path, f"not valid UTF-8: {e}") from e
        except (IOError, OSError) as e:
            raise BuildError('read content file', self.path, e) from e

    def __repr__(self):
        return f"ContentFile({self.relative_path!r})"


def walk_content(content_dir) -> List[ContentFile]:
    """
    Find every Markdown file below content_dir.

    Directories and files are visited in sorted order so the result, and
    every ordering derived from it, is the same on every run. Hidden files
    and directories are skipped.
    """
    if not os.path.isdir(content_dir):
        raise BuildError('read content directory', content_dir, 'directory does not exist')

    def _raise(error):
        raise BuildError('read content directory', error.filename, error.strerror)

    found = []
    for root, dirs, files in os.walk(content_dir, onerror=_raise):
        dirs[:] = sorted(d for d in dirs if not d.startswith('.'))
        rel_dir = os.path.relpath(root, content_dir)
        section_path = '' if rel_dir == os.curdir else rel_dir.replace(os.sep, '/')
        for filename in sorted(files):
            if filename.startswith('.') or not filename.endswith('.md'):
                continue
            relative_path = f"{section_path}/{filename}" if section_path else filename
            found.append(ContentFile(
                path=os.path.join(root, filename),
                relative_path=relative_path,
                section_path=section_path,
                is_index=filename == INDEX_FILENAME,
            ))
    return found


def slugify(text: str) -> str:
    """Lowercase text and collapse runs of non-word characters into single dashes."""
    text = text.lower()
    text = re.sub(r"[^\w]+", "-", text, flags=re.UNICODE)
    text = text.strip("-_").replace("_", "-")
    return text or "page"
