"""
In-memory model of the site: pages grouped into sections.

The tree is rebuilt from the content directory on every build. Problems that
should not stop a build (missing titles, duplicate slugs, undated pages) are
collected as BuildWarning records and returned next to the tree.
"""

import logging
from typing import Dict, Iterator, List, Optional, Tuple

from .content import ContentFile, slugify, walk_content
from .frontmatter import FrontMatter, parse_front_matter
from .markup import render_markdown

logger = logging.getLogger('Quire.model')

SORT_BY_DATE = 'date'
SORT_BY_TITLE = 'title'
SORT_ORDERS = (SORT_BY_DATE, SORT_BY_TITLE)


class BuildWarning:
    """A non-fatal problem found while assembling the site."""

    MISSING_TITLE = 'missing-title'
    DUPLICATE_SLUG = 'duplicate-slug'
    UNDATED_PAGE = 'undated-page'
    PATH_CONFLICT = 'path-conflict'
    UNKNOWN_SORT = 'unknown-sort'

    def __init__(self, kind, source, message):
        self.kind = kind
        self.source = source
        self.message = message

    def __str__(self):
        return f"{self.source}: {self.message}"

    def __repr__(self):
        return f"BuildWarning({self.kind!r}, {self.source!r})"


class Page:
    """A single rendered content file."""

    def __init__(self, front_matter: FrontMatter, content: str, slug: str,
                 section_path: str, base_url: str, source=None):
        self.front_matter = front_matter
        self.content = content
        self.slug = slug
        self.section_path = section_path
        self.source = source
        self.output_dir = f"{section_path}/{slug}" if section_path else slug
        self.output_path = f"{self.output_dir}/index.html"
        self.permalink = f"{base_url}/{self.output_dir}/"

    @property
    def title(self) -> str:
        if self.front_matter.title is not None:
            return self.front_matter.title
        return self.slug.replace('-', ' ').upper()

    @property
    def date(self):
        return self.front_matter.date

    @property
    def summary(self):
        return self.front_matter.summary

    @property
    def description(self):
        return self.front_matter.description

    @property
    def template(self):
        return self.front_matter.template

    @property
    def extra(self):
        return self.front_matter.extra

    def __repr__(self):
        return f"Page({self.output_dir!r})"


class Section:
    """A directory of content, with its optional _index.md and its pages."""

    def __init__(self, path: str, base_url: str):
        self.path = path
        self.front_matter = FrontMatter()
        self.content = ''
        self.source = None
        self.pages: List[Page] = []
        self.subsections: List['Section'] = []
        self.output_dir = path
        self.output_path = f"{path}/index.html" if path else 'index.html'
        self.permalink = f"{base_url}/{path}/" if path else f"{base_url}/"

    @property
    def is_root(self) -> bool:
        return self.path == ''

    @property
    def slug(self) -> str:
        return self.path

    @property
    def title(self) -> str:
        if self.front_matter.title is not None:
            return self.front_matter.title
        if self.is_root:
            return 'Home'
        return self.path.rsplit('/', 1)[-1]

    @property
    def date(self):
        return self.front_matter.date

    @property
    def summary(self):
        return self.front_matter.summary

    @property
    def description(self):
        return self.front_matter.description

    @property
    def template(self):
        return self.front_matter.template

    @property
    def extra(self):
        return self.front_matter.extra

    @property
    def sort_by(self) -> str:
        return self.front_matter.sort_by or SORT_BY_DATE

    def __repr__(self):
        return f"Section({self.path!r})"


class SiteTree:
    """The root section plus flat registries of every section and page."""

    def __init__(self, root: Section, sections: Dict[str, Section], pages: Dict[str, Page]):
        self.root = root
        self.sections = sections
        self.pages = pages

    def iter_sections(self) -> Iterator[Section]:
        """Every non-root section, ordered by path."""
        for path in sorted(self.sections):
            if path:
                yield self.sections[path]

    def iter_pages(self) -> Iterator[Page]:
        """Every page, section by section in listing order."""
        for path in sorted(self.sections):
            yield from self.sections[path].pages


def sort_pages(pages: List[Page], sort_by: str = SORT_BY_DATE) -> List[Page]:
    """
    Order a section's pages.

    By date: newest first, then undated pages in their original order.
    By title: case-insensitive alphabetical, ties keep their original order.
    """
    if sort_by == SORT_BY_TITLE:
        return sorted(pages, key=lambda page: page.title.casefold())
    dated = sorted((p for p in pages if p.date is not None), key=lambda p: p.date, reverse=True)
    undated = [p for p in pages if p.date is None]
    return dated + undated


def _ensure_section(sections: Dict[str, Section], path: str, base_url: str) -> Section:
    section = sections.get(path)
    if section is not None:
        return section
    section = Section(path, base_url)
    sections[path] = section
    parent_path = path.rsplit('/', 1)[0] if '/' in path else ''
    _ensure_section(sections, parent_path, base_url).subsections.append(section)
    return section


def build_site_tree(content_dir, config,
                    files: Optional[List[ContentFile]] = None) -> Tuple[SiteTree, List[BuildWarning]]:
    """
    Parse every content file and assemble the site tree.

    Args:
        content_dir: Root of the content tree
        config: SiteConfig, used for permalinks
        files: Pre-walked content files; walked from content_dir when omitted

    Returns:
        Tuple of (SiteTree, list of BuildWarning)

    Raises:
        MalformedFrontMatter, InvalidFrontMatterSyntax, BuildError
    """
    if files is None:
        files = walk_content(content_dir)

    base_url = config.base_url
    warnings: List[BuildWarning] = []
    root = Section('', base_url)
    sections: Dict[str, Section] = {'': root}
    pending = []

    for content_file in files:
        front_matter, body = parse_front_matter(content_file.read(), content_file.path)
        html = render_markdown(body)
        section = _ensure_section(sections, content_file.section_path, base_url)
        logger.debug(f"Parsed {content_file.relative_path}")

        if front_matter.title is None:
            warnings.append(BuildWarning(
                BuildWarning.MISSING_TITLE, content_file.relative_path, "no title in front matter"
            ))

        if content_file.is_index:
            section.front_matter = front_matter
            section.content = html
            section.source = content_file.relative_path
        else:
            pending.append((content_file, front_matter, html))

    pages: Dict[str, Page] = {}
    slugs_by_section: Dict[str, set] = {}
    for content_file, front_matter, html in pending:
        section = sections[content_file.section_path]
        slug = slugify(front_matter.slug or content_file.stem)
        used = slugs_by_section.setdefault(section.path, set())

        if slug in used:
            warnings.append(BuildWarning(
                BuildWarning.DUPLICATE_SLUG, content_file.relative_path,
                f"slug '{slug}' is already used in section '{section.path or '/'}'; page skipped"
            ))
            continue

        page = Page(front_matter, html, slug, section.path, base_url, content_file.relative_path)
        if page.output_dir in sections:
            warnings.append(BuildWarning(
                BuildWarning.PATH_CONFLICT, content_file.relative_path,
                f"output path '{page.output_path}' belongs to a section; page skipped"
            ))
            continue

        used.add(slug)
        section.pages.append(page)
        pages[page.output_path] = page

    for section in sections.values():
        sort_by = section.sort_by
        if sort_by not in SORT_ORDERS:
            warnings.append(BuildWarning(
                BuildWarning.UNKNOWN_SORT, section.source or section.path,
                f"unknown sort_by '{sort_by}'; sorting by date"
            ))
            sort_by = SORT_BY_DATE
        section.pages = sort_pages(section.pages, sort_by)
        section.subsections.sort(key=lambda s: s.path)

        if sort_by == SORT_BY_DATE and any(p.date is not None for p in section.pages):
            for page in section.pages:
                if page.date is None:
                    warnings.append(BuildWarning(
                        BuildWarning.UNDATED_PAGE, page.source,
                        "page has no date in a date-sorted section; listed last"
                    ))

    return SiteTree(root, sections, pages), warnings
