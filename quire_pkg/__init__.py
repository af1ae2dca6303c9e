"""
Quire - A small static site generator.

Quire reads Markdown content with TOML front matter, groups it into sections,
renders it through Jinja2 templates and writes a complete HTML site alongside
the copied static assets.
"""

__version__ = "1.0.0"

from .core import Quire
from .errors import (
    BuildError,
    ConfigError,
    InvalidFrontMatterSyntax,
    MalformedFrontMatter,
    QuireError,
    TemplateNotFound,
    TemplateRenderError,
)
from .frontmatter import FrontMatter, dump_front_matter, parse_front_matter
from .markup import render_markdown
from .model import BuildWarning, Page, Section, SiteTree, build_site_tree
from .settings import QuireSettings, SiteConfig

__all__ = [
    'Quire', 'QuireSettings', 'SiteConfig',
    'FrontMatter', 'parse_front_matter', 'dump_front_matter', 'render_markdown',
    'BuildWarning', 'Page', 'Section', 'SiteTree', 'build_site_tree',
    'QuireError', 'ConfigError', 'BuildError', 'MalformedFrontMatter',
    'InvalidFrontMatterSyntax', 'TemplateNotFound', 'TemplateRenderError',
]
