"""
Jinja2 rendering of the site tree.

Every entity is rendered with its own template override when the front
matter names one, otherwise with the default for its type. Templates see:

    config       the SiteConfig
    page         the Page (pages, and sections rendered with page.html)
    section      the Section (homepage and sections)
    sections     every Section keyed by path
    path_prefix  relative path from the entity's directory back to the site root
"""

import os
import posixpath
import logging

from jinja2 import Environment, FileSystemLoader, StrictUndefined, TemplateError, select_autoescape
from jinja2 import TemplateNotFound as JinjaTemplateNotFound

from .errors import BuildError, TemplateNotFound, TemplateRenderError

logger = logging.getLogger('Quire.render')

HOME_TEMPLATE = 'index.html'
SECTION_TEMPLATE = 'section.html'
PAGE_TEMPLATE = 'page.html'
NOT_FOUND_TEMPLATE = '404.html'


def calculate_relative_path(current_output_dir):
    """Calculate relative path from an output directory (relative to the site root) to the root."""
    if not current_output_dir:
        return ''
    rel_path = posixpath.relpath('.', current_output_dir)
    # Ensure relative path ends with '/' for proper asset linking
    return rel_path + '/'


class TemplateRenderer:
    """Select templates and render entities with Jinja2."""

    def __init__(self, templates_dir, config, tree):
        if not os.path.isdir(templates_dir):
            raise BuildError('read templates directory', templates_dir, 'directory does not exist')
        self.templates_dir = templates_dir
        self.config = config
        self.tree = tree
        self.env = Environment(
            loader=FileSystemLoader(templates_dir),
            autoescape=select_autoescape(['html', 'xml']),
            undefined=StrictUndefined,
            keep_trailing_newline=True,
        )

    @staticmethod
    def select_template(entity, default):
        """The entity's own template override, else the default for its type."""
        return entity.template or default

    def render_template(self, template_name, entity_label, **context):
        """
        Render a named template.

        Raises:
            TemplateNotFound: The template (or one it extends or includes) does not exist
            TemplateRenderError: The template failed to compile or evaluate
        """
        context.setdefault('config', self.config)
        context.setdefault('sections', self.tree.sections)
        try:
            template = self.env.get_template(template_name)
            return template.render(**context)
        except JinjaTemplateNotFound as e:
            missing = e.name if e.name else template_name
            raise TemplateNotFound(missing, entity_label) from e
        except TemplateError as e:
            raise TemplateRenderError(template_name, entity_label, e) from e
        except (TypeError, ValueError, ArithmeticError, LookupError) as e:
            raise TemplateRenderError(template_name, entity_label, f"{type(e).__name__}: {e}") from e

    def _render_section_entity(self, section, template_name, label, path_prefix):
        if template_name == PAGE_TEMPLATE:
            # A section that asks for the page template is rendered as a standalone page
            return self.render_template(template_name, label, page=section, path_prefix=path_prefix)
        return self.render_template(template_name, label, section=section, path_prefix=path_prefix)

    def render_home(self):
        root = self.tree.root
        template_name = self.select_template(root, HOME_TEMPLATE)
        logger.debug(f"Rendering homepage with {template_name}")
        return self._render_section_entity(root, template_name, 'homepage', '')

    def render_section(self, section):
        template_name = self.select_template(section, SECTION_TEMPLATE)
        label = f"section '{section.path}'"
        logger.debug(f"Rendering {label} with {template_name}")
        return self._render_section_entity(
            section, template_name, label, calculate_relative_path(section.output_dir)
        )

    def render_page(self, page):
        template_name = self.select_template(page, PAGE_TEMPLATE)
        label = f"page '{page.source or page.output_dir}'"
        logger.debug(f"Rendering {label} with {template_name}")
        return self.render_template(
            template_name, label,
            page=page,
            path_prefix=calculate_relative_path(page.output_dir),
        )

    def render_404(self):
        logger.debug("Rendering 404 page")
        return self.render_template(NOT_FOUND_TEMPLATE, '404 page', path_prefix='')
