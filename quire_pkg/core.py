import os
import shutil
import logging
import time

from .assets import copy_static_assets
from .content import walk_content
from .errors import BuildError
from .model import build_site_tree
from .render import TemplateRenderer


class InfoFilter(logging.Filter):
    """Filter to allow only selected INFO messages to be shown in the console."""
    def filter(self, record):
        if record.levelno != logging.INFO:
            return True
        allowed_messages = [
            "Starting site build",
            "Site build completed in",
            "Total pages generated:",
            "Total sections generated:",
            "Total assets copied:",
            "Building homepage",
            "Building 404 page",
            "Build finished with",
        ]
        return any(msg in record.getMessage() for msg in allowed_messages)


class Quire:
    """Build a static site from a content tree, a templates directory and a static directory."""

    def __init__(self, config, content_dir='content', templates_dir='templates', static_dir='static',
                 output_dir='public', verbose=False, log_file=None):
        self.config = config
        self.content_dir = content_dir
        self.templates_dir = templates_dir
        self.static_dir = static_dir
        self.output_dir = output_dir
        self.verbose = verbose
        self.log_file = log_file
        self.pages_generated = 0
        self.sections_generated = 0
        self.assets_copied = 0
        self.warnings = []
        self.tree = None

        self.setup_logging()

    def setup_logging(self):
        """Set up logging configuration."""
        self.logger = logging.getLogger('Quire')
        self.logger.setLevel(logging.DEBUG if self.verbose else logging.INFO)

        if not self.logger.handlers:
            # Console handler with filter
            console_handler = logging.StreamHandler()
            console_handler.setLevel(logging.DEBUG if self.verbose else logging.INFO)
            if not self.verbose:
                console_handler.addFilter(InfoFilter())
            console_formatter = logging.Formatter('%(message)s')
            console_handler.setFormatter(console_formatter)
            self.logger.addHandler(console_handler)

            # File handler for all logs
            if self.log_file:
                log_dir = os.path.dirname(os.path.abspath(self.log_file))
                os.makedirs(log_dir, exist_ok=True)
                file_handler = logging.FileHandler(self.log_file)
                file_handler.setLevel(logging.DEBUG)
                file_formatter = logging.Formatter('%(asctime)s - %(name)s - %(levelname)s - %(message)s')
                file_handler.setFormatter(file_formatter)
                self.logger.addHandler(file_handler)

    def check_source_dirs(self):
        """Fail before touching the output directory if an input directory is missing."""
        for label, path in (('content', self.content_dir), ('templates', self.templates_dir)):
            if not os.path.isdir(path):
                raise BuildError(f'read {label} directory', path, 'directory does not exist')

    def create_output_dir(self):
        """Delete and recreate the output directory."""
        output_real = os.path.realpath(self.output_dir)
        if os.path.commonpath([output_real, os.getcwd()]) == output_real:
            raise BuildError('clear output directory', self.output_dir,
                             'it contains the working directory; refusing to delete it')

        sources = [self.content_dir, self.templates_dir]
        if self.static_dir:
            sources.append(self.static_dir)
        for path in sources:
            path_real = os.path.realpath(path)
            if os.path.commonpath([output_real, path_real]) in (output_real, path_real):
                raise BuildError('clear output directory', self.output_dir,
                                 f'it overlaps the source directory {path}; refusing to delete it')

        if os.path.exists(self.output_dir):
            try:
                shutil.rmtree(self.output_dir)
            except (IOError, OSError) as e:
                raise BuildError('clear output directory', self.output_dir, e) from e
        try:
            os.makedirs(self.output_dir, exist_ok=True)
        except (IOError, OSError) as e:
            raise BuildError('create output directory', self.output_dir, e) from e

    def write_output(self, relative_path, html):
        """Write rendered HTML to a path relative to the output directory."""
        output_file_path = os.path.join(self.output_dir, *relative_path.split('/'))
        if os.path.exists(output_file_path):
            self.logger.warning(f"Overwriting static file with rendered output: {relative_path}")
        try:
            os.makedirs(os.path.dirname(output_file_path), exist_ok=True)
            with open(output_file_path, 'w', encoding='utf-8', newline='') as output_file:
                output_file.write(html)
        except (IOError, OSError) as e:
            raise BuildError('write', output_file_path, e) from e
        self.logger.debug(f"Generated HTML: {output_file_path}")

    def report_warnings(self):
        """Log every collected warning once, at the end of the build."""
        for warning in self.warnings:
            self.logger.warning(f"Warning: {warning}")
        if self.warnings:
            self.logger.info(f"Build finished with {len(self.warnings)} warning(s).")

    def build(self):
        """Main build process."""
        start_time = time.time()
        self.logger.info("Starting site build...")
        self.pages_generated = 0
        self.sections_generated = 0

        self.check_source_dirs()
        self.create_output_dir()
        self.assets_copied = copy_static_assets(self.static_dir, self.output_dir)

        files = walk_content(self.content_dir)
        self.tree, self.warnings = build_site_tree(self.content_dir, self.config, files)
        renderer = TemplateRenderer(self.templates_dir, self.config, self.tree)

        self.logger.info("Building homepage")
        self.write_output(self.tree.root.output_path, renderer.render_home())

        for section in self.tree.iter_sections():
            self.write_output(section.output_path, renderer.render_section(section))
            self.sections_generated += 1

        for page in self.tree.iter_pages():
            self.write_output(page.output_path, renderer.render_page(page))
            self.pages_generated += 1

        self.logger.info("Building 404 page")
        self.write_output('404.html', renderer.render_404())

        self.report_warnings()

        total_time = time.time() - start_time
        self.logger.info(f"Site build completed in {total_time:.6f} seconds.")
        self.logger.info(f"Total pages generated: {self.pages_generated}")
        self.logger.info(f"Total sections generated: {self.sections_generated}")
        self.logger.info(f"Total assets copied: {self.assets_copied}")
        return self.tree
