"""
Exceptions raised by Quire.

Every error here is fatal to a build. Non-fatal problems found while
assembling the site are reported as BuildWarning records instead.
"""

import os


class QuireError(Exception):
    """Base class for all fatal build errors."""


class ConfigError(QuireError):
    """The configuration file is missing required keys or cannot be parsed."""

    def __init__(self, path, detail):
        self.path = path
        self.detail = detail
        super().__init__(f"Invalid configuration file {path}: {detail}")


class MalformedFrontMatter(QuireError):
    """Front matter was opened with '+++' but never closed."""

    def __init__(self, path):
        self.path = path
        super().__init__(f"Front matter in {path or '<string>'} has no closing '+++' marker")


class InvalidFrontMatterSyntax(QuireError):
    """The front matter block is not valid TOML or has wrongly typed fields."""

    def __init__(self, path, detail):
        self.path = path
        self.detail = detail
        super().__init__(f"Invalid front matter in {path or '<string>'}: {detail}")


class TemplateNotFound(QuireError):
    """The selected template does not exist in the templates directory."""

    def __init__(self, template, entity):
        self.template = template
        self.entity = entity
        super().__init__(f"Template '{template}' not found while rendering {entity}")


class TemplateRenderError(QuireError):
    """The template exists but failed to compile or evaluate."""

    def __init__(self, template, entity, detail):
        self.template = template
        self.entity = entity
        self.detail = detail
        super().__init__(f"Error rendering template '{template}' for {entity}: {detail}")


class BuildError(QuireError):
    """A file-system operation failed during the build."""

    def __init__(self, operation, path, detail):
        self.operation = operation
        self.path = path
        self.detail = detail
        super().__init__(f"Failed to {operation} {os.fspath(path)}: {detail}")
