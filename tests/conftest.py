"""Test configuration and fixtures for Quire tests."""

import pytest
import tempfile
import shutil
import os
from pathlib import Path

import sys
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

from quire_pkg import Quire, SiteConfig


def write_content(root, relative_path, text):
    """Write a content file, creating parent directories."""
    path = Path(root) / relative_path
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text, encoding='utf-8')
    return path


@pytest.fixture
def temp_dir():
    """Create a temporary directory for tests."""
    temp_dir = tempfile.mkdtemp()
    yield temp_dir
    shutil.rmtree(temp_dir, ignore_errors=True)


@pytest.fixture
def site_config():
    """Site configuration shared by rendering tests."""
    return SiteConfig(
        base_url='https://example.com/',
        title='Example Site',
        description='A site for tests',
        extra={'author': 'Test Author'}
    )


@pytest.fixture
def mock_content_dir(temp_dir):
    """Create a mock content directory structure."""
    content_dir = Path(temp_dir) / 'content'

    write_content(content_dir, '_index.md', """+++
title = "Home"
+++
Welcome to the **example** site.
""")

    write_content(content_dir, 'about.md', """+++
title = "About"
+++
About this site.
""")

    write_content(content_dir, 'blog/_index.md', """+++
title = "Blog"
description = "Writing"
+++
All posts.
""")

    write_content(content_dir, 'blog/first.md', """+++
title = "First Post"
date = 2024-01-01
summary = "The first one"
+++
Hello from the first post.
""")

    write_content(content_dir, 'blog/second.md', """+++
title = "Second Post"
date = "2024-06-01"
+++
Hello from the second post.
""")

    write_content(content_dir, 'blog/draft-ideas.md', """+++
title = "Draft Ideas"
+++
Not dated yet.
""")

    return str(content_dir)


@pytest.fixture
def mock_templates_dir(temp_dir):
    """Create a mock templates directory."""
    templates_dir = Path(temp_dir) / 'templates'
    templates_dir.mkdir()

    (templates_dir / 'base.html').write_text("""<!DOCTYPE html>
<html>
<head>
    <title>{% block title %}{{ config.title }}{% endblock %}</title>
    <link rel="stylesheet" href="{{ path_prefix }}css/site.css">
</head>
<body>
    {% block content %}{% endblock %}
</body>
</html>
""")

    (templates_dir / 'index.html').write_text("""{% extends "base.html" %}
{% block content %}
<h1>{{ section.title }}</h1>
<div>{{ section.content|safe }}</div>
<ul>
{% for page in section.pages %}<li><a href="{{ path_prefix }}{{ page.slug }}/">{{ page.title }}</a></li>
{% endfor %}
</ul>
{% if sections.blog is defined %}<p>Latest: {{ sections.blog.pages[0].title }}</p>{% endif %}
{% endblock %}
""")

    (templates_dir / 'section.html').write_text("""{% extends "base.html" %}
{% block title %}{{ section.title }}{% endblock %}
{% block content %}
<h1>{{ section.title }}</h1>
<div>{{ section.content|safe }}</div>
<ul>
{% for page in section.pages %}<li data-slug="{{ page.slug }}">{{ page.title }}</li>
{% endfor %}
</ul>
{% endblock %}
""")

    (templates_dir / 'page.html').write_text("""{% extends "base.html" %}
{% block title %}{{ page.title }}{% endblock %}
{% block content %}
<article>
    <h1>{{ page.title }}</h1>
    {% if page.date %}<time>{{ page.date }}</time>{% endif %}
    <div>{{ page.content|safe }}</div>
    <a href="{{ path_prefix }}index.html">Home</a>
</article>
{% endblock %}
""")

    (templates_dir / 'custom.html').write_text("""CUSTOM {{ page.title }} {{ page.extra.mood }}
""")

    (templates_dir / '404.html').write_text("""{% extends "base.html" %}
{% block content %}<h1>Page not found</h1><a href="{{ path_prefix }}index.html">Home</a>{% endblock %}
""")

    return str(templates_dir)


@pytest.fixture
def mock_static_dir(temp_dir):
    """Create a mock static assets directory."""
    static_dir = Path(temp_dir) / 'static'
    (static_dir / 'css').mkdir(parents=True)
    (static_dir / 'css' / 'site.css').write_text("body { margin: 0; }\n")
    (static_dir / 'robots.txt').write_text("User-agent: *\n")
    return str(static_dir)


@pytest.fixture
def mock_output_dir(temp_dir):
    """Path of the output directory; not created."""
    return str(Path(temp_dir) / 'public')


@pytest.fixture
def generator(site_config, mock_content_dir, mock_templates_dir, mock_static_dir, mock_output_dir):
    """A Quire instance wired to the mock directories."""
    return Quire(
        site_config,
        content_dir=mock_content_dir,
        templates_dir=mock_templates_dir,
        static_dir=mock_static_dir,
        output_dir=mock_output_dir
    )
