"""
Pytest configuration and fixtures for all tests.
"""

import asyncio
import os
import sys
import pytest

# Add src to Python path before any imports
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '../src'))

# Set up test environment variables before importing any modules
os.environ.setdefault('AWS_DEFAULT_REGION', 'us-west-2')
os.environ.setdefault('TEMPLATE_KEY_PREFIX', 'templates/')
os.environ.setdefault('LOG_LEVEL', 'INFO')


class EchoRenderer:
    """Renderer stub that returns the template unchanged."""

    def __init__(self):
        self.calls = []

    async def render(self, template, model, cancellation=None):
        self.calls.append((template, model, cancellation))
        return template


class SubstitutingRenderer:
    """Renderer stub that replaces {{key}} placeholders with model values."""

    async def render(self, template, model, cancellation=None):
        result = template
        for key, value in model.items():
            result = result.replace('{{' + key + '}}', str(value))
        return result


class ForbiddenRenderer:
    """Renderer stub that fails the test if it is ever invoked."""

    async def render(self, template, model, cancellation=None):
        pytest.fail("Renderer must not be invoked for a literal body")


@pytest.fixture
def echo_renderer():
    return EchoRenderer()


@pytest.fixture
def substituting_renderer():
    return SubstitutingRenderer()


@pytest.fixture
def forbidden_renderer():
    return ForbiddenRenderer()


@pytest.fixture
def run():
    """Run a coroutine to completion from a synchronous test."""
    return asyncio.run


@pytest.fixture
def template_package(tmp_path, monkeypatch):
    """
    Create an importable package with bundled templates.

    Layout:
        herald_fixture_pkg/
            __init__.py
            compose.py          (calls using_embedded_template without a source)
            templates/welcome.txt
    """
    package_dir = tmp_path / 'herald_fixture_pkg'
    (package_dir / 'templates').mkdir(parents=True)
    (package_dir / '__init__.py').write_text('', encoding='utf-8')
    (package_dir / 'templates' / 'welcome.txt').write_text(
        'Welcome {{name}}!', encoding='utf-8'
    )
    (package_dir / 'compose.py').write_text(
        'def attach_welcome(email, model):\n'
        '    return email.using_embedded_template("templates/welcome.txt", model)\n',
        encoding='utf-8'
    )

    monkeypatch.syspath_prepend(str(tmp_path))
    yield 'herald_fixture_pkg'

    for name in list(sys.modules):
        if name == 'herald_fixture_pkg' or name.startswith('herald_fixture_pkg.'):
            del sys.modules[name]


@pytest.fixture
def top_level_module(tmp_path, monkeypatch):
    """
    Create an importable top-level module (not inside any package).

    Layout:
        herald_plain_compose.py   (calls using_embedded_template without a source)
        plain_welcome.txt
    """
    (tmp_path / 'herald_plain_compose.py').write_text(
        'def attach(email, path, model):\n'
        '    return email.using_embedded_template(path, model)\n',
        encoding='utf-8'
    )
    (tmp_path / 'plain_welcome.txt').write_text('Hello {{name}}', encoding='utf-8')

    monkeypatch.syspath_prepend(str(tmp_path))
    yield 'herald_plain_compose'

    sys.modules.pop('herald_plain_compose', None)


@pytest.fixture
def broken_package(tmp_path, monkeypatch):
    """Create a package whose __init__ imports a dependency that is not installed."""
    package_dir = tmp_path / 'herald_broken_pkg'
    package_dir.mkdir()
    (package_dir / '__init__.py').write_text(
        'import herald_missing_dependency\n', encoding='utf-8'
    )

    monkeypatch.syspath_prepend(str(tmp_path))
    yield 'herald_broken_pkg'

    sys.modules.pop('herald_broken_pkg', None)
