import sys
from pathlib import Path

import pytest

# Ensure project root is on sys.path so `import slide_renderer` works
project_root = Path(__file__).resolve().parent.parent
if str(project_root) not in sys.path:
    sys.path.insert(0, str(project_root))

from slide_renderer.context import DiagnosticsLog, RenderContext  # noqa: E402
from slide_renderer.models import PresentationDocument  # noqa: E402


@pytest.fixture
def make_presentation():
    """Build a PresentationDocument from frontmatter kwargs and slide dicts."""

    def build(*slides, **frontmatter):
        return PresentationDocument.from_dict({"frontmatter": frontmatter, "slides": list(slides)})

    return build


@pytest.fixture
def diagnostics():
    return DiagnosticsLog()


@pytest.fixture
def context(diagnostics):
    return RenderContext(diagnostics=diagnostics)
