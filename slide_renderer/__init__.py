"""Slide Renderer – top-level package

Exposes the public API (`SlideRenderer`, `RenderContext`, the data model)
**and** sets up a minimal logging configuration so that every sub-module
can call

```python
import logging
logger = logging.getLogger(__name__)
```

and honour a single environment variable `SLIDERENDER_LOG_LEVEL`.
"""

from __future__ import annotations

import logging
import os

# ------------------------------------------------------------------
# Default logging – honour env var, otherwise INFO.
# ------------------------------------------------------------------
LOG_LEVEL = os.getenv("SLIDERENDER_LOG_LEVEL", "INFO").upper()
if not logging.getLogger().handlers:
    logging.basicConfig(
        level=LOG_LEVEL,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S",
    )

# Public API re-exports ------------------------------------------------
from .context import DiagnosticEvent, DiagnosticsLog, RenderContext  # noqa: E402
from .models import (  # noqa: E402
    Config,
    Footnote,
    ImageData,
    PresentationDocument,
    Slide,
    SlideElement,
    SlideMetadata,
    Theme,
)
from .renderer import SlideRenderer  # noqa: E402

__all__ = [
    "SlideRenderer",
    "RenderContext",
    "DiagnosticEvent",
    "DiagnosticsLog",
    "Config",
    "Footnote",
    "ImageData",
    "PresentationDocument",
    "Slide",
    "SlideElement",
    "SlideMetadata",
    "Theme",
]
