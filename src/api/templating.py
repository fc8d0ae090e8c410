"""
Jinja2 template setup.

Templates are loaded once at startup. Only presentational helpers are
exposed as filters; filtering, naming and signing are done before the
template runs.
"""

from pathlib import Path

from fastapi.templating import Jinja2Templates

from ..core.catalog.formatting import human_size, human_time


def create_templates(directory: Path) -> Jinja2Templates:
    """Load index.html / play.html from `directory` and register filters."""
    templates = Jinja2Templates(directory=str(directory))
    templates.env.filters["human_size"] = human_size
    templates.env.filters["human_time"] = human_time
    return templates
