"""HTML view layer: controller state and Jinja2 templates."""

from pathlib import Path

from fastapi.templating import Jinja2Templates

from userdesk_api.views.controller import FormMode, InvalidTransition, ViewController, ViewState

TEMPLATES_DIR = Path(__file__).resolve().parent.parent / "templates"


def website_href(website: str) -> str:
    """Link target for a website, which the remote data stores without a scheme."""
    website = website.strip()
    if not website:
        return ""
    if "://" in website:
        return website
    return f"http://{website}"


templates = Jinja2Templates(directory=str(TEMPLATES_DIR))
templates.env.filters["website_href"] = website_href
templates.env.globals["ViewState"] = ViewState
templates.env.globals["FormMode"] = FormMode

__all__ = [
    "FormMode",
    "InvalidTransition",
    "ViewController",
    "ViewState",
    "templates",
    "website_href",
]
