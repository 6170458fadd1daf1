from pathlib import Path

from fastapi.templating import Jinja2Templates

from app.settings import settings
from app.utils import format_date, format_edited_at

BASE_DIR = Path(__file__).resolve().parent
TEMPLATES_DIR = BASE_DIR / "templates"
STATIC_DIR = BASE_DIR / "static"

templates = Jinja2Templates(directory=str(TEMPLATES_DIR))
templates.env.filters["format_date"] = format_date
templates.env.filters["format_edited_at"] = format_edited_at
templates.env.globals["site_name"] = settings.SITE_NAME


def render(template_name: str, **context) -> str:
    return templates.get_template(template_name).render(**context)
