"""HTML chart rendering backed by the application's Jinja2 templates."""

from __future__ import annotations

from pathlib import Path
from typing import Optional

from fastapi.templating import Jinja2Templates

from models.records import ChartDataset

TEMPLATES_DIR = Path(__file__).resolve().parent.parent / "app" / "templates"


class ChartRenderer:

    def __init__(
        self,
        templates: Optional[Jinja2Templates] = None,
        template_name: str = "chart.html",
        title: str = "Temperature and humidity",
    ) -> None:
        self.templates = templates or Jinja2Templates(directory=str(TEMPLATES_DIR))
        self.template_name = template_name
        self.title = title

    def render(self, dataset: ChartDataset) -> str:
        if dataset.is_empty:
            raise ValueError("Refusing to render an empty dataset.")
        template = self.templates.get_template(self.template_name)
        return template.render(
            title=self.title,
            dataset=dataset,
            point_count=len(dataset),
        )
