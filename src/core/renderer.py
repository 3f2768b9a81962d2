"""
DANFE rendering - binds presentation data to the HTML template.
"""
from datetime import tzinfo
from functools import lru_cache
from pathlib import Path
from typing import Any, Dict, Optional, Union
from jinja2 import Environment, FileSystemLoader, Template, select_autoescape
from loguru import logger

from models import PresentationDocument
from models.handle import NFeHandle
from core.assembler import assemble, is_nfe_handle
from core.nfe_xml import parse


TEMPLATES_DIR = Path(__file__).parent / "templates"
DEFAULT_TEMPLATE = TEMPLATES_DIR / "danfe.html"


def _blank_none(value: Any) -> Any:
    """Unset values print as nothing, like missing keys do"""
    return "" if value is None else value


@lru_cache(maxsize=None)
def load_template(template_path: Path = DEFAULT_TEMPLATE) -> Template:
    """Compile the template once per path"""
    template_path = Path(template_path)
    env = Environment(
        loader=FileSystemLoader(str(template_path.parent)),
        autoescape=select_autoescape(["html", "htm"]),
        finalize=_blank_none,
    )
    logger.debug(f"Loaded DANFE template: {template_path}")
    return env.get_template(template_path.name)


def render_html(data: Optional[Dict[str, Any]],
                template_path: Optional[Path] = None) -> str:
    """Return the filled DANFE markup, or '' when there is no data"""
    if not data:
        return ""
    template = load_template(Path(template_path) if template_path else DEFAULT_TEMPLATE)
    return template.render(**data)


class Danfe:
    """
    DANFE model for one invoice.

    Build it with `Danfe.from_nfe(handle)` or `Danfe.from_xml(text)`; an
    invalid source gives a model whose `to_html()` is empty.
    """

    def __init__(self,
                 nfe: Optional[NFeHandle],
                 tz: Union[tzinfo, str, None] = None,
                 template_path: Optional[Path] = None):
        self.nfe = nfe
        self.tz = tz
        self.template_path = template_path

    @classmethod
    def from_nfe(cls, nfe: Any, **kwargs) -> "Danfe":
        """Model from an already parsed document handle"""
        if not is_nfe_handle(nfe):
            return cls(None, **kwargs)
        return cls(nfe, **kwargs)

    @classmethod
    def from_xml(cls, xml: Any, **kwargs) -> "Danfe":
        """Model from the NF-e XML text"""
        if not xml or not isinstance(xml, str):
            return cls(None, **kwargs)
        return cls(parse(xml), **kwargs)

    @property
    def is_valid(self) -> bool:
        return self.nfe is not None

    def document(self) -> Optional[PresentationDocument]:
        """Presentation document, None for an invalid source"""
        return assemble(self.nfe, tz=self.tz)

    def data(self) -> Optional[Dict[str, Any]]:
        """Template data as a plain dict, None for an invalid source"""
        document = self.document()
        return document.to_template_data() if document else None

    def to_html(self) -> str:
        return render_html(self.data(), self.template_path)
