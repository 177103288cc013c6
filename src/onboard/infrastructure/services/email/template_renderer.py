"""Jinja2 rendering for registration emails.

Templates run in a sandbox with ``StrictUndefined``, so a template that refers
to a variable the dispatcher does not provide fails loudly instead of sending a
message with a blank activation link.
"""

from dataclasses import dataclass
from functools import lru_cache

from jinja2 import StrictUndefined, Template, TemplateSyntaxError, UndefinedError
from jinja2.sandbox import SandboxedEnvironment

from onboard.core.logging import get_logger
from onboard.infrastructure.services.email.templates import EmailTemplate

logger = get_logger(__name__)


@dataclass(frozen=True)
class RenderedEmail:
    subject: str
    html_body: str
    text_body: str


def _environment(autoescape: bool) -> SandboxedEnvironment:
    return SandboxedEnvironment(
        autoescape=autoescape,
        trim_blocks=True,
        lstrip_blocks=True,
        undefined=StrictUndefined,
    )


class TemplateRenderer:
    """Renders email sources; HTML output escapes values, text output does not."""

    def __init__(self) -> None:
        self.html_env = _environment(autoescape=True)
        self.text_env = _environment(autoescape=False)
        self._compile = lru_cache(maxsize=64)(self._compile_uncached)

    def _compile_uncached(self, source: str, html: bool) -> Template:
        env = self.html_env if html else self.text_env
        return env.from_string(source)

    def render(self, template_string: str, variables: dict[str, str], html: bool = True) -> str:
        """Render one template source.

        Raises:
            TemplateSyntaxError: If the source is not valid Jinja2.
            UndefinedError: If the source uses a variable not in ``variables``.
        """
        try:
            return self._compile(template_string, html).render(**variables)
        except TemplateSyntaxError as e:
            logger.error("Template syntax error", error=str(e), line=e.lineno)
            raise
        except UndefinedError as e:
            logger.error("Undefined variable in template", error=str(e))
            raise

    def render_message(self, template: EmailTemplate, variables: dict[str, str]) -> RenderedEmail:
        """Render subject, HTML body and text body of a template."""
        return RenderedEmail(
            subject=self.render(template.subject, variables, html=False),
            html_body=self.render(template.html_body, variables),
            text_body=self.render(template.text_body, variables, html=False),
        )


_template_renderer: TemplateRenderer | None = None


def get_template_renderer() -> TemplateRenderer:
    global _template_renderer
    if _template_renderer is None:
        _template_renderer = TemplateRenderer()
    return _template_renderer
