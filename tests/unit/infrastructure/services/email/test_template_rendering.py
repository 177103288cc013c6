"""Unit tests for email templates and the template renderer."""

import pytest
from jinja2 import TemplateSyntaxError, UndefinedError

from onboard.infrastructure.services.email import (
    ACTIVATION,
    REGISTRATION_NOTICE,
    TemplateRenderer,
    get_template,
)
from onboard.infrastructure.services.email.templates import TEMPLATES

VARIABLES = {
    "app_name": "Onboard",
    "login": "validuser",
    "email": "a@b.com",
    "activation_url": "https://meet.example.com/activate?u=t",
    "token": "t",
}


@pytest.fixture
def renderer() -> TemplateRenderer:
    return TemplateRenderer()


def test_render_substitutes_variables(renderer):
    assert renderer.render("Hello {{ login }}", VARIABLES) == "Hello validuser"


def test_html_rendering_escapes(renderer):
    assert renderer.render("{{ login }}", {"login": "<i>"}) == "&lt;i&gt;"


def test_text_rendering_does_not_escape(renderer):
    assert renderer.render("{{ login }}", {"login": "<i>"}, html=False) == "<i>"


def test_missing_variable_raises(renderer):
    with pytest.raises(UndefinedError):
        renderer.render("{{ missing }}", VARIABLES)


def test_syntax_error_raises(renderer):
    with pytest.raises(TemplateSyntaxError):
        renderer.render("{% if %}", VARIABLES)


def test_get_template_falls_back_to_english():
    assert get_template(ACTIVATION, "ja") is TEMPLATES[(ACTIVATION, "en")]


def test_get_template_unknown_type():
    with pytest.raises(KeyError):
        get_template("password_reset", "en")


@pytest.mark.parametrize("key", sorted(TEMPLATES))
def test_every_template_renders(renderer, key):
    """Test that all built-in templates render with the documented variables."""
    template = TEMPLATES[key]

    rendered = renderer.render_message(template, VARIABLES)

    assert "Onboard" in rendered.subject
    assert "validuser" in rendered.text_body
    assert "<html>" in rendered.html_body
    if key[0] == ACTIVATION:
        assert VARIABLES["activation_url"] in rendered.text_body
    else:
        assert key[0] == REGISTRATION_NOTICE
