"""Built-in email templates.

Templates are keyed by (template_type, locale). Variables available to every
template: ``app_name``, ``login``, ``email``, ``activation_url``, ``token``.
"""

from dataclasses import dataclass

ACTIVATION = "activation"
REGISTRATION_NOTICE = "registration_notice"
FALLBACK_LOCALE = "en"


@dataclass(frozen=True)
class EmailTemplate:
    """Subject and bodies of one template."""

    subject: str
    html_body: str
    text_body: str


_HTML_LAYOUT = """
<!DOCTYPE html>
<html>
<head><meta charset="UTF-8"><title>{title}</title></head>
<body style="margin: 0; padding: 24px; font-family: Arial, sans-serif; background-color: #f4f7fa;">
  <div style="max-width: 600px; margin: 0 auto; background: #ffffff; border-radius: 8px; padding: 32px;">
    <h1 style="margin: 0 0 24px 0; color: #2c3e50;">{{{{ app_name }}}}</h1>
    {content}
  </div>
</body>
</html>
""".strip()


def _html(title: str, content: str) -> str:
    return _HTML_LAYOUT.format(title=title, content=content)


TEMPLATES: dict[tuple[str, str], EmailTemplate] = {
    (ACTIVATION, "en"): EmailTemplate(
        subject="{{ app_name }}: confirm your account",
        html_body=_html(
            "Confirm your account",
            """<p>Hello {{ login }},</p>
    <p>Your account has been created. Please confirm your email address to be able to sign in:</p>
    <p><a href="{{ activation_url }}" style="color: #3498db;">{{ activation_url }}</a></p>
    <p style="color: #718096;">If you did not register, you can ignore this email.</p>""",
        ),
        text_body="""Hello {{ login }},

Your account has been created. Please confirm your email address to be able to sign in:

{{ activation_url }}

If you did not register, you can ignore this email.""",
    ),
    (REGISTRATION_NOTICE, "en"): EmailTemplate(
        subject="{{ app_name }}: welcome",
        html_body=_html(
            "Welcome",
            """<p>Hello {{ login }},</p>
    <p>Your account has been created. You can sign in with the login <strong>{{ login }}</strong>.</p>""",
        ),
        text_body="""Hello {{ login }},

Your account has been created. You can sign in with the login {{ login }}.""",
    ),
    (ACTIVATION, "de"): EmailTemplate(
        subject="{{ app_name }}: Konto bestätigen",
        html_body=_html(
            "Konto bestätigen",
            """<p>Hallo {{ login }},</p>
    <p>Ihr Konto wurde angelegt. Bitte bestätigen Sie Ihre E-Mail-Adresse, um sich anmelden zu können:</p>
    <p><a href="{{ activation_url }}" style="color: #3498db;">{{ activation_url }}</a></p>
    <p style="color: #718096;">Falls Sie sich nicht registriert haben, ignorieren Sie diese E-Mail.</p>""",
        ),
        text_body="""Hallo {{ login }},

Ihr Konto wurde angelegt. Bitte bestätigen Sie Ihre E-Mail-Adresse, um sich anmelden zu können:

{{ activation_url }}

Falls Sie sich nicht registriert haben, ignorieren Sie diese E-Mail.""",
    ),
    (REGISTRATION_NOTICE, "de"): EmailTemplate(
        subject="{{ app_name }}: Willkommen",
        html_body=_html(
            "Willkommen",
            """<p>Hallo {{ login }},</p>
    <p>Ihr Konto wurde angelegt. Sie können sich mit dem Login <strong>{{ login }}</strong> anmelden.</p>""",
        ),
        text_body="""Hallo {{ login }},

Ihr Konto wurde angelegt. Sie können sich mit dem Login {{ login }} anmelden.""",
    ),
    (ACTIVATION, "fr"): EmailTemplate(
        subject="{{ app_name }} : confirmez votre compte",
        html_body=_html(
            "Confirmez votre compte",
            """<p>Bonjour {{ login }},</p>
    <p>Votre compte a été créé. Confirmez votre adresse e-mail pour pouvoir vous connecter :</p>
    <p><a href="{{ activation_url }}" style="color: #3498db;">{{ activation_url }}</a></p>
    <p style="color: #718096;">Si vous ne vous êtes pas inscrit, ignorez cet e-mail.</p>""",
        ),
        text_body="""Bonjour {{ login }},

Votre compte a été créé. Confirmez votre adresse e-mail pour pouvoir vous connecter :

{{ activation_url }}

Si vous ne vous êtes pas inscrit, ignorez cet e-mail.""",
    ),
    (REGISTRATION_NOTICE, "fr"): EmailTemplate(
        subject="{{ app_name }} : bienvenue",
        html_body=_html(
            "Bienvenue",
            """<p>Bonjour {{ login }},</p>
    <p>Votre compte a été créé. Vous pouvez vous connecter avec l'identifiant <strong>{{ login }}</strong>.</p>""",
        ),
        text_body="""Bonjour {{ login }},

Votre compte a été créé. Vous pouvez vous connecter avec l'identifiant {{ login }}.""",
    ),
}


def get_template(template_type: str, locale: str) -> EmailTemplate:
    """Return the template for a locale, falling back to English.

    Raises:
        KeyError: If the template type is unknown.
    """
    template = TEMPLATES.get((template_type, locale))
    if template is None:
        template = TEMPLATES[(template_type, FALLBACK_LOCALE)]
    return template
