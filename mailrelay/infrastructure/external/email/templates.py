"""HTML layout for system mail (verification and password reset), rendered with Jinja."""

from __future__ import annotations

from jinja2 import Environment, Template

_SYSTEM_EMAIL_TEMPLATE = """<!DOCTYPE html>
<html><body style="margin:0;padding:24px;background:#f1f5f9;font-family:Segoe UI,Arial,sans-serif">
<table role="presentation" width="100%" cellspacing="0" cellpadding="0">
<tr><td align="center">
<table role="presentation" width="560" cellspacing="0" cellpadding="0" style="background:#ffffff;border-radius:8px;padding:32px">
<tr><td>
<p style="margin:0 0 8px;color:#64748b;font-size:13px">{{ app_name }}</p>
<h1 style="margin:0 0 16px;color:#0f172a;font-size:20px">{{ title }}</h1>
{% for line in body_lines %}
<p style="margin:0 0 12px;color:#334155;font-size:15px;line-height:1.5">{{ line }}</p>
{% endfor %}
<p style="margin:24px 0"><a href="{{ button_url }}" style="background:#2563eb;color:#ffffff;padding:12px 20px;border-radius:6px;text-decoration:none;font-weight:600">{{ button_text }}</a></p>
<p style="margin:0;color:#94a3b8;font-size:12px">If the button does not work, copy this link:<br>{{ button_url }}</p>
</td></tr></table>
</td></tr></table>
</body></html>
"""

_env = Environment(autoescape=True, trim_blocks=True, lstrip_blocks=True)
_template: Template = _env.from_string(_SYSTEM_EMAIL_TEMPLATE)


def build_system_email_html(
    app_name: str,
    title: str,
    body_lines: list[str],
    button_text: str,
    button_url: str,
) -> str:
    """Render a single-button HTML message. Every interpolated value is escaped."""
    return _template.render(
        app_name=app_name,
        title=title,
        body_lines=body_lines,
        button_text=button_text,
        button_url=button_url,
    )
