"""401 challenge page for protected deployments."""

from __future__ import annotations

from html import escape

from starlette.responses import Response

from stagegate.headers import security_headers

_PAGE = """<!DOCTYPE html>
<html>
<head>
  <title>Staging Access Required</title>
  <meta name="viewport" content="width=device-width, initial-scale=1">
  <meta name="robots" content="noindex, nofollow">
  <style>
    body {{
      font-family: -apple-system, BlinkMacSystemFont, 'Segoe UI', Roboto, sans-serif;
      background: #f8fafc;
      margin: 0;
      display: flex;
      align-items: center;
      justify-content: center;
      min-height: 100vh;
    }}
    .container {{
      background: white;
      padding: 2rem;
      border-radius: 8px;
      box-shadow: 0 4px 6px -1px rgba(0, 0, 0, 0.1);
      text-align: center;
      max-width: 400px;
      margin: 1rem;
    }}
    .badge {{
      background: #fef3c7;
      color: #92400e;
      padding: 0.25rem 0.75rem;
      border-radius: 9999px;
      font-size: 0.875rem;
      display: inline-block;
      margin-bottom: 1rem;
    }}
    .message {{ color: #6b7280; line-height: 1.5; }}
    .contact {{ color: #9ca3af; font-size: 0.875rem; margin-top: 1.5rem; }}
  </style>
</head>
<body>
  <div class="container">
    <div class="badge">{realm}</div>
    <div class="message">
      This is a protected pre-production environment.
      Sign in with the credentials you were given to continue.
    </div>
    <div class="contact">{contact}</div>
  </div>
</body>
</html>
"""


def _quote_realm(realm: str) -> str:
    # quoted-string: printable ASCII only, quotes backslash-escaped
    cleaned = "".join(ch for ch in realm if ch.isascii() and ch.isprintable())
    return cleaned.replace("\\", "\\\\").replace('"', '\\"')


def render_page(realm: str, contact_email: str | None = None) -> str:
    """Render the informational HTML body."""
    if contact_email:
        address = escape(contact_email, quote=True)
        contact = f'<a href="mailto:{address}">Contact the development team</a> for access.'
    else:
        contact = "Ask the development team for access."
    return _PAGE.format(realm=escape(realm), contact=contact)


def challenge_response(realm: str, contact_email: str | None = None) -> Response:
    """Build the 401 response asking for Basic credentials."""
    headers = {"WWW-Authenticate": f'Basic realm="{_quote_realm(realm)}"'}
    headers.update(security_headers())
    return Response(
        content=render_page(realm, contact_email),
        status_code=401,
        headers=headers,
        media_type="text/html",
    )
