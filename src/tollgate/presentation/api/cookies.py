"""Session cookie handling.

The cookie only carries the session token. Its max-age is deliberately
shorter than the token's lifetime; the expiry embedded in the token is
the one that counts.
"""

from typing import Any

from fastapi import Request, Response

from tollgate_config.settings import Settings


class SessionCookieManager:
    """Sets, clears and reads cookies with fixed security attributes.

    Defaults:
    - HttpOnly: Not accessible to JavaScript (XSS protection)
    - SameSite=Strict: Not sent on cross-site requests (CSRF protection)
    - Max-Age: 15 minutes
    - Secure: Only in production, unless configured explicitly
    """

    def __init__(self, settings: Settings):
        self._defaults: dict[str, Any] = {
            "httponly": True,
            "secure": settings.cookie_secure,
            "samesite": settings.api_cookie_samesite,
            "max_age": settings.session_cookie_max_age_seconds,
            "path": "/",
            "domain": settings.api_cookie_domain,
        }

    @property
    def defaults(self) -> dict[str, Any]:
        return dict(self._defaults)

    def options(self, **overrides: Any) -> dict[str, Any]:
        """Return the default attributes with ``overrides`` merged on top."""
        return {**self._defaults, **overrides}

    def set(self, response: Response, name: str, value: str, **overrides: Any) -> None:
        response.set_cookie(key=name, value=value, **self.options(**overrides))

    def clear(self, response: Response, name: str, **overrides: Any) -> None:
        options = self.options(**overrides)
        response.delete_cookie(
            key=name,
            path=options["path"],
            domain=options["domain"],
            secure=options["secure"],
            httponly=options["httponly"],
            samesite=options["samesite"],
        )

    @staticmethod
    def get(request: Request, name: str) -> str | None:
        value = request.cookies.get(name)
        return value or None
