"""Cookie jar middlewares for pyreqwest clients."""

from pyreqwest_cookies.middleware.cookie import BlockingCookieMiddleware, CookieMiddleware

__all__ = ["BlockingCookieMiddleware", "CookieMiddleware"]
