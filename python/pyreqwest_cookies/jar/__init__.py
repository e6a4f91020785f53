"""Cookie jar and its persistence format."""

from pyreqwest_cookies.jar.jar import Clock, CookieJar, StoreAction

__all__ = ["Clock", "CookieJar", "StoreAction"]
