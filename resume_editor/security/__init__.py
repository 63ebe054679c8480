"""Защита сайта паролем."""

from resume_editor.security.site_auth import AUTH_COOKIE, SiteGate, safe_redirect_target

__all__ = ["AUTH_COOKIE", "SiteGate", "safe_redirect_target"]
