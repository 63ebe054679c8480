# -*- coding: utf-8 -*-
"""
RU: Защита сайта общим паролем: проверка пароля, cookie авторизации (Argon2id), безопасный redirect.

EN: Shared site-password gate for the editor. A successful login stamps an
auth cookie holding an Argon2id hash of the site password; later requests
are authorized by verifying that hash against the configured password. An
empty password disables the gate.
"""

from __future__ import annotations

import logging
import os
import secrets
from typing import Any, Dict, Final, Optional

from argon2 import PasswordHasher as _Argon2Hasher
from argon2 import exceptions as argon2_exc

__all__ = [
    "AUTH_COOKIE",
    "COOKIE_MAX_AGE_SEC",
    "SiteGate",
    "safe_redirect_target",
]

_LOG = logging.getLogger(__name__)

AUTH_COOKIE: Final[str] = "site_auth"
COOKIE_MAX_AGE_SEC: Final[int] = 60 * 60 * 24 * 30  # 30 дней
LOGIN_PATH: Final[str] = "/auth"
_MAX_INPUT_LENGTH: Final[int] = 10_000  # DoS guard for extreme inputs
_MAX_COOKIE_LENGTH: Final[int] = 1_024


def safe_redirect_target(target: Optional[str]) -> str:
    """
    Restrict a post-login redirect to internal paths.

    Only paths starting with a single ``/`` are accepted, and never the login
    page itself; anything else maps to ``/``.
    """
    if not isinstance(target, str) or not target.startswith("/"):
        return "/"
    if target.startswith("//") or target.startswith("/\\"):
        return "/"
    if target == LOGIN_PATH:
        return "/"
    return target


class SiteGate:
    """
    Site-wide password gate.

    Args:
        password: configured site password; surrounding whitespace is
            ignored and an empty value disables the gate.
        time_cost, memory_cost, parallelism: Argon2id parameters.
    """

    def __init__(
        self,
        password: Optional[str],
        *,
        time_cost: int = 3,
        memory_cost: int = 65536,
        parallelism: int = 4,
    ) -> None:
        self._password = (password or "").strip()
        self._hasher = _Argon2Hasher(
            time_cost=time_cost,
            memory_cost=memory_cost,
            parallelism=parallelism,
        )

    @classmethod
    def from_env(cls, env_var: str = "SITE_PASSWORD", **kwargs: Any) -> SiteGate:
        return cls(os.environ.get(env_var), **kwargs)

    @classmethod
    def from_config(cls, config: Dict[str, Any], **kwargs: Any) -> SiteGate:
        """Read the password from the environment variable named in the config."""
        return cls.from_env(config["site_password_env"], **kwargs)

    @property
    def enabled(self) -> bool:
        return bool(self._password)

    def login(self, candidate: str) -> Optional[str]:
        """
        Check a submitted password.

        Returns:
            Cookie value to stamp on success, None on mismatch or when the
            gate is disabled (nothing to stamp).
        """
        if not self.enabled:
            return None
        if not isinstance(candidate, str) or len(candidate) > _MAX_INPUT_LENGTH:
            _LOG.warning("Site login rejected: malformed input")
            return None
        if not secrets.compare_digest(candidate.encode("utf-8"), self._password.encode("utf-8")):
            _LOG.info("Site login failed")
            return None
        _LOG.info("Site login succeeded")
        return self._hasher.hash(self._password)

    def is_authorized(self, cookie_value: Optional[str]) -> bool:
        """True when the gate is disabled or the cookie verifies against the password."""
        if not self.enabled:
            return True
        if not cookie_value or len(cookie_value) > _MAX_COOKIE_LENGTH:
            return False
        try:
            return self._hasher.verify(cookie_value, self._password)
        except (argon2_exc.VerificationError, argon2_exc.InvalidHashError):
            _LOG.debug("Auth cookie did not verify")
            return False

    def cookie_attributes(self, secure: bool) -> Dict[str, Any]:
        """Attributes to set alongside the auth cookie."""
        return {
            "httponly": True,
            "secure": secure,
            "samesite": "lax",
            "path": "/",
            "max_age": COOKIE_MAX_AGE_SEC,
        }
