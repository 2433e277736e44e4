# petcare/core/auth/__init__.py
"""
Аутентификация: подпись Telegram initData и сессионные JWT.
"""

from petcare.core.auth.telegram import VerifiedClaims, verify_init_data
from petcare.core.auth.tokens import SessionClaims, SessionCredential, SessionIssuer

__all__ = [
    "VerifiedClaims",
    "verify_init_data",
    "SessionClaims",
    "SessionCredential",
    "SessionIssuer",
]
