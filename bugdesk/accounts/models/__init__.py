# ============================================
# accounts/models/__init__.py
# ============================================
from .user import User, UserManager
from .otp import OtpCode

__all__ = [
    'User',
    'UserManager',
    'OtpCode',
]
