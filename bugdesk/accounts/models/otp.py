# ============================================
# accounts/models/otp.py
# ============================================
from django.db import models


class OtpCode(models.Model):
    # One live code per email: issuing a new code overwrites the row
    email = models.EmailField(max_length=255, unique=True)
    code = models.CharField(max_length=6)
    expires_at = models.DateTimeField()
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'otp_codes'

    def __str__(self):
        return f"OTP for {self.email} (expires {self.expires_at:%Y-%m-%d %H:%M})"

    def matches(self, code: str, now) -> bool:
        return self.code == code and self.expires_at >= now
