import pytest
from datetime import timedelta
from unittest.mock import patch
from django.core import mail
from django.core.exceptions import ValidationError
from django.utils import timezone

from accounts.models import OtpCode, User
from accounts.services import otp_service
from accounts.services.token_service import decode_token


@pytest.mark.django_db
def test_send_otp_mails_six_digit_code():
    assert otp_service.send_otp("New@Example.com") is True

    record = OtpCode.objects.get(email="new@example.com")
    assert len(record.code) == 6 and record.code.isdigit()
    assert len(mail.outbox) == 1
    assert mail.outbox[0].to == ["new@example.com"]
    assert f"Your OTP code is {record.code}. It expires in 10 minutes." in mail.outbox[0].body


@pytest.mark.django_db
def test_reissue_replaces_previous_code():
    with patch("accounts.services.otp_service.generate_code", side_effect=["111111", "222222"]):
        otp_service.issue_otp("a@example.com")
        otp_service.issue_otp("a@example.com")

    assert OtpCode.objects.filter(email="a@example.com").count() == 1
    with pytest.raises(ValidationError):
        otp_service.check_otp("a@example.com", "111111")
    otp_service.check_otp("a@example.com", "222222")


@pytest.mark.django_db
def test_send_otp_reports_mail_failure():
    with patch("accounts.utils.notify.EmailMessage.send", side_effect=OSError("smtp down")):
        assert otp_service.send_otp("a@example.com") is False


@pytest.mark.django_db
def test_register_with_valid_otp_creates_one_user_and_usable_token():
    otp = otp_service.issue_otp("reg@example.com")

    user, token = otp_service.verify_otp_and_register(
        name="Reg", email="reg@example.com", password="pw123456", otp=otp.code
    )

    assert User.objects.filter(email="reg@example.com").count() == 1
    assert user.check_password("pw123456")
    assert user.role == User.Role.USER
    assert decode_token(token) == str(user.id)


@pytest.mark.django_db
def test_expired_otp_rejected_even_with_correct_code():
    otp = otp_service.issue_otp("late@example.com")
    OtpCode.objects.filter(pk=otp.pk).update(expires_at=timezone.now() - timedelta(seconds=1))

    with pytest.raises(ValidationError) as exc:
        otp_service.verify_otp_and_register(name="L", email="late@example.com", password="pw", otp=otp.code)
    assert exc.value.messages == ["Invalid or expired OTP"]
    assert not User.objects.filter(email="late@example.com").exists()


@pytest.mark.django_db
def test_mismatched_otp_rejected():
    otp = otp_service.issue_otp("m@example.com")
    wrong = "000000" if otp.code != "000000" else "999999"

    with pytest.raises(ValidationError):
        otp_service.verify_otp_and_register(name="M", email="m@example.com", password="pw", otp=wrong)


@pytest.mark.django_db
def test_otp_for_unknown_email_rejected():
    with pytest.raises(ValidationError):
        otp_service.check_otp("nobody@example.com", "123456")


@pytest.mark.django_db
def test_register_existing_email_rejected(owner):
    otp = otp_service.issue_otp(owner.email)

    with pytest.raises(ValidationError) as exc:
        otp_service.verify_otp_and_register(name="Dup", email=owner.email, password="pw", otp=otp.code)
    assert exc.value.messages == ["User already exists"]
    assert User.objects.filter(email=owner.email).count() == 1
