from authflow.shared.logging import sanitize_message


def test_redacts_password_assignments() -> None:
    assert sanitize_message("password=hunter22") == "password=***REDACTED***"
    assert "abc123" not in sanitize_message("password_hash=abc123")


def test_masks_email_local_part() -> None:
    assert sanitize_message("sign-up for e@q.com") == "sign-up for ***@q.com"


def test_redacts_bare_jwt() -> None:
    message = "issued eyJhbGciOiJIUzI1NiJ9.eyJ1c2VySWQiOjF9.abcDEF123"

    assert sanitize_message(message) == "issued ***JWT***"


def test_redacts_database_password() -> None:
    sanitized = sanitize_message("connect postgresql+psycopg://app:pw@db/auth")

    assert sanitized == "connect postgresql+psycopg://app:***REDACTED***@db/auth"
