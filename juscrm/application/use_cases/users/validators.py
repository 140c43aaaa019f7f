"""Common validation helpers for user use cases."""

MIN_PASSWORD_LENGTH = 6


def normalize_email(email: str) -> str:
    """Return ``email`` trimmed and lower-cased or raise ``ValueError``."""

    normalized = email.strip().lower()
    if normalized.count("@") != 1:
        raise ValueError("Email inválido")
    local_part, domain = normalized.split("@", 1)
    if not local_part or "." not in domain:
        raise ValueError("Email inválido")
    return normalized


def ensure_valid_password(password: str) -> str:
    """Return ``password`` when it satisfies the minimum length."""

    if len(password or "") < MIN_PASSWORD_LENGTH:
        raise ValueError(
            f"A senha deve ter pelo menos {MIN_PASSWORD_LENGTH} caracteres"
        )
    return password
