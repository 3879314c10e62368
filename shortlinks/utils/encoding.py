import secrets
import string

# Mixed-case alphanumeric alphabet; secrets.choice draws uniformly from it
ALPHABET = string.ascii_letters + string.digits
SHORT_CODE_LENGTH = 6

# Top-level routes a generated code must never shadow. Only "health" can
# collide at the default length; the rest matter when SHORT_CODE_LENGTH changes.
RESERVED_CODES = frozenset({"health", "ready", "test", "api", "docs", "redoc"})


def generate_short_code(length: int = SHORT_CODE_LENGTH) -> str:
    """Generate a cryptographically random alphanumeric code."""
    return ''.join(secrets.choice(ALPHABET) for _ in range(length))


def is_reserved(code: str) -> bool:
    return code in RESERVED_CODES
