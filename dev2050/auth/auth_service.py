import hmac

from dev2050.common.config import settings

def verify_password(candidate: str) -> bool:
    """
    Compare a submitted password with the configured admin password in constant time.
    An unset admin password never verifies.
    """
    expected = settings.ADMIN_PASSWORD
    if not expected or not candidate:
        return False
    return hmac.compare_digest(candidate.encode("utf-8"), expected.encode("utf-8"))
