# =============================================================================
# lib/avatars.py - Gravatar URLs
# =============================================================================

import hashlib
from urllib.parse import urlencode

GRAVATAR_BASE_URL = "https://www.gravatar.com/avatar"


def gravatar_url(email: str, size: int = 200, rating: str = "pg", default: str = "mm") -> str:
    """
    Build the Gravatar URL for an email address.

    Gravatar identifies accounts by the MD5 of the trimmed, lower-cased
    email. `default` is the image served when no Gravatar exists
    ("mm" is the grey silhouette).
    """
    digest = hashlib.md5(email.strip().lower().encode("utf-8")).hexdigest()
    query = urlencode({"s": size, "r": rating, "d": default})
    return f"{GRAVATAR_BASE_URL}/{digest}?{query}"
