import re
import time

_NON_SLUG_RE = re.compile(r"[^a-z0-9]+")


def slugify(text: str) -> str:
    return _NON_SLUG_RE.sub("-", str(text or "").lower()).strip("-")


def _base36(number: int) -> str:
    digits = "0123456789abcdefghijklmnopqrstuvwxyz"
    out = ""
    while True:
        number, rem = divmod(number, 36)
        out = digits[rem] + out
        if number == 0:
            return out


def unique_slug(text: str) -> str:
    """Slug with a millisecond timestamp suffix, so equal titles never collide."""
    return f"{slugify(text)}-{_base36(time.time_ns() // 1_000_000)}"
