"""SSL helper utilities."""

import hashlib
import logging
import re
from datetime import datetime, timedelta

from cryptography import x509
from cryptography.hazmat.primitives import serialization

logger = logging.getLogger(__name__)

PEM_PATTERN = re.compile(
    r"-----BEGIN CERTIFICATE-----\s+.+?\s+-----END CERTIFICATE-----",
    re.DOTALL,
)

EXPIRE_TIME_FORMAT = "%Y-%m-%d %H:%M:%S"

# Returned in place of dates that cannot be parsed or represented.
ZERO_TIME = datetime.min


def parse_pem_chain(pem_text: str) -> list[str]:
    """Split a PEM bundle into individual certificate strings.

    Args:
        pem_text: PEM-encoded text potentially containing multiple certs.

    Returns:
        List of individual PEM certificate strings.
    """
    if not pem_text:
        return []
    return PEM_PATTERN.findall(pem_text)


def fingerprint(pem_text: str, algorithm: str = "sha1", separator: str = "") -> str:
    """Compute the fingerprint of the first certificate in a PEM bundle.

    Args:
        pem_text: PEM-encoded certificate text.
        algorithm: Hash algorithm (sha1, sha256, md5).
        separator: Placed between hex pairs; empty for a bare digest.

    Returns:
        Uppercase hex fingerprint, or "" when no certificate can be decoded.
    """
    certs = parse_pem_chain(pem_text)
    if not certs:
        return ""

    try:
        cert = x509.load_pem_x509_certificate(certs[0].encode())
    except ValueError as exc:
        logger.warning("Could not decode certificate for fingerprint: %s", exc)
        return ""

    h = hashlib.new(algorithm)
    h.update(cert.public_bytes(serialization.Encoding.DER))
    digest = h.hexdigest().upper()
    return separator.join(digest[i:i+2] for i in range(0, len(digest), 2))


def parse_expire_time(value: str) -> datetime:
    """Parse a ``YYYY-MM-DD HH:MM:SS`` timestamp, ZERO_TIME on failure."""
    try:
        return datetime.strptime(value, EXPIRE_TIME_FORMAT)
    except (TypeError, ValueError):
        return ZERO_TIME


def add_months(dt: datetime, months: int) -> datetime:
    """Shift ``dt`` by a number of months, normalising day overflow.

    The day of month is kept and any overflow rolls into the next month,
    so March 31 minus one month is March 3 (or March 2 in a leap year).

    Raises:
        OverflowError: the result falls outside the datetime range.
    """
    total = dt.year * 12 + (dt.month - 1) + months
    year, month = divmod(total, 12)
    if not 1 <= year <= 9999:
        raise OverflowError(f"year {year} is out of range")
    first = dt.replace(year=year, month=month + 1, day=1)
    return first + timedelta(days=dt.day - 1)
