"""SSL utility functions."""

from sslcert.utils.helpers import (
    ZERO_TIME,
    add_months,
    fingerprint,
    parse_expire_time,
    parse_pem_chain,
)

__all__ = [
    "ZERO_TIME", "add_months", "fingerprint", "parse_expire_time",
    "parse_pem_chain",
]
