#!/usr/bin/env python3
"""Script to check expiry of every certificate in the Huawei Cloud account."""

import argparse
import json
import logging
import sys
from datetime import datetime
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from config.settings import CERT_EXPIRY_WARNING_DAYS, LOG_FORMAT, LOG_LEVEL
from sslcert.errors import HuaweiCloudError
from sslcert.huawei_client import HuaweiClient


def classify(cert, warn_days: int, now: datetime) -> tuple[str, int]:
    """Return (indicator, days_remaining) for a certificate."""
    days = (cert.get_end_date() - now).days
    if cert.is_expired():
        return "EXPIRED", days
    if days <= warn_days:
        return "WARNING", days
    return "OK", days


def main():
    parser = argparse.ArgumentParser(
        description="Check expiry of Huawei Cloud SCM certificates"
    )
    parser.add_argument(
        "--warn-days",
        type=int,
        default=CERT_EXPIRY_WARNING_DAYS,
        help="Warning threshold in days",
    )
    parser.add_argument("--json", action="store_true", help="Output as JSON")
    parser.add_argument(
        "--output", help="Save report to file (implies --json)"
    )

    args = parser.parse_args()
    logging.basicConfig(level=LOG_LEVEL, format=LOG_FORMAT)

    try:
        certs = HuaweiClient().get_all_ssl_certificates()
    except HuaweiCloudError as exc:
        print(f"Failed to list certificates: {exc}", file=sys.stderr)
        sys.exit(1)

    now = datetime.now()
    report = []
    for cert in certs:
        indicator, days = classify(cert, args.warn_days, now)
        report.append({
            "id": cert.get_id(),
            "domain": cert.get_common_name(),
            "brand": cert.get_issuer_brand(),
            "expire_time": cert.expire_time,
            "days_remaining": days,
            "state": indicator,
        })

    if args.output or args.json:
        text = json.dumps(report, indent=2)
        if args.output:
            Path(args.output).write_text(text)
            print(f"Report saved to {args.output}")
        else:
            print(text)
        return

    for entry in report:
        print(f"[{entry['state']}] {entry['domain']} ({entry['id']})")
        print(f"  Brand:   {entry['brand']}")
        print(f"  Expiry:  {entry['expire_time']}")
        print(f"  Days remaining: {entry['days_remaining']}")
        print()


if __name__ == "__main__":
    main()
