#!/usr/bin/env python3
"""
Huawei Cloud SSL Certificate Tool - Main Entry Point.

Usage:
    python main.py ssl list [--limit N] [--offset N] [--all] [--json]
    python main.py ssl show <cert_id>
    python main.py ssl export <cert_id> [--out-dir DIR]
"""

import argparse
import json
import logging
import os
import sys
from pathlib import Path

from config.settings import LOG_FORMAT, LOG_LEVEL, SSL_CERTS_DIR, SSL_KEYS_DIR
from sslcert.errors import HuaweiCloudError
from sslcert.huawei_client import HuaweiClient


def _get_client():
    return HuaweiClient()


# ============================================================
# SSL Commands
# ============================================================

def cmd_ssl_list(args):
    """List certificates in the account."""
    client = _get_client()
    if args.all:
        certs = client.get_all_ssl_certificates()
        total = len(certs)
    else:
        certs, total = client.get_ssl_certificates(size=args.limit, offset=args.offset)

    if args.json:
        print(json.dumps({
            "total_count": total,
            "certificates": [c.to_dict() for c in certs],
        }, indent=2))
        return

    if not certs:
        print("No certificates found.")
        return

    print(f"\n{'ID':26s} {'Domain':30s} {'Brand':12s} {'Expires':20s} {'Status':8s}")
    print("-" * 100)
    for c in certs:
        print(
            f"{c.get_id():26s} {c.get_common_name():30s} {c.get_issuer_brand():12s} "
            f"{c.expire_time:20s} {c.get_status():8s}"
        )
    print(f"\nShowing {len(certs)} of {total} certificate(s)")


def cmd_ssl_show(args):
    """Show one certificate with its fingerprint."""
    client = _get_client()
    cert = client.find_ssl_certificate(args.cert_id)
    if cert is None:
        print(f"Certificate not found: {args.cert_id}")
        sys.exit(1)

    cert.ensure_details_loaded()
    start = cert.get_start_date()
    end = cert.get_end_date()
    print(f"ID:          {cert.get_id()}")
    print(f"Name:        {cert.get_name()}")
    print(f"Domain:      {cert.get_common_name()}")
    print(f"SANs:        {cert.get_subject_alternative_names() or '-'}")
    print(f"Brand:       {cert.get_issuer_brand()}")
    print(f"Type:        {cert.certificate_type} ({cert.domain_type})")
    print(f"Valid:       {start:%Y-%m-%d} -> {end:%Y-%m-%d}")
    print(f"Status:      {cert.get_status()} (provider: {cert.status})")
    print(f"Uploaded:    {'yes' if cert.is_uploaded() else 'no'}")
    print(f"Fingerprint: {cert.get_fingerprint() or '-'}")


def cmd_ssl_export(args):
    """Write a certificate body and private key to disk."""
    cert_id = args.cert_id
    if not cert_id or cert_id in (".", "..") or "/" in cert_id or "\\" in cert_id:
        print(f"Invalid certificate ID for export: {cert_id!r}", file=sys.stderr)
        sys.exit(1)

    client = _get_client()
    cert = client.get_ssl_certificate(args.cert_id)

    if args.out_dir:
        certs_dir = keys_dir = Path(args.out_dir)
    else:
        certs_dir, keys_dir = SSL_CERTS_DIR, SSL_KEYS_DIR
    for d in (certs_dir, keys_dir):
        d.mkdir(parents=True, exist_ok=True)

    cert_path = certs_dir / f"{args.cert_id}.crt"
    key_path = keys_dir / f"{args.cert_id}.key"
    cert_path.write_text(cert.get_certificate_body())
    key_path.write_text(cert.get_private_key())
    os.chmod(key_path, 0o600)

    print(f"Certificate: {cert_path}")
    print(f"Key: {key_path}")


def build_parser():
    """Build the argument parser."""
    parser = argparse.ArgumentParser(
        description="Huawei Cloud SSL Certificate Manager Tool"
    )
    subparsers = parser.add_subparsers(dest="module", help="Module")

    # --- SSL commands ---
    ssl_parser = subparsers.add_parser("ssl", help="SCM certificate queries")
    ssl_sub = ssl_parser.add_subparsers(dest="action")

    lst = ssl_sub.add_parser("list", help="List certificates")
    lst.add_argument("--limit", type=int, default=50, help="Page size (1-50)")
    lst.add_argument("--offset", type=int, default=0, help="Page offset")
    lst.add_argument("--all", action="store_true", help="Fetch every page")
    lst.add_argument("--json", action="store_true", help="Output as JSON")
    lst.set_defaults(func=cmd_ssl_list)

    show = ssl_sub.add_parser("show", help="Show certificate details")
    show.add_argument("cert_id", help="Certificate ID")
    show.set_defaults(func=cmd_ssl_show)

    exp = ssl_sub.add_parser("export", help="Export certificate and key")
    exp.add_argument("cert_id", help="Certificate ID")
    exp.add_argument("--out-dir", help="Directory for both files")
    exp.set_defaults(func=cmd_ssl_export)

    return parser


def main():
    parser = build_parser()
    args = parser.parse_args()

    if not args.module:
        parser.print_help()
        sys.exit(1)

    if not hasattr(args, "func"):
        parser.parse_args([args.module, "--help"])
        sys.exit(1)

    logging.basicConfig(level=LOG_LEVEL, format=LOG_FORMAT)

    try:
        args.func(args)
    except HuaweiCloudError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
