"""Project-wide settings and defaults."""

import os
from pathlib import Path

# Base paths
PROJECT_ROOT = Path(__file__).resolve().parent.parent
DATA_DIR = PROJECT_ROOT / "data"

# Exported certificate material
SSL_CERTS_DIR = Path(os.environ.get("SSL_CERTS_DIR", str(DATA_DIR / "certs")))
SSL_KEYS_DIR = Path(os.environ.get("SSL_KEYS_DIR", str(DATA_DIR / "keys")))

# Huawei Cloud SSL Certificate Manager (SCM)
HUAWEI_CERT_DEFAULT_REGION = os.environ.get("HUAWEI_CERT_REGION", "cn-north-4")
HUAWEI_SCM_ENDPOINT = os.environ.get("HUAWEI_SCM_ENDPOINT", "")
HUAWEI_AUTH_TOKEN = os.environ.get("HUAWEI_AUTH_TOKEN", "")
HUAWEI_REQUEST_TIMEOUT = int(os.environ.get("HUAWEI_REQUEST_TIMEOUT", "30"))
HUAWEI_CERT_RESOURCE = "scm/certificates"
HUAWEI_CERT_PAGE_SIZE = 50

# Monitoring
CERT_EXPIRY_WARNING_DAYS = int(os.environ.get("CERT_EXPIRY_WARNING_DAYS", "30"))

# Logging
LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO")
LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
