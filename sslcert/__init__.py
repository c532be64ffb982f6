"""
Huawei Cloud SSL Certificate Module.

Provides a client for the SSL Certificate Manager (SCM) API and the
certificate record it returns.
"""

from sslcert.cloud_certificate import CloudSSLCertificate
from sslcert.errors import (
    DecodeError,
    HuaweiCloudError,
    MissingClientError,
    TransportError,
)
from sslcert.huawei_certificate import CertificateStatus, HuaweiSSLCertificate
from sslcert.huawei_client import HuaweiClient, HuaweiResponse

__all__ = [
    "CloudSSLCertificate", "HuaweiSSLCertificate", "CertificateStatus",
    "HuaweiClient", "HuaweiResponse",
    "HuaweiCloudError", "TransportError", "DecodeError", "MissingClientError",
]
