"""Huawei Cloud SCM certificate record."""

import logging
import weakref
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Mapping, Optional

from sslcert.cloud_certificate import CloudSSLCertificate
from sslcert.errors import DecodeError, HuaweiCloudError, MissingClientError
from sslcert.utils.helpers import (
    ZERO_TIME,
    add_months,
    fingerprint,
    parse_expire_time,
)

logger = logging.getLogger(__name__)


class CertificateStatus:
    """Lifecycle states reported by SCM in the ``status`` field."""

    PAID = "PAID"
    ISSUED = "ISSUED"
    CHECKING = "CHECKING"
    CANCEL_CHECKING = "CANCELCHECKING"
    UNPASSED = "UNPASSED"
    EXPIRED = "EXPIRED"
    REVOKING = "REVOKING"
    CANCEL_REVOKING = "CANCLEREVOKING"  # sic, as returned by the API
    REVOKED = "REVOKED"
    UPLOAD = "UPLOAD"
    SUPPLEMENT_CHECKING = "SUPPLEMENTCHECKING"
    CANCEL_SUPPLEMENTING = "CANCELSUPPLEMENTING"


# Values returned by get_status(); not related to the raw status field.
STATUS_EXPIRED = "expired"
STATUS_NORMAL = "normal"


def _to_int(data: Mapping[str, Any], key: str) -> int:
    value = data.get(key)
    if value is None or value == "":
        return 0
    try:
        return int(value)
    except (TypeError, ValueError):
        raise DecodeError(f"field {key!r} is not an integer: {value!r}")


def _to_bool(data: Mapping[str, Any], key: str) -> bool:
    value = data.get(key)
    if value is None:
        return False
    if not isinstance(value, bool):
        raise DecodeError(f"field {key!r} is not a boolean: {value!r}")
    return value


def _to_str(data: Mapping[str, Any], key: str, default: str = "") -> str:
    value = data.get(key)
    return default if value is None else str(value)


@dataclass
class HuaweiSSLCertificate(CloudSSLCertificate):
    """An SSL certificate managed by Huawei Cloud SCM.

    Records returned by a list call carry metadata only: ``certificate``
    and ``private_key`` stay ``None`` until :meth:`ensure_details_loaded`
    fetches them through the export API. The body, key and fingerprint
    getters trigger that load themselves, so reading them may perform one
    network call per instance.

    The owning client is held through a weak reference. Records from
    :meth:`HuaweiClient.get_ssl_certificate` are bound to the client that
    fetched them; records from a list call are not, and need either
    :meth:`bind` or an explicit client passed to
    :meth:`ensure_details_loaded`.
    """

    id: str = ""
    name: str = ""
    domain: str = ""
    sans: str = ""
    signature_algorithm: str = ""
    deploy_support: bool = False
    certificate_type: str = ""
    brand: str = ""
    expire_time: str = ""
    domain_type: str = ""
    validity_period: int = 0  # months
    status: str = ""
    domain_count: int = 0
    wildcard_count: int = 0
    description: str = ""
    enterprise_project_id: str = "0"

    # Populated by the export API
    certificate: Optional[str] = None
    private_key: Optional[str] = field(default=None, repr=False)
    details_loaded: bool = False

    _client_ref: Optional[weakref.ref] = field(
        default=None, init=False, repr=False, compare=False
    )

    @classmethod
    def from_dict(
        cls, data: Mapping[str, Any], client=None
    ) -> "HuaweiSSLCertificate":
        """Build a record from a decoded SCM JSON object.

        A payload that includes ``certificate`` counts as a loaded detail
        record.

        Raises:
            DecodeError: ``data`` is not an object, a numeric field is
                not an integer, or ``deploy_support`` is not a boolean.
        """
        if not isinstance(data, Mapping):
            raise DecodeError(
                f"expected a certificate object, got {type(data).__name__}"
            )

        cert = cls(
            id=_to_str(data, "id"),
            name=_to_str(data, "name"),
            domain=_to_str(data, "domain"),
            sans=_to_str(data, "sans"),
            signature_algorithm=_to_str(data, "signature_algorithm"),
            deploy_support=_to_bool(data, "deploy_support"),
            certificate_type=_to_str(data, "type"),
            brand=_to_str(data, "brand"),
            expire_time=_to_str(data, "expire_time"),
            domain_type=_to_str(data, "domain_type"),
            validity_period=_to_int(data, "validity_period"),
            status=_to_str(data, "status"),
            domain_count=_to_int(data, "domain_count"),
            wildcard_count=_to_int(data, "wildcard_count"),
            description=_to_str(data, "description"),
            enterprise_project_id=_to_str(data, "enterprise_project_id", "0"),
        )
        if "certificate" in data:
            cert.certificate = _to_str(data, "certificate")
            cert.private_key = _to_str(data, "private_key")
            cert.details_loaded = True
        if client is not None:
            cert.bind(client)
        return cert

    def to_dict(self, include_private_key: bool = False) -> dict:
        """Render the record in the SCM wire shape."""
        result = {
            "id": self.id,
            "name": self.name,
            "domain": self.domain,
            "sans": self.sans,
            "signature_algorithm": self.signature_algorithm,
            "deploy_support": self.deploy_support,
            "type": self.certificate_type,
            "brand": self.brand,
            "expire_time": self.expire_time,
            "domain_type": self.domain_type,
            "validity_period": self.validity_period,
            "status": self.status,
            "domain_count": self.domain_count,
            "wildcard_count": self.wildcard_count,
            "description": self.description,
            "enterprise_project_id": self.enterprise_project_id,
        }
        if self.details_loaded:
            result["certificate"] = self.certificate or ""
            if include_private_key:
                result["private_key"] = self.private_key or ""
        return result

    @property
    def client(self):
        """The bound client, or None if unbound or garbage-collected."""
        if self._client_ref is None:
            return None
        return self._client_ref()

    def bind(self, client) -> "HuaweiSSLCertificate":
        """Attach the client used for lazy detail loads.

        Only a weak reference is kept. The caller must hold on to
        ``client``; once it is garbage-collected the record is unbound
        again and lazy loads log a warning and return empty values.
        """
        self._client_ref = weakref.ref(client)
        return self

    def ensure_details_loaded(self, client=None) -> "HuaweiSSLCertificate":
        """Fetch the certificate body and private key once.

        Args:
            client: Client to fetch through; defaults to the bound one.

        Raises:
            MissingClientError: no client was given and none is bound.
            HuaweiCloudError: the export call failed. The record is left
                unloaded so the call can be retried.
        """
        if self.details_loaded:
            return self

        client = client or self.client
        if client is None:
            raise MissingClientError(
                f"certificate {self.id!r} has no client to load details from"
            )

        detail = client.get_ssl_certificate(self.id)
        self.certificate = detail.certificate
        self.private_key = detail.private_key
        self.details_loaded = True
        return self

    def _load_quietly(self) -> None:
        try:
            self.ensure_details_loaded()
        except HuaweiCloudError as exc:
            logger.warning("Failed to load details for certificate %s: %s", self.id, exc)

    def get_id(self) -> str:
        return self.id

    def get_global_id(self) -> str:
        return self.id

    def get_name(self) -> str:
        return self.name

    def get_subject_alternative_names(self) -> str:
        return self.sans

    def get_common_name(self) -> str:
        return self.domain

    def get_issuer_brand(self) -> str:
        return self.brand

    # SCM does not report subject location or organisation.
    def get_province(self) -> str:
        return ""

    def get_country(self) -> str:
        return ""

    def get_city(self) -> str:
        return ""

    def get_org_name(self) -> str:
        return ""

    def get_end_date(self) -> datetime:
        """Expiry time, or ZERO_TIME when ``expire_time`` is unparsable."""
        return parse_expire_time(self.expire_time)

    def get_start_date(self) -> datetime:
        """Expiry minus the validity period, ZERO_TIME when not computable."""
        end = self.get_end_date()
        if end == ZERO_TIME:
            return ZERO_TIME
        try:
            return add_months(end, -self.validity_period)
        except OverflowError:
            return ZERO_TIME

    def is_expired(self) -> bool:
        return datetime.now() > self.get_end_date()

    def get_status(self) -> str:
        return STATUS_EXPIRED if self.is_expired() else STATUS_NORMAL

    def is_uploaded(self) -> bool:
        return self.status == CertificateStatus.UPLOAD

    def get_certificate_body(self) -> str:
        self._load_quietly()
        return self.certificate or ""

    def get_private_key(self) -> str:
        self._load_quietly()
        return self.private_key or ""

    def get_fingerprint(self) -> str:
        """SHA-1 of the certificate's DER bytes, uppercase hex, or ""."""
        return fingerprint(self.get_certificate_body(), algorithm="sha1")
