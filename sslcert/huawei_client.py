"""Huawei Cloud client for the SSL Certificate Manager (SCM) API."""

import http.client
import json
import logging
import urllib.error
import urllib.parse
import urllib.request
from typing import Any, Optional

from config.settings import (
    HUAWEI_AUTH_TOKEN,
    HUAWEI_CERT_DEFAULT_REGION,
    HUAWEI_CERT_PAGE_SIZE,
    HUAWEI_CERT_RESOURCE,
    HUAWEI_REQUEST_TIMEOUT,
    HUAWEI_SCM_ENDPOINT,
)
from sslcert.errors import DecodeError, TransportError
from sslcert.huawei_certificate import HuaweiSSLCertificate

logger = logging.getLogger(__name__)


class HuaweiResponse:
    """Decoded JSON body of an SCM API response."""

    def __init__(self, body: Any):
        self.body = body

    def unmarshal(self, key: Optional[str] = None) -> Any:
        """Return the whole body, or the value stored under ``key``.

        Raises:
            DecodeError: the body is not an object or ``key`` is missing.
        """
        if key is None:
            return self.body
        if not isinstance(self.body, dict):
            raise DecodeError(f"response is not an object, cannot read {key!r}")
        if key not in self.body:
            raise DecodeError(f"response has no {key!r} field")
        return self.body[key]

    def get_int(self, key: str, default: int = 0) -> int:
        """Integer field ``key``, or ``default`` when absent or unparsable."""
        if not isinstance(self.body, dict):
            return default
        try:
            return int(self.body.get(key, default))
        except (TypeError, ValueError):
            return default


class HuaweiClient:
    """Call the SCM REST API with a pre-issued auth token.

    Token acquisition and request signing are the caller's concern; the
    token, when set, is sent as ``X-Auth-Token``.

    Usage::

        client = HuaweiClient(auth_token=token)
        certs, total = client.get_ssl_certificates(size=20)
        cert = client.get_ssl_certificate(certs[0].id)
    """

    def __init__(
        self,
        auth_token: str = HUAWEI_AUTH_TOKEN,
        region_id: str = HUAWEI_CERT_DEFAULT_REGION,
        endpoint: str = HUAWEI_SCM_ENDPOINT,
        timeout: int = HUAWEI_REQUEST_TIMEOUT,
    ):
        self.auth_token = auth_token
        self.region_id = region_id
        self.endpoint = endpoint
        self.timeout = timeout

    def _base_url(self, region_id: str) -> str:
        if self.endpoint:
            return self.endpoint.rstrip("/")
        return f"https://scm.{region_id}.myhuaweicloud.com/v3"

    def _request(
        self,
        method: str,
        region_id: str,
        resource: str,
        query: Optional[dict] = None,
        body: Optional[dict] = None,
    ) -> HuaweiResponse:
        """Send one request and decode the JSON response body.

        Raises:
            TransportError: the request failed or returned an error status.
            DecodeError: the response body is not valid JSON.
        """
        url = f"{self._base_url(region_id)}/{resource}"
        if query:
            url = f"{url}?{urllib.parse.urlencode(query)}"

        headers = {"Content-Type": "application/json"}
        if self.auth_token:
            headers["X-Auth-Token"] = self.auth_token
        data = json.dumps(body).encode() if body is not None else None

        logger.debug("%s %s", method, url)

        try:
            req = urllib.request.Request(url, data=data, headers=headers, method=method)
            with urllib.request.urlopen(req, timeout=self.timeout) as resp:
                raw = resp.read()
        except urllib.error.HTTPError as e:
            detail = e.read().decode("utf-8", errors="replace")[:200]
            logger.error("%s %s returned %s: %s", method, url, e.code, detail)
            raise TransportError(
                f"HTTP {e.code}: {detail or e.reason}", status_code=e.code
            ) from e
        except (urllib.error.URLError, http.client.HTTPException, OSError, ValueError) as e:
            # ValueError: malformed endpoint URL
            logger.error("%s %s failed: %s", method, url, e)
            raise TransportError(str(e) or type(e).__name__) from e

        if not raw:
            return HuaweiResponse({})
        try:
            return HuaweiResponse(json.loads(raw))
        except ValueError as e:
            raise DecodeError(f"invalid JSON in response: {e}") from e

    def sslcert_list(
        self, region_id: str, resource: str, params: dict
    ) -> HuaweiResponse:
        return self._request("GET", region_id, resource, query=params)

    def sslcert_export(
        self, region_id: str, resource: str, cert_id: str
    ) -> HuaweiResponse:
        quoted = urllib.parse.quote(cert_id, safe="")
        return self._request("POST", region_id, f"{resource}/{quoted}/export")

    def get_ssl_certificates(
        self, size: int = HUAWEI_CERT_PAGE_SIZE, offset: int = 0
    ) -> tuple[list[HuaweiSSLCertificate], int]:
        """List one page of certificates, latest expiry first.

        ``size`` outside 1..50 falls back to 50 and a negative ``offset``
        to 0. The returned records carry no certificate body or private
        key and are not bound to this client.

        Returns:
            (records, total_count) where total_count counts the whole account.
        """
        if size < 1 or size > HUAWEI_CERT_PAGE_SIZE:
            size = HUAWEI_CERT_PAGE_SIZE
        if offset < 0:
            offset = 0

        params = {
            "limit": str(size),
            "offset": str(offset),
            "sort_key": "certExpiredTime",
            "sort_dir": "DESC",
        }
        try:
            resp = self.sslcert_list(self.region_id, HUAWEI_CERT_RESOURCE, params)
        except TransportError as e:
            raise TransportError(e.detail, "list failed", e.status_code) from e
        except DecodeError as e:
            raise DecodeError(e.detail, "list failed") from e

        try:
            items = resp.unmarshal("certificates")
            if not isinstance(items, list):
                raise DecodeError("'certificates' is not a list")
            certs = [HuaweiSSLCertificate.from_dict(item) for item in items]
        except DecodeError as e:
            raise DecodeError(e.detail, "unmarshal failed") from e

        return certs, resp.get_int("total_count")

    def get_ssl_certificate(self, cert_id: str) -> HuaweiSSLCertificate:
        """Export a certificate with its body and private key.

        The returned record is bound to this client.
        """
        try:
            resp = self.sslcert_export(self.region_id, HUAWEI_CERT_RESOURCE, cert_id)
        except TransportError as e:
            raise TransportError(e.detail, "export failed", e.status_code) from e
        except DecodeError as e:
            raise DecodeError(e.detail, "export failed") from e

        try:
            cert = HuaweiSSLCertificate.from_dict(resp.unmarshal(), client=self)
        except DecodeError as e:
            raise DecodeError(e.detail, "unmarshal failed") from e

        if not cert.id:
            cert.id = cert_id
        cert.details_loaded = True
        return cert

    def get_all_ssl_certificates(self) -> list[HuaweiSSLCertificate]:
        """Walk every page of the certificate list."""
        results: list[HuaweiSSLCertificate] = []
        while True:
            page, total = self.get_ssl_certificates(
                size=HUAWEI_CERT_PAGE_SIZE, offset=len(results)
            )
            results.extend(page)
            if not page or len(results) >= total:
                break
        logger.info("Fetched %d SCM certificate(s)", len(results))
        return results

    def find_ssl_certificate(self, cert_id: str) -> Optional[HuaweiSSLCertificate]:
        """Look up a certificate's metadata by id, bound to this client.

        The binding is a weak reference: keep the client alive for as long
        as the record needs to lazy-load its body and key. A record found
        through a temporary ``HuaweiClient()`` ends up unbound.
        """
        for cert in self.get_all_ssl_certificates():
            if cert.id == cert_id:
                return cert.bind(self)
        return None
