"""Tests for the Huawei SCM certificate record."""

import datetime
import gc
import hashlib
import unittest
from unittest.mock import MagicMock

from cryptography import x509
from cryptography.hazmat.primitives import hashes, serialization
from cryptography.hazmat.primitives.asymmetric import ec
from cryptography.x509.oid import NameOID

from sslcert.cloud_certificate import CloudSSLCertificate
from sslcert.errors import DecodeError, MissingClientError, TransportError
from sslcert.huawei_certificate import HuaweiSSLCertificate
from sslcert.utils.helpers import ZERO_TIME


def _make_cert_pem():
    key = ec.generate_private_key(ec.SECP256R1())
    name = x509.Name([x509.NameAttribute(NameOID.COMMON_NAME, "example.com")])
    now = datetime.datetime.now(datetime.timezone.utc)
    cert = (
        x509.CertificateBuilder()
        .subject_name(name)
        .issuer_name(name)
        .public_key(key.public_key())
        .serial_number(x509.random_serial_number())
        .not_valid_before(now)
        .not_valid_after(now + datetime.timedelta(days=30))
        .sign(key, hashes.SHA256())
    )
    return (
        cert.public_bytes(serialization.Encoding.PEM).decode(),
        cert.public_bytes(serialization.Encoding.DER),
    )


LIST_ITEM = {
    "id": "scs1554192131150",
    "name": "test-cert",
    "domain": "example.com",
    "sans": "www.example.com;api.example.com",
    "signature_algorithm": "SHA256WITHRSA",
    "deploy_support": True,
    "type": "DV_SSL_CERT",
    "brand": "GEOTRUST",
    "expire_time": "2030-01-01 00:00:00",
    "domain_type": "MULTI_DOMAIN",
    "validity_period": 12,
    "status": "ISSUED",
    "domain_count": 3,
    "wildcard_count": 0,
    "description": "",
    "enterprise_project_id": "0",
}


def _loaded_detail(certificate="CERT", private_key="KEY"):
    return HuaweiSSLCertificate(
        certificate=certificate, private_key=private_key, details_loaded=True
    )


class TestFromDict(unittest.TestCase):

    def test_list_item(self):
        cert = HuaweiSSLCertificate.from_dict(LIST_ITEM)
        self.assertEqual(cert.id, "scs1554192131150")
        self.assertEqual(cert.certificate_type, "DV_SSL_CERT")
        self.assertEqual(cert.validity_period, 12)
        self.assertTrue(cert.deploy_support)
        self.assertFalse(cert.details_loaded)
        self.assertIsNone(cert.certificate)
        self.assertIsNone(cert.private_key)
        self.assertIsNone(cert.client)

    def test_missing_fields_use_defaults(self):
        cert = HuaweiSSLCertificate.from_dict({"id": "x"})
        self.assertEqual(cert.name, "")
        self.assertEqual(cert.domain_count, 0)
        self.assertEqual(cert.enterprise_project_id, "0")

    def test_numeric_strings_accepted(self):
        cert = HuaweiSSLCertificate.from_dict({"validity_period": "24"})
        self.assertEqual(cert.validity_period, 24)

    def test_detail_payload_is_loaded(self):
        cert = HuaweiSSLCertificate.from_dict(
            {"certificate": "CERT", "private_key": "KEY"}
        )
        self.assertTrue(cert.details_loaded)
        self.assertEqual(cert.certificate, "CERT")
        self.assertEqual(cert.private_key, "KEY")

    def test_binds_client(self):
        client = MagicMock()
        cert = HuaweiSSLCertificate.from_dict(LIST_ITEM, client=client)
        self.assertIs(cert.client, client)

    def test_rejects_non_mapping(self):
        with self.assertRaises(DecodeError):
            HuaweiSSLCertificate.from_dict(["not", "a", "dict"])

    def test_rejects_bad_integer(self):
        with self.assertRaises(DecodeError):
            HuaweiSSLCertificate.from_dict({"domain_count": "many"})

    def test_deploy_support_must_be_boolean(self):
        for value in ("false", "true", 0, 1):
            with self.subTest(value=value):
                with self.assertRaises(DecodeError):
                    HuaweiSSLCertificate.from_dict({"deploy_support": value})

    def test_deploy_support_booleans(self):
        self.assertTrue(HuaweiSSLCertificate.from_dict({"deploy_support": True}).deploy_support)
        self.assertFalse(HuaweiSSLCertificate.from_dict({"deploy_support": False}).deploy_support)
        self.assertFalse(HuaweiSSLCertificate.from_dict({"deploy_support": None}).deploy_support)
        self.assertFalse(HuaweiSSLCertificate.from_dict({}).deploy_support)

    def test_to_dict_hides_private_key(self):
        cert = HuaweiSSLCertificate.from_dict(
            dict(LIST_ITEM, certificate="CERT", private_key="KEY")
        )
        self.assertNotIn("private_key", cert.to_dict())
        self.assertEqual(cert.to_dict()["certificate"], "CERT")
        self.assertEqual(cert.to_dict(include_private_key=True)["private_key"], "KEY")
        self.assertEqual(cert.to_dict()["type"], "DV_SSL_CERT")

    def test_repr_omits_private_key(self):
        cert = HuaweiSSLCertificate(private_key="SECRET", details_loaded=True)
        self.assertNotIn("SECRET", repr(cert))


class TestAccessors(unittest.TestCase):

    def setUp(self):
        self.cert = HuaweiSSLCertificate.from_dict(LIST_ITEM)

    def test_implements_cloud_interface(self):
        self.assertIsInstance(self.cert, CloudSSLCertificate)

    def test_identity_fields(self):
        self.assertEqual(self.cert.get_id(), "scs1554192131150")
        self.assertEqual(self.cert.get_global_id(), "scs1554192131150")
        self.assertEqual(self.cert.get_name(), "test-cert")
        self.assertEqual(self.cert.get_common_name(), "example.com")
        self.assertEqual(self.cert.get_issuer_brand(), "GEOTRUST")
        self.assertEqual(
            self.cert.get_subject_alternative_names(),
            "www.example.com;api.example.com",
        )

    def test_subject_location_is_empty(self):
        self.assertEqual(self.cert.get_province(), "")
        self.assertEqual(self.cert.get_country(), "")
        self.assertEqual(self.cert.get_city(), "")
        self.assertEqual(self.cert.get_org_name(), "")

    def test_dates(self):
        self.assertEqual(self.cert.get_end_date(), datetime.datetime(2030, 1, 1))
        self.assertEqual(self.cert.get_start_date(), datetime.datetime(2029, 1, 1))

    def test_unparsable_expiry(self):
        self.cert.expire_time = "01/01/2030"
        self.assertEqual(self.cert.get_end_date(), ZERO_TIME)
        self.assertEqual(self.cert.get_start_date(), ZERO_TIME)
        self.assertTrue(self.cert.is_expired())
        self.assertEqual(self.cert.get_status(), "expired")

    def test_expiry_status(self):
        future = datetime.datetime.now() + datetime.timedelta(days=10)
        past = datetime.datetime.now() - datetime.timedelta(days=10)

        self.cert.expire_time = future.strftime("%Y-%m-%d %H:%M:%S")
        self.assertFalse(self.cert.is_expired())
        self.assertEqual(self.cert.get_status(), "normal")

        self.cert.expire_time = past.strftime("%Y-%m-%d %H:%M:%S")
        self.assertTrue(self.cert.is_expired())
        self.assertEqual(self.cert.get_status(), "expired")

    def test_is_uploaded(self):
        self.cert.status = "UPLOAD"
        self.assertTrue(self.cert.is_uploaded())
        for status in ("upload", "UPLOADED", " UPLOAD", "ISSUED", ""):
            self.cert.status = status
            self.assertFalse(self.cert.is_uploaded(), status)


class TestLazyDetails(unittest.TestCase):

    def setUp(self):
        self.client = MagicMock()
        self.client.get_ssl_certificate.return_value = _loaded_detail()
        self.cert = HuaweiSSLCertificate.from_dict(LIST_ITEM)

    def test_ensure_details_loaded_is_idempotent(self):
        self.cert.bind(self.client)
        self.assertIs(self.cert.ensure_details_loaded(), self.cert)
        self.cert.ensure_details_loaded()
        self.client.get_ssl_certificate.assert_called_once_with("scs1554192131150")
        self.assertTrue(self.cert.details_loaded)
        self.assertEqual(self.cert.certificate, "CERT")
        self.assertEqual(self.cert.private_key, "KEY")

    def test_explicit_client(self):
        self.cert.ensure_details_loaded(self.client)
        self.assertTrue(self.cert.details_loaded)

    def test_unbound_record_raises(self):
        with self.assertRaises(MissingClientError):
            self.cert.ensure_details_loaded()
        self.assertFalse(self.cert.details_loaded)

    def test_failure_leaves_state_and_allows_retry(self):
        self.client.get_ssl_certificate.side_effect = [
            TransportError("timeout", "export failed"),
            _loaded_detail(),
        ]
        self.cert.bind(self.client)
        with self.assertRaises(TransportError):
            self.cert.ensure_details_loaded()
        self.assertFalse(self.cert.details_loaded)
        self.assertIsNone(self.cert.certificate)

        self.cert.ensure_details_loaded()
        self.assertTrue(self.cert.details_loaded)
        self.assertEqual(self.client.get_ssl_certificate.call_count, 2)

    def test_getters_load_once(self):
        self.cert.bind(self.client)
        self.assertEqual(self.cert.get_certificate_body(), "CERT")
        self.assertEqual(self.cert.get_private_key(), "KEY")
        self.client.get_ssl_certificate.assert_called_once()

    def test_getters_swallow_load_failure(self):
        self.client.get_ssl_certificate.side_effect = TransportError("boom")
        self.cert.bind(self.client)
        with self.assertLogs("sslcert.huawei_certificate", level="WARNING"):
            self.assertEqual(self.cert.get_certificate_body(), "")
        self.assertEqual(self.cert.get_private_key(), "")
        self.assertEqual(self.cert.get_fingerprint(), "")
        self.assertFalse(self.cert.details_loaded)

    def test_getters_on_unbound_record(self):
        self.assertEqual(self.cert.get_certificate_body(), "")

    def test_client_reference_is_weak(self):
        class _Client:
            pass

        client = _Client()
        cert = HuaweiSSLCertificate().bind(client)
        self.assertIs(cert.client, client)
        del client
        gc.collect()
        self.assertIsNone(cert.client)

    def test_binding_to_temporary_client_is_lost(self):
        class _Client:
            def get_ssl_certificate(self, cert_id):
                raise AssertionError("collected client must not be called")

        cert = HuaweiSSLCertificate(id="abc").bind(_Client())
        gc.collect()
        self.assertIsNone(cert.client)
        with self.assertLogs("sslcert.huawei_certificate", level="WARNING"):
            self.assertEqual(cert.get_certificate_body(), "")
        with self.assertRaises(MissingClientError):
            cert.ensure_details_loaded()


class TestFingerprint(unittest.TestCase):

    @classmethod
    def setUpClass(cls):
        cls.pem, cls.der = _make_cert_pem()

    def test_valid_certificate(self):
        cert = HuaweiSSLCertificate(certificate=self.pem, details_loaded=True)
        fp = cert.get_fingerprint()
        self.assertEqual(len(fp), 40)
        self.assertEqual(fp, fp.upper())
        self.assertEqual(fp, hashlib.sha1(self.der).hexdigest().upper())
        self.assertEqual(fp, cert.get_fingerprint())

    def test_triggers_lazy_load(self):
        client = MagicMock()
        client.get_ssl_certificate.return_value = _loaded_detail(certificate=self.pem)
        cert = HuaweiSSLCertificate(id="abc").bind(client)
        self.assertEqual(cert.get_fingerprint(), hashlib.sha1(self.der).hexdigest().upper())
        client.get_ssl_certificate.assert_called_once_with("abc")

    def test_empty_body(self):
        cert = HuaweiSSLCertificate(certificate="", details_loaded=True)
        self.assertEqual(cert.get_fingerprint(), "")

    def test_malformed_body(self):
        for body in ("garbage", "-----BEGIN CERTIFICATE-----\nZm9v\n-----END CERTIFICATE-----"):
            cert = HuaweiSSLCertificate(certificate=body, details_loaded=True)
            self.assertEqual(cert.get_fingerprint(), "")


if __name__ == "__main__":
    unittest.main()
