"""Provider-neutral SSL certificate interface."""

from abc import ABC, abstractmethod
from datetime import datetime


class CloudSSLCertificate(ABC):
    """Read interface every cloud provider's certificate record implements.

    Getters never raise; providers that lack a field return an empty
    string. Reads of the certificate body, private key and fingerprint may
    perform a network call the first time they are used.
    """

    @abstractmethod
    def get_id(self) -> str: ...

    @abstractmethod
    def get_global_id(self) -> str: ...

    @abstractmethod
    def get_name(self) -> str: ...

    @abstractmethod
    def get_subject_alternative_names(self) -> str: ...

    @abstractmethod
    def get_common_name(self) -> str: ...

    @abstractmethod
    def get_issuer_brand(self) -> str: ...

    @abstractmethod
    def get_province(self) -> str: ...

    @abstractmethod
    def get_country(self) -> str: ...

    @abstractmethod
    def get_city(self) -> str: ...

    @abstractmethod
    def get_org_name(self) -> str: ...

    @abstractmethod
    def get_start_date(self) -> datetime: ...

    @abstractmethod
    def get_end_date(self) -> datetime: ...

    @abstractmethod
    def is_expired(self) -> bool: ...

    @abstractmethod
    def get_status(self) -> str: ...

    @abstractmethod
    def is_uploaded(self) -> bool: ...

    @abstractmethod
    def get_certificate_body(self) -> str: ...

    @abstractmethod
    def get_private_key(self) -> str: ...

    @abstractmethod
    def get_fingerprint(self) -> str: ...
