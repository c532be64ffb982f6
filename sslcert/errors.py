"""Errors raised by the Huawei Cloud certificate client."""

from typing import Optional


class HuaweiCloudError(Exception):
    """Base error for Huawei Cloud API calls.

    ``stage`` names the call that failed (e.g. ``"list failed"``) and is
    prefixed to the message.
    """

    def __init__(self, message: str, stage: str = ""):
        self.stage = stage
        self.detail = message
        super().__init__(f"{stage}: {message}" if stage else message)


class TransportError(HuaweiCloudError):
    """The HTTP request could not be completed or returned an error status."""

    def __init__(
        self, message: str, stage: str = "", status_code: Optional[int] = None
    ):
        self.status_code = status_code
        super().__init__(message, stage)


class DecodeError(HuaweiCloudError):
    """The response body did not have the expected shape."""


class MissingClientError(HuaweiCloudError):
    """A detail load was requested but no client is bound to the record."""
