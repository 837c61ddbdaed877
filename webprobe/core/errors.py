"""Exceptions raised by the scan engine."""

import ssl

import httpx


class ScanError(Exception):
    """Base class for scanner errors."""


class InvalidTargetError(ScanError, ValueError):
    """The target URL is not an absolute http(s) URL."""

    def __init__(self, url, reason: str):
        self.url = url
        self.reason = reason
        super().__init__(f"Invalid target {url!r}: {reason}")


class ProbeExecutionError(ScanError):
    """A probe could not produce a verdict (network, TLS or parse failure)."""

    def __init__(self, kind: str, message: str):
        self.kind = kind
        self.message = message
        super().__init__(message)


def classify(exc: BaseException) -> str:
    """Map an exception to a short failure kind."""
    if isinstance(exc, ProbeExecutionError):
        return exc.kind
    if isinstance(exc, httpx.TimeoutException):
        return "timeout"
    if isinstance(exc, httpx.ConnectError):
        cause = exc.__cause__ or exc.__context__
        if isinstance(cause, ssl.SSLError) or "ssl" in str(exc).lower() \
                or "certificate" in str(exc).lower():
            return "tls"
        return "connect"
    if isinstance(exc, ssl.SSLError):
        return "tls"
    if isinstance(exc, (httpx.RemoteProtocolError, httpx.LocalProtocolError)):
        return "protocol"
    if isinstance(exc, (httpx.DecodingError, UnicodeDecodeError)):
        return "decode"
    if isinstance(exc, httpx.HTTPError):
        return "http"
    return "internal"
