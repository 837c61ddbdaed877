import httpx
import pytest

from webprobe.core.models import Target

TARGET_URL = "https://target.test"


class FakeTLSStream:
    """Stands in for httpcore's network stream to expose an SSL object."""

    class _SSLObject:
        def __init__(self, version):
            self._version = version

        def version(self):
            return self._version

    def __init__(self, version):
        self._ssl = self._SSLObject(version)

    def get_extra_info(self, name):
        return self._ssl if name == "ssl_object" else None


@pytest.fixture
def target():
    return Target.parse(TARGET_URL)


@pytest.fixture
def mock_client():
    """Factory: an AsyncClient whose requests are answered by *handler*."""
    def factory(handler):
        return httpx.AsyncClient(transport=httpx.MockTransport(handler),
                                 follow_redirects=True)
    return factory


def refuse(request):
    raise httpx.ConnectError("Connection refused", request=request)


def hardened_handler(request):
    """A target on which every check comes back clean."""
    headers = {
        "strict-transport-security": "max-age=63072000",
        "x-content-type-options": "nosniff",
        "x-frame-options": "DENY",
        "content-security-policy": "default-src 'self'",
        "referrer-policy": "strict-origin-when-cross-origin",
        "permissions-policy": "geolocation=()",
        "cross-origin-opener-policy": "same-origin",
        "x-ratelimit-limit": "100",
        "x-request-id": "abc123",
        "server-timing": "tls=1.3",
        "server": "nginx/1.25.3",
    }
    path = request.url.path
    if path in ("/admin", "/api/users", "/dashboard", "/settings"):
        return httpx.Response(401, headers=headers)
    if path.startswith("/api/") and request.method == "POST" and path != "/api/bulk-update":
        return httpx.Response(403, headers=headers)
    return httpx.Response(
        200, headers=headers, text="<html><body><p>nothing to see</p></body></html>",
        extensions={"network_stream": FakeTLSStream("TLSv1.3")})


@pytest.fixture
def refusing_handler():
    return refuse


@pytest.fixture
def clean_handler():
    return hardened_handler
