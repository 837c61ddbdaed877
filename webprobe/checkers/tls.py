"""SSL/TLS probe — negotiated protocol version of the target connection."""

from typing import Optional

import httpx

from webprobe.checkers.base import BaseProbe
from webprobe.core.models import Category, ProbeError, Target, Verdict

MODERN_PROTOCOLS = ("TLSv1.2", "TLSv1.3")


def negotiated_protocol(response: httpx.Response) -> Optional[str]:
    """Return the TLS version string of the connection behind *response*."""
    stream = response.extensions.get("network_stream")
    if stream is None:
        return None
    ssl_object = stream.get_extra_info("ssl_object")
    if ssl_object is None:
        return None
    return ssl_object.version()


class TLSProbe(BaseProbe):

    category = Category.SSL

    async def evaluate(self, client: httpx.AsyncClient, target: Target) -> Verdict:
        if target.scheme != "https":
            return self.verdict(False, ["Connection is not encrypted (plain HTTP)"])

        try:
            async with client.stream("HEAD", target.url, follow_redirects=False) as response:
                protocol = negotiated_protocol(response)
        except httpx.HTTPError as exc:
            # handshake and certificate failures are findings, not probe errors
            error = ProbeError.from_exception(exc)
            return self.verdict(False, [f"SSL Error: {error.message}"], error=error)

        if self.logger:
            self.logger.debug(f"  negotiated protocol: {protocol}")
        if protocol in MODERN_PROTOCOLS:
            return self.verdict(True)
        return self.verdict(False, ["Outdated SSL/TLS protocol version"])
