"""Probe registry: the fixed, ordered battery for each scan profile."""

from typing import List

from webprobe.checkers.access_control import AccessControlProbe
from webprobe.checkers.authentication import AuthenticationProbe
from webprobe.checkers.base import BaseProbe
from webprobe.checkers.components import VulnerableComponentsProbe
from webprobe.checkers.crypto import CryptographyProbe
from webprobe.checkers.headers import HeadersProbe
from webprobe.checkers.insecure_design import InsecureDesignProbe
from webprobe.checkers.integrity import IntegrityProbe
from webprobe.checkers.request_logging import LoggingProbe
from webprobe.checkers.security_config import SecurityConfigProbe
from webprobe.checkers.sqli import SQLiProbe
from webprobe.checkers.ssrf import SSRFProbe
from webprobe.checkers.tls import TLSProbe
from webprobe.checkers.xss import XSSProbe
from webprobe.core.models import Category, Profile

PROBES = {
    Category.SSL: TLSProbe,
    Category.HEADERS: HeadersProbe,
    Category.XSS: XSSProbe,
    Category.SQL: SQLiProbe,
    Category.ACCESS_CONTROL: AccessControlProbe,
    Category.CRYPTOGRAPHY: CryptographyProbe,
    Category.INSECURE_DESIGN: InsecureDesignProbe,
    Category.SECURITY_CONFIG: SecurityConfigProbe,
    Category.VULNERABLE_COMPONENTS: VulnerableComponentsProbe,
    Category.AUTHENTICATION: AuthenticationProbe,
    Category.INTEGRITY_FAILURES: IntegrityProbe,
    Category.LOGGING: LoggingProbe,
    Category.SSRF: SSRFProbe,
}


def build_probes(profile: Profile, logger=None) -> List[BaseProbe]:
    """Fresh probe instances in scan order."""
    return [PROBES[category](logger=logger) for category in profile.categories]
