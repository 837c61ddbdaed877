"""Shared data models for the scan engine."""

import re
from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Dict, Iterator, Optional, Tuple
from urllib.parse import urljoin, urlsplit

import httpx

from webprobe.core.errors import InvalidTargetError, classify

SEVERITIES = ("low", "medium", "high", "critical")

_SCHEMES = ("http", "https")

# Characters a URL host may never contain (WHATWG forbidden host code points)
_FORBIDDEN_HOST_CHARS = re.compile(r"[\x00-\x20#%/:<>?@\[\\\]^|\x7f]")


@dataclass(frozen=True)
class Target:
    """A validated absolute http(s) URL."""
    url: str
    scheme: str
    host: str
    port: Optional[int]
    origin: str

    @classmethod
    def parse(cls, url) -> "Target":
        if not isinstance(url, str) or not url.strip():
            raise InvalidTargetError(url, "empty or not a string")
        try:
            parts = urlsplit(url.strip())
        except ValueError as exc:
            raise InvalidTargetError(url, str(exc)) from None
        scheme = parts.scheme.lower()
        if scheme not in _SCHEMES:
            raise InvalidTargetError(
                url, "only HTTP/HTTPS URLs are supported")
        try:
            port = parts.port
        except ValueError:
            raise InvalidTargetError(url, "invalid port") from None
        if not parts.hostname:
            raise InvalidTargetError(url, "missing host")
        # brackets mean an IPv6 literal, already checked by urlsplit
        if not parts.netloc.rpartition("@")[2].startswith("[") \
                and _FORBIDDEN_HOST_CHARS.search(parts.hostname):
            raise InvalidTargetError(url, "invalid character in host")
        try:
            httpx.URL(url.strip())
        except httpx.InvalidURL as exc:
            raise InvalidTargetError(url, str(exc)) from None
        return cls(
            url=url.strip(),
            scheme=scheme,
            host=parts.hostname,
            port=port,
            origin=f"{scheme}://{parts.netloc}",
        )

    def join(self, path: str) -> str:
        """Resolve a conventional path (e.g. '/admin') against the target."""
        return urljoin(self.url, path)

    def __str__(self):
        return self.url


class Category(Enum):
    """Probe categories: (wire key, primary signal, findings field, label, severity)."""

    SSL = ("ssl", "valid", "issues", "SSL", None)
    HEADERS = ("headers", "secure", "missing", "Headers", None)
    XSS = ("xss", "vulnerable", "endpoints", "XSS", None)
    SQL = ("sql", "vulnerable", "endpoints", "SQL", None)
    ACCESS_CONTROL = (
        "accessControl", "vulnerable", "issues", "Access Control", "high")
    CRYPTOGRAPHY = ("cryptography", "secure", "issues", "Cryptography", "critical")
    INSECURE_DESIGN = ("insecureDesign", "vulnerable", "issues", "Design", "high")
    SECURITY_CONFIG = (
        "securityConfig", "secure", "issues", "Configuration", "high")
    VULNERABLE_COMPONENTS = (
        "vulnerableComponents", "vulnerable", "issues", "Component", "critical")
    AUTHENTICATION = (
        "authentication", "secure", "issues", "Authentication", "critical")
    INTEGRITY_FAILURES = (
        "integrityFailures", "vulnerable", "issues", "Integrity", "high")
    LOGGING = ("logging", "secure", "issues", "Logging", "medium")
    SSRF = ("ssrf", "vulnerable", "endpoints", "SSRF", "critical")

    def __init__(self, key: str, signal: str, findings: str, label: str,
                 severity: Optional[str]):
        self.key = key
        self.signal = signal
        self.findings = findings
        self.label = label
        self.severity = severity

    @classmethod
    def from_key(cls, key: str) -> "Category":
        for member in cls:
            if member.key == key:
                return member
        raise KeyError(key)


class Profile(Enum):
    LEGACY = "legacy"
    EXTENDED = "extended"

    @property
    def categories(self) -> Tuple[Category, ...]:
        if self is Profile.LEGACY:
            return _ALL_CATEGORIES[:4]
        return _ALL_CATEGORIES


_ALL_CATEGORIES = tuple(Category)


@dataclass(frozen=True)
class ProbeError:
    """Structured cause of a probe failure."""
    kind: str       # "timeout", "connect", "tls", "protocol", "decode", "http", "internal"
    message: str

    @classmethod
    def from_exception(cls, exc: BaseException) -> "ProbeError":
        message = str(exc) or exc.__class__.__name__
        return cls(kind=classify(exc), message=message)


@dataclass(frozen=True)
class Attempt:
    """One request a probe sends to a guessed endpoint."""
    method: str
    path: str
    params: Optional[Dict[str, str]] = None
    json: Optional[dict] = None


@dataclass(frozen=True)
class Verdict:
    """The result of one probe."""
    category: Category
    evaluated: bool = False
    valid: Optional[bool] = None
    secure: Optional[bool] = None
    vulnerable: Optional[bool] = None
    issues: Tuple[str, ...] = ()
    missing: Tuple[str, ...] = ()
    endpoints: Tuple[str, ...] = ()
    severity: Optional[str] = None
    description: Optional[str] = None
    remediation: Optional[str] = None
    error: Optional[ProbeError] = None

    def __post_init__(self):
        if self.severity is not None and self.severity not in SEVERITIES:
            raise ValueError(f"Unknown severity: {self.severity!r}")
        for name in ("issues", "missing", "endpoints"):
            object.__setattr__(self, name, tuple(getattr(self, name)))

    @classmethod
    def default(cls, category: Category) -> "Verdict":
        """Pre-probe state: signal False, findings empty, not evaluated."""
        return cls(category=category, severity=category.severity,
                   **{category.signal: False})

    @classmethod
    def failed(cls, category: Category, error: ProbeError) -> "Verdict":
        entry = f"{category.label} Error: {error.message}"
        return replace(cls.default(category), error=error,
                       **{category.findings: (entry,)})

    @property
    def signal(self) -> Optional[bool]:
        return getattr(self, self.category.signal)

    @property
    def findings(self) -> Tuple[str, ...]:
        return getattr(self, self.category.findings)

    @property
    def insecure(self) -> bool:
        """True when the primary signal reports a weakness."""
        if self.category.signal == "vulnerable":
            return bool(self.vulnerable)
        return not self.signal

    def to_dict(self) -> dict:
        out = {
            self.category.signal: bool(self.signal),
            self.category.findings: list(self.findings),
        }
        # headers may carry both lists; keep any non-empty extra list
        for name in ("issues", "missing", "endpoints"):
            if name != self.category.findings and getattr(self, name):
                out[name] = list(getattr(self, name))
        for name in ("severity", "description", "remediation"):
            if getattr(self, name) is not None:
                out[name] = getattr(self, name)
        out["evaluated"] = self.evaluated
        if self.error is not None:
            out["error"] = {"kind": self.error.kind,
                            "message": self.error.message}
        return out


@dataclass
class ScanAggregate:
    """One verdict per category of the scan profile."""
    profile: Profile
    verdicts: Dict[Category, Verdict] = field(default_factory=dict)
    _frozen: bool = field(default=False, repr=False, compare=False)

    def __post_init__(self):
        for category in self.profile.categories:
            self.verdicts.setdefault(category, Verdict.default(category))

    @property
    def categories(self) -> Tuple[Category, ...]:
        return self.profile.categories

    def merge(self, verdict: Verdict) -> None:
        if self._frozen:
            raise RuntimeError("Aggregate is read-only once the scan returns")
        if verdict.category not in self.verdicts:
            raise KeyError(
                f"{verdict.category.key} is not part of the "
                f"{self.profile.value} profile")
        self.verdicts[verdict.category] = verdict

    def freeze(self) -> "ScanAggregate":
        self._frozen = True
        return self

    def __getitem__(self, category: Category) -> Verdict:
        return self.verdicts[category]

    def __iter__(self) -> Iterator[Verdict]:
        return (self.verdicts[c] for c in self.categories)

    def __len__(self):
        return len(self.verdicts)

    def to_dict(self) -> dict:
        return {v.category.key: v.to_dict() for v in self}
