import pytest

from webprobe.core.errors import InvalidTargetError, ProbeExecutionError
from webprobe.core.models import (
    Category, Profile, ProbeError, ScanAggregate, Target, Verdict,
)


@pytest.mark.parametrize("url,origin", [
    ("https://example.com", "https://example.com"),
    ("http://example.com:8080/app?x=1", "http://example.com:8080"),
    ("HTTPS://Example.com/", "https://Example.com"),
    ("http://[::1]:8080/status", "http://[::1]:8080"),
])
def test_target_parse_valid(url, origin):
    t = Target.parse(url)
    assert t.scheme in ("http", "https")
    assert t.origin == origin


@pytest.mark.parametrize("url", [
    "", "   ", None, 42, "example.com", "ftp://example.com", "file:///etc/passwd",
    "javascript:alert(1)", "http://", "https://:443/", "http://example.com:99999/",
    "http://[::1", "http://exa mple.com/", "https://exa<mple.com/", "http://exa|mple.com/",
])
def test_target_parse_rejects(url):
    with pytest.raises(InvalidTargetError):
        Target.parse(url)


def test_invalid_target_is_a_value_error():
    with pytest.raises(ValueError):
        Target.parse("mailto:someone@example.com")


def test_target_join_resolves_against_origin():
    t = Target.parse("https://example.com/shop/item?id=3")
    assert t.join("/admin") == "https://example.com/admin"


def test_category_shapes():
    assert Category.SSL.signal == "valid" and Category.SSL.findings == "issues"
    assert Category.HEADERS.findings == "missing"
    assert Category.SSRF.findings == "endpoints"
    assert Category.from_key("accessControl") is Category.ACCESS_CONTROL
    with pytest.raises(KeyError):
        Category.from_key("csrf")


def test_profiles():
    assert Profile.LEGACY.categories == (
        Category.SSL, Category.HEADERS, Category.XSS, Category.SQL)
    assert len(Profile.EXTENDED.categories) == 13
    assert Profile.EXTENDED.categories[-1] is Category.SSRF


def test_default_verdict_is_safe_and_unevaluated():
    v = Verdict.default(Category.XSS)
    assert v.vulnerable is False
    assert v.endpoints == ()
    assert not v.evaluated
    assert v.to_dict() == {"vulnerable": False, "endpoints": [], "evaluated": False}


def test_failed_verdict_carries_error_entry_and_cause():
    err = ProbeError.from_exception(ProbeExecutionError("timeout", "read timed out"))
    v = Verdict.failed(Category.ACCESS_CONTROL, err)
    assert v.vulnerable is False
    assert v.issues == ("Access Control Error: read timed out",)
    assert v.error.kind == "timeout"
    assert v.to_dict()["error"] == {"kind": "timeout", "message": "read timed out"}


def test_verdict_rejects_unknown_severity():
    with pytest.raises(ValueError):
        Verdict(category=Category.SSRF, severity="urgent")


def test_insecure_follows_primary_signal():
    assert Verdict(category=Category.HEADERS, secure=False).insecure
    assert not Verdict(category=Category.HEADERS, secure=True).insecure
    assert Verdict(category=Category.SQL, vulnerable=True).insecure
    assert not Verdict(category=Category.SQL, vulnerable=False).insecure


def test_aggregate_starts_with_every_category():
    agg = ScanAggregate(Profile.EXTENDED)
    assert list(agg.to_dict()) == [c.key for c in Profile.EXTENDED.categories]
    assert all(not v.evaluated for v in agg)


def test_aggregate_merge_and_freeze():
    agg = ScanAggregate(Profile.LEGACY)
    agg.merge(Verdict(category=Category.XSS, evaluated=True, vulnerable=True,
                      endpoints=["/search"]))
    assert agg[Category.XSS].endpoints == ("/search",)

    with pytest.raises(KeyError):
        agg.merge(Verdict.default(Category.SSRF))

    agg.freeze()
    with pytest.raises(RuntimeError):
        agg.merge(Verdict.default(Category.XSS))


def test_unbalanced_ipv6_is_an_invalid_target():
    with pytest.raises(InvalidTargetError) as info:
        Target.parse("http://[::1")
    assert info.value.url == "http://[::1"


@pytest.mark.parametrize("category", list(Category))
def test_severity_is_fixed_per_category(category):
    failed = Verdict.failed(category, ProbeError("connect", "refused"))
    assert Verdict.default(category).severity == category.severity
    assert failed.severity == category.severity


def test_category_severities():
    assert Category.SSL.severity is None
    assert Category.CRYPTOGRAPHY.severity == "critical"
    assert Category.SECURITY_CONFIG.severity == "high"
    assert Category.LOGGING.severity == "medium"
