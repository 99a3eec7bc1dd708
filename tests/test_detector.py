"""Tests for page classification."""

import pytest

from ac_extractor.detector import classify, is_supported_host
from ac_extractor.models.record import RecordKind


class TestClassify:
    """Tests for classify."""

    @pytest.mark.parametrize(
        "url,expected",
        [
            ("https://acme.activehosted.com/app/contacts", RecordKind.CONTACTS),
            ("https://acme.activehosted.com/app/contacts?page=2&sort=name", RecordKind.CONTACTS),
            ("https://acme.activehosted.com/app/contact/42", RecordKind.CONTACTS),
            ("https://x.example/app/deals/board", RecordKind.DEALS),
            ("https://acme.activehosted.com/app/deal/501", RecordKind.DEALS),
            ("https://acme.activehosted.com/app/tasks", RecordKind.TASKS),
            ("https://acme.activehosted.com/app/task/9", RecordKind.TASKS),
        ],
    )
    def test_recognized_pages(self, url: str, expected: RecordKind) -> None:
        assert classify(url) is expected

    @pytest.mark.parametrize(
        "url",
        [
            "https://acme.activehosted.com/app/overview",
            "https://acme.activehosted.com/app/campaigns",
            "https://acme.activehosted.com/",
            "",
        ],
    )
    def test_unsupported_pages_return_none(self, url: str) -> None:
        assert classify(url) is None

    def test_first_matching_kind_wins(self) -> None:
        """Contacts fragment is checked before deals."""
        assert classify("https://a.example/app/deals/7/contacts") is RecordKind.CONTACTS

    def test_is_stable(self) -> None:
        url = "https://x.example/app/deals/board"
        assert {classify(url) for _ in range(5)} == {RecordKind.DEALS}


class TestIsSupportedHost:
    """Tests for is_supported_host."""

    HOSTS = ["activecampaign.com", "activehosted.com"]

    def test_accepts_tenant_subdomain(self) -> None:
        assert is_supported_host("https://acme.activehosted.com/app/deals", self.HOSTS)

    def test_rejects_other_host(self) -> None:
        assert not is_supported_host("https://example.com/app/deals", self.HOSTS)

    def test_rejects_host_only_in_path(self) -> None:
        assert not is_supported_host("https://evil.example/activecampaign.com/deals", self.HOSTS)

    def test_rejects_non_url(self) -> None:
        assert not is_supported_host("not a url", self.HOSTS)

    def test_accepts_bare_host(self) -> None:
        assert is_supported_host("https://activecampaign.com/app/contacts", self.HOSTS)

    def test_ignores_port_and_case(self) -> None:
        assert is_supported_host("https://Acme.ActiveHosted.com:443/app/tasks", self.HOSTS)

    def test_rejects_lookalike_hosts(self) -> None:
        assert not is_supported_host("https://activecampaign.com.evil.net/app/deals", self.HOSTS)
        assert not is_supported_host("https://notactivehosted.com/app/deals", self.HOSTS)
