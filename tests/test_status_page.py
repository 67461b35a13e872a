"""Tests for status page rendering."""

from argateway.models.cache import CacheEntry
from argateway.models.wallet import WalletStats
from argateway.renderer.status_page import format_size, render_error_page, render_status_page

ADDRESS = "vLRHFqCw1uHu75xqB4fCDW-QxpkpJxBtFD9g4QYUbfw"
EXPLORER = "https://viewblock.io/arweave"


def _entry(name: str, size: int) -> CacheEntry:
    return CacheEntry(name=name, size=size, update_time="2024-01-24 00:00:00")


class TestFormatSize:
    def test_bytes(self):
        assert format_size(0) == "0 B"
        assert format_size(1023) == "1023 B"

    def test_kilobytes(self):
        assert format_size(10 * 1024) == "10.00 KB"

    def test_megabytes(self):
        assert format_size(3 * 1024 * 1024) == "3.00 MB"


class TestStatusPage:
    def test_wallet_panel(self):
        html = render_status_page(WalletStats.from_balance(ADDRESS, 2 * 10**12), [], 0, EXPLORER)
        assert f'href="{EXPLORER}/address/{ADDRESS}"' in html
        assert "2.000000000000 AR" in html
        assert "2000000000000 winston" in html

    def test_unknown_wallet(self):
        html = render_status_page(WalletStats(), [], 0, EXPLORER)
        assert "/address/" not in html
        assert "unknown" in html

    def test_empty_cache(self):
        html = render_status_page(WalletStats(), [], 0, EXPLORER)
        assert "Cache is empty." in html
        assert "0 transactions" in html

    def test_cache_listing(self):
        entries = [_entry("a" * 43, 2048), _entry("b" * 43, 1024)]
        html = render_status_page(WalletStats(), entries, 3072, EXPLORER)
        assert "2 transactions" in html
        assert "3.00 KB" in html
        assert f'href="/tx/{"a" * 43}"' in html
        assert f'data-tx="{"b" * 43}"' in html
        assert "2024-01-24 00:00:00" in html

    def test_poll_script_targets_status_endpoint(self):
        html = render_status_page(WalletStats(), [_entry("a" * 43, 1)], 1, EXPLORER)
        assert "fetch('/status/'" in html
        assert "number_of_confirmations" in html

    def test_escapes_dynamic_text(self):
        stats = WalletStats(address='<script>alert("x")</script>', balance=0, balance_ar="0")
        html = render_status_page(stats, [_entry("<b>", 1)], 1, EXPLORER)
        assert '<script>alert("x")</script>' not in html
        assert "&lt;script&gt;" in html
        assert "&lt;b&gt;" in html

    def test_unknown_template_falls_back(self):
        html = render_status_page(WalletStats(), [], 0, EXPLORER, template="neon")
        assert "#0D1117" in html

    def test_light_template(self):
        html = render_status_page(WalletStats(), [], 0, EXPLORER, template="light")
        assert "#FFFFFF" in html


class TestErrorPage:
    def test_generic_message(self):
        html = render_error_page()
        assert "<h1>Error</h1>" in html
        assert "Something went wrong." in html

    def test_escapes_message(self):
        assert "&lt;oops&gt;" in render_error_page("<oops>")
