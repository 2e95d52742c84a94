"""
Unit Tests for the KuCoin probe script

Run with:
    pytest tests/unit/test_kucoin_probe.py -v
"""

import pytest

from core.config import Settings
from scripts import kucoin_probe
from scripts.kucoin_probe import list_endpoints, main, parse_params


class TestParseParams:
    """Tests for parse_params"""

    def test_parses_pairs(self):
        assert parse_params(["pair=KCS-BTC", "limit=5"]) == {"pair": "KCS-BTC", "limit": "5"}

    def test_value_may_contain_equals(self):
        assert parse_params(["address=a=b"]) == {"address": "a=b"}

    def test_rejects_missing_separator(self):
        with pytest.raises(ValueError, match="key=value"):
            parse_params(["pair"])


class TestMain:
    """Tests for argument handling that never reaches the network"""

    def test_list(self, capsys):
        assert main(["--list"]) == 0
        out = capsys.readouterr().out
        assert "get_trading_symbols" in out
        assert "/market/open/symbols" in out

    def test_unknown_endpoint(self):
        with pytest.raises(SystemExit):
            main(["get_everything"])

    def test_missing_endpoint(self):
        with pytest.raises(SystemExit):
            main([])

    def test_list_endpoints_marks_signed(self, capsys):
        list_endpoints()
        lines = capsys.readouterr().out.splitlines()
        balance = next(line for line in lines if line.startswith("get_balance"))
        assert balance.rstrip().endswith("signed")

    def test_list_does_not_configure_logging(self, monkeypatch):
        calls = []
        monkeypatch.setattr(kucoin_probe, "setup_logging", lambda **kw: calls.append(kw))

        assert main(["--list"]) == 0
        assert calls == []

    def test_debug_flag_configures_logging(self, monkeypatch, capsys):
        """Verify the entry point, not the library import, sets up logging"""
        calls = []
        monkeypatch.setattr(kucoin_probe, "setup_logging", lambda **kw: calls.append(kw))
        monkeypatch.setattr(
            kucoin_probe, "settings",
            Settings(_env_file=None, kucoin_api_key="", kucoin_api_secret="")
        )

        # Signed endpoint without credentials stops before any request
        assert main(["get_balance", "--debug", "--param", "symbol=KCS"]) == 2
        assert calls == [{"log_level": "DEBUG"}]
        assert "signed" in capsys.readouterr().err
