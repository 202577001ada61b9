"""
Tests del cliente HTTP del DWD: desenvoltura de la respuesta, proxy y errores.
"""

from unittest.mock import MagicMock

import pytest
import requests

from api import ConfigError, DwdFetcher, FetchError, ProtocolMismatch, unwrap_response
from config import REQUEST_TIMEOUT_SECONDS, WARN_URL
from conftest import wrap


# ── unwrap_response ──────────────────────────────────────────────────────────

class TestUnwrapResponse:

    def test_extracts_inner_json(self):
        body = b'warnWetter.loadWarnings({"time":1627052765000,"warnings":{}});'
        assert unwrap_response(body) == b'{"time":1627052765000,"warnings":{}}'

    def test_accepts_trailing_newline(self):
        assert unwrap_response(wrap("{}") + b"\n") == b"{}"

    def test_accepts_str(self):
        assert unwrap_response('warnWetter.loadWarnings({"a":"ü"});') == '{"a":"ü"}'.encode("utf-8")

    def test_multiline_payload(self):
        assert unwrap_response(b'warnWetter.loadWarnings({\n"time": 1\n});') == b'{\n"time": 1\n}'

    @pytest.mark.parametrize("body", [
        b'{"time":1}',
        b'warnWetter.loadWarnings({"time":1})',
        b'otherCallback({"time":1});',
        b' warnWetter.loadWarnings({"time":1});',
        b'warnWetterXloadWarnings({"time":1});',
        b'warnWetter.loadWarnings({"time":1}); trailing()',
        b'<html>Service unavailable</html>',
        b'',
    ])
    def test_mismatch_raises(self, body):
        with pytest.raises(ProtocolMismatch) as exc:
            unwrap_response(body)
        assert exc.value.body == body
        assert exc.value.kind == "protocol"

    def test_mismatch_message_is_truncated(self):
        body = b"x" * 5000
        with pytest.raises(ProtocolMismatch) as exc:
            unwrap_response(body)
        assert len(str(exc.value)) < 1000
        assert exc.value.body == body


# ── DwdFetcher ───────────────────────────────────────────────────────────────

def _session_returning(status: int, content: bytes = b""):
    session = MagicMock(spec=requests.Session)
    session.proxies = {}
    response = MagicMock()
    response.status_code = status
    response.content = content
    session.get.return_value = response
    return session


class TestDwdFetcher:

    def test_fetch_ok_returns_body(self):
        session = _session_returning(200, wrap("{}"))
        fetcher = DwdFetcher(session=session)
        assert fetcher.fetch() == wrap("{}")
        session.get.assert_called_once_with(WARN_URL, timeout=REQUEST_TIMEOUT_SECONDS)

    def test_fetch_body_unwraps(self):
        fetcher = DwdFetcher(session=_session_returning(200, wrap('{"time":1}')))
        assert fetcher.fetch_body() == b'{"time":1}'

    @pytest.mark.parametrize("status", [204, 301, 404, 500, 503])
    def test_non_200_raises_fetch_error_with_status(self, status):
        fetcher = DwdFetcher(session=_session_returning(status))
        with pytest.raises(FetchError) as exc:
            fetcher.fetch()
        assert exc.value.kind == "http"
        assert exc.value.status_code == status

    def test_timeout_raises_fetch_error(self):
        session = _session_returning(200)
        session.get.side_effect = requests.Timeout("read timed out")
        with pytest.raises(FetchError) as exc:
            DwdFetcher(session=session).fetch()
        assert exc.value.kind == "timeout"
        assert exc.value.status_code is None

    def test_connection_error_raises_fetch_error(self):
        session = _session_returning(200)
        session.get.side_effect = requests.ConnectionError("connection reset")
        with pytest.raises(FetchError) as exc:
            DwdFetcher(session=session).fetch()
        assert exc.value.kind == "network"

    def test_proxy_is_applied_to_session(self):
        session = _session_returning(200)
        fetcher = DwdFetcher(proxy="http://proxy.example.org:3128", session=session)
        assert fetcher.proxy == "http://proxy.example.org:3128"
        assert session.proxies == {
            "http": "http://proxy.example.org:3128",
            "https": "http://proxy.example.org:3128",
        }

    def test_no_proxy_leaves_session_untouched(self):
        session = _session_returning(200)
        fetcher = DwdFetcher(proxy="", session=session)
        assert fetcher.proxy is None
        assert session.proxies == {}

    @pytest.mark.parametrize("proxy", [
        "not a url",
        "proxy.example.org:3128",
        "ftp://proxy.example.org",
        "http://",
        "http://proxy.example.org:99999",
        "http://proxy.example.org:port",
        "http://[::1",
    ])
    def test_malformed_proxy_fails_at_construction(self, proxy):
        session = _session_returning(200)
        with pytest.raises(ConfigError):
            DwdFetcher(proxy=proxy, session=session)
        session.get.assert_not_called()

    @pytest.mark.parametrize("proxy", [
        "socks5://127.0.0.1:1080",
        "socks5h://proxy.example.org:1080",
    ])
    def test_socks_proxy_rejected_without_socks_support(self, proxy):
        # requests necesita PySocks para estos esquemas; se rechazan al construir
        with pytest.raises(ConfigError):
            DwdFetcher(proxy=proxy, session=_session_returning(200))

    def test_https_proxy_accepted(self):
        fetcher = DwdFetcher(proxy="https://proxy.example.org", session=_session_returning(200))
        assert fetcher.proxy == "https://proxy.example.org"

    def test_close_leaves_injected_session_open(self):
        session = _session_returning(200)
        DwdFetcher(session=session).close()
        session.close.assert_not_called()

    def test_close_releases_own_session(self, monkeypatch):
        created = MagicMock(spec=requests.Session)
        created.proxies = {}
        monkeypatch.setattr(requests, "Session", lambda: created)
        fetcher = DwdFetcher()
        assert fetcher.session is created
        fetcher.close()
        created.close.assert_called_once_with()
