from paifu.urls import extract_log_urls

_URL_A = "https://tenhou.net/5/#json=%7B%22a%22%3A1%7D"
_URL_B = "https://tenhou.net/5/#json=%7B%22b%22%3A2%7D"


def _anchor(url: str) -> str:
    return f'<a href="{url}" target="_blank">牌譜</a>'


class TestExtractLogUrls:
    def test_strips_trailing_quote(self):
        assert extract_log_urls(f"<p>{_anchor(_URL_A)}</p>") == [_URL_A]

    def test_deduplicates_in_first_seen_order(self):
        body = _anchor(_URL_B) + _anchor(_URL_A) + _anchor(_URL_B) + _anchor(_URL_A)

        assert extract_log_urls(body) == [_URL_B, _URL_A]

    def test_http_and_https_are_distinct(self):
        http_url = _URL_A.replace("https://", "http://")

        assert extract_log_urls(_anchor(_URL_A) + _anchor(http_url)) == [_URL_A, http_url]

    def test_ignores_other_hosts_and_links_without_fragment(self):
        body = (
            _anchor("https://example.com/5/#json=%7B%7D")
            + _anchor("https://tenhou.net/0/?log=2023010100gm-0009-0000-deadbeef")
            + _anchor(_URL_A)
        )

        assert extract_log_urls(body) == [_URL_A]

    def test_unterminated_url_is_not_matched(self):
        assert extract_log_urls("see https://tenhou.net/5/#json=%7B%7D") == []

    def test_custom_host(self):
        url = "https://viewer.test/5/#json=%7B%7D"

        assert extract_log_urls(_anchor(url), host="viewer.test") == [url]

    def test_empty_body(self):
        assert extract_log_urls("") == []
