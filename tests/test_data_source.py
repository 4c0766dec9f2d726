"""
Unit tests for the race results loader. The HTTP session is mocked.
"""

from unittest.mock import MagicMock, patch

import pytest
import requests

from dopers import data_source
from dopers.data_source import fetch_results
from dopers.errors import LoadError


def _response(payload=None, json_error=None, http_error=None):
    resp = MagicMock()
    if json_error is not None:
        resp.json.side_effect = json_error
    else:
        resp.json.return_value = payload
    if http_error is not None:
        resp.raise_for_status.side_effect = http_error
    return resp


class TestFetchResults:
    @patch("dopers.data_source.sess")
    def test_returns_records(self, mock_sess, raw_records, monkeypatch):
        monkeypatch.setitem(data_source.DATA_CONFIG, "timeout", None)
        mock_sess.get.return_value = _response(raw_records)

        records = fetch_results("https://example.test/cyclists.json")

        assert records == raw_records
        mock_sess.get.assert_called_once_with("https://example.test/cyclists.json", timeout=None)

    @patch("dopers.data_source.sess")
    def test_default_url_from_config(self, mock_sess, monkeypatch):
        monkeypatch.setitem(data_source.DATA_CONFIG, "url", "https://example.test/default.json")
        mock_sess.get.return_value = _response([])

        assert fetch_results() == []
        assert mock_sess.get.call_args.args[0] == "https://example.test/default.json"

    @patch("dopers.data_source.sess")
    def test_explicit_timeout(self, mock_sess):
        mock_sess.get.return_value = _response([])

        fetch_results("https://example.test/x.json", timeout=5)

        assert mock_sess.get.call_args.kwargs["timeout"] == 5

    @patch("dopers.data_source.sess")
    def test_single_attempt_on_connection_error(self, mock_sess):
        mock_sess.get.side_effect = requests.ConnectionError("boom")

        with pytest.raises(LoadError) as exc:
            fetch_results("https://example.test/x.json")

        assert mock_sess.get.call_count == 1
        assert isinstance(exc.value.__cause__, requests.ConnectionError)

    @patch("dopers.data_source.sess")
    def test_http_error(self, mock_sess):
        mock_sess.get.return_value = _response(http_error=requests.HTTPError("500 Server Error"))

        with pytest.raises(LoadError):
            fetch_results("https://example.test/x.json")

    @patch("dopers.data_source.sess")
    def test_body_not_json(self, mock_sess):
        mock_sess.get.return_value = _response(json_error=ValueError("Expecting value"))

        with pytest.raises(LoadError, match="not valid JSON"):
            fetch_results("https://example.test/x.json")

    @patch("dopers.data_source.sess")
    def test_payload_not_an_array(self, mock_sess):
        mock_sess.get.return_value = _response({"data": []})

        with pytest.raises(LoadError, match="JSON array"):
            fetch_results("https://example.test/x.json")

    @patch("dopers.data_source.sess")
    def test_record_not_an_object(self, mock_sess, raw_records):
        mock_sess.get.return_value = _response(raw_records + ["oops"])

        with pytest.raises(LoadError, match="record 5"):
            fetch_results("https://example.test/x.json")

    @patch("dopers.data_source.sess")
    def test_record_missing_field(self, mock_sess, raw_records):
        del raw_records[2]["Time"]
        mock_sess.get.return_value = _response(raw_records)

        with pytest.raises(LoadError, match="missing Time"):
            fetch_results("https://example.test/x.json")
