"""
Tests for downloading yearly CSVs, using a fake HTTP session.
"""

import pytest
import requests

from atp_brackets.fetch import FetchError, csv_url, download_year_csv


class FakeResponse:
    def __init__(self, status_code=200, content=b""):
        self.status_code = status_code
        self.content = content


class FakeSession:
    def __init__(self, response=None, error=None):
        self.response = response
        self.error = error
        self.calls = []

    def get(self, url, timeout=None):
        self.calls.append((url, timeout))
        if self.error:
            raise self.error
        return self.response


TEMPLATE = "https://example.test/{year}/{year}.csv"


class TestDownloadYearCsv:
    def test_saves_year_file(self, tmp_path):
        session = FakeSession(FakeResponse(content=b"Tournament,Winner\n"))
        path = download_year_csv(2024, tmp_path, session=session, template=TEMPLATE)
        assert path == tmp_path / "2024.csv"
        assert path.read_bytes() == b"Tournament,Winner\n"
        assert session.calls[0][0] == "https://example.test/2024/2024.csv"

    def test_timeout_clamped(self, tmp_path):
        session = FakeSession(FakeResponse())
        download_year_csv(2024, tmp_path, session=session, timeout=1, template=TEMPLATE)
        download_year_csv(2024, tmp_path, session=session, timeout=999, template=TEMPLATE)
        assert [t for _, t in session.calls] == [5, 120]

    def test_upstream_error_status(self, tmp_path):
        session = FakeSession(FakeResponse(status_code=404))
        with pytest.raises(FetchError):
            download_year_csv(2024, tmp_path, session=session, template=TEMPLATE)
        assert not (tmp_path / "2024.csv").exists()

    def test_network_error(self, tmp_path):
        session = FakeSession(error=requests.ConnectionError("refused"))
        with pytest.raises(FetchError):
            download_year_csv(2024, tmp_path, session=session, template=TEMPLATE)

    def test_year_range(self, tmp_path):
        with pytest.raises(ValueError):
            download_year_csv(1900, tmp_path, session=FakeSession(FakeResponse()))

    def test_csv_url(self):
        assert csv_url(2023, TEMPLATE) == "https://example.test/2023/2023.csv"
