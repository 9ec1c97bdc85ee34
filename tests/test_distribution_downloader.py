import httpx
import pytest

from conftest import build_settings
from distdeploy.modules.repackage.fileget import DistributionDownloader

URL = "https://downloads.gradle.org/distributions/gradle-4.10-all.zip"


def test_download_writes_file(tmp_path):
    payload = b"PK" + b"0" * 200_000

    def handler(request: httpx.Request) -> httpx.Response:
        assert request.url.path.endswith("gradle-4.10-all.zip")
        return httpx.Response(200, content=payload)

    client = httpx.Client(transport=httpx.MockTransport(handler))
    downloader = DistributionDownloader(build_settings(tmp_path), client=client)

    path = downloader.download(URL, tmp_path / "build" / "gradle-distribution.zip")

    assert path.exists()
    assert path.read_bytes() == payload


def test_download_raises_on_http_error(tmp_path):
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(404, content=b"missing")

    client = httpx.Client(transport=httpx.MockTransport(handler))
    downloader = DistributionDownloader(build_settings(tmp_path), client=client)

    with pytest.raises(httpx.HTTPStatusError):
        downloader.download(URL, tmp_path / "gradle-distribution.zip")
