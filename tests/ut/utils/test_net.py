"""URL 校验与下载工具测试"""

import urllib.error

import pytest

from winebox.core.exceptions import ExecutionError, ValidationError
from winebox.utils.net import download_file, fetch_text, validate_url_scheme


class TestValidateUrlScheme:
    def test_https_ok(self) -> None:
        validate_url_scheme("https://api.github.com/repos/x/y/releases")

    def test_file_rejected(self) -> None:
        with pytest.raises(ValidationError, match="不允许的 URL 协议"):
            validate_url_scheme("file:///etc/passwd")

    def test_empty_scheme_rejected(self) -> None:
        with pytest.raises(ValidationError, match="不允许的 URL 协议"):
            validate_url_scheme("/local/path")

    def test_context_in_error(self) -> None:
        with pytest.raises(ValidationError, match="download"):
            validate_url_scheme("ftp://x/y", context="download")


class TestFetchText:
    def test_rejects_file_url(self) -> None:
        with pytest.raises(ValidationError):
            fetch_text("file:///etc/passwd")

    def test_network_error_wrapped(self, monkeypatch) -> None:
        def boom(*args, **kwargs):
            raise urllib.error.URLError("offline")

        monkeypatch.setattr("winebox.utils.net.urllib.request.urlopen", boom)
        with pytest.raises(ExecutionError, match="拉取失败"):
            fetch_text("https://example.com/releases")


class TestDownloadFile:
    def test_failure_removes_partial_file(self, tmp_path, monkeypatch) -> None:
        dest = tmp_path / "dl" / "wine.tar.xz"

        def partial(url, filename):
            with open(filename, "wb") as f:
                f.write(b"half")
            raise urllib.error.URLError("connection reset")

        monkeypatch.setattr("winebox.utils.net.urllib.request.urlretrieve", partial)
        with pytest.raises(ExecutionError, match="下载失败"):
            download_file("https://example.com/wine.tar.xz", dest)
        assert not dest.exists()

    def test_success_returns_dest(self, tmp_path, monkeypatch) -> None:
        dest = tmp_path / "dl" / "wine.tar.xz"

        def ok(url, filename):
            with open(filename, "wb") as f:
                f.write(b"data")

        monkeypatch.setattr("winebox.utils.net.urllib.request.urlretrieve", ok)
        assert download_file("https://example.com/wine.tar.xz", dest) == dest
        assert dest.read_bytes() == b"data"
