"""共享 fixture — mock 执行器、远程源数据、独立的服务容器

所有外部依赖（网络、tar、wine、winetricks）都被替换:
  fetch       → 返回内存中的 release JSON
  downloader  → 在目标路径写入占位文件
  executor    → FakeExecutor，记录调用；tar 调用时模拟解压出 bin/wine
"""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from winebox.core.config import Config
from winebox.services.container import ServiceContainer
from winebox.utils.shell import CommandResult

RELEASES = [
    {
        "tag_name": "8.0",
        "assets": [
            {
                "name": "wine-8.0-amd64.tar.xz",
                "browser_download_url": "https://example.com/8.0/wine-8.0-amd64.tar.xz",
                "created_at": "2023-01-24T18:20:00Z",
            },
        ],
    },
    {
        "tag_name": "7.0",
        "assets": [
            {
                "name": "wine-7.0-amd64.tar.xz",
                "browser_download_url": "https://example.com/7.0/wine-7.0-amd64.tar.xz",
                "created_at": "2022-01-18T20:42:00Z",
            },
            {
                "name": "wine-7.0-staging-amd64.tar.xz",
                "browser_download_url": "https://example.com/7.0/wine-7.0-staging-amd64.tar.xz",
                "created_at": "2022-01-19T08:10:00Z",
            },
        ],
    },
]


class FakeExecutor:
    """记录所有调用的 CommandExecutor 实现"""

    def __init__(self, returncode: int = 0, stderr: str = "") -> None:
        self.returncode = returncode
        self.stderr = stderr
        self.calls: list[dict] = []

    def execute(
        self,
        cmd: list[str],
        *,
        cwd: str | None = None,
        env: dict[str, str] | None = None,
        capture: bool = True,
    ) -> CommandResult:
        self.calls.append({"cmd": list(cmd), "env": env or {}, "capture": capture})
        if cmd and cmd[0] == "tar" and self.returncode == 0:
            dest = Path(cmd[cmd.index("-C") + 1])
            (dest / "bin").mkdir(parents=True, exist_ok=True)
            (dest / "bin" / "wine").write_text("#!/bin/sh\n", encoding="utf-8")
        return CommandResult(returncode=self.returncode, stderr=self.stderr)


@pytest.fixture()
def releases() -> list[dict]:
    return json.loads(json.dumps(RELEASES))


@pytest.fixture()
def executor() -> FakeExecutor:
    return FakeExecutor()


@pytest.fixture()
def fetched_urls() -> list[str]:
    return []


@pytest.fixture()
def downloads() -> list[tuple[str, Path]]:
    return []


@pytest.fixture()
def config(tmp_path: Path) -> Config:
    return Config(
        cache_file=str(tmp_path / "cache" / "releases.json"),
        packages_dir=str(tmp_path / "packages"),
        prefixes_dir=str(tmp_path / "prefixes"),
        download_dir=str(tmp_path / "downloads"),
        required_programs=[],
    )


@pytest.fixture()
def container(
    config: Config,
    executor: FakeExecutor,
    releases: list[dict],
    fetched_urls: list[str],
    downloads: list[tuple[str, Path]],
) -> ServiceContainer:
    def fake_fetch(url: str) -> str:
        fetched_urls.append(url)
        return json.dumps(releases)

    def fake_download(url: str, dest: Path) -> Path:
        downloads.append((url, dest))
        dest.write_bytes(b"archive")
        return dest

    return ServiceContainer(
        config, executor=executor, fetch=fake_fetch, downloader=fake_download,
    )


@pytest.fixture()
def fake_install(config: Config):
    """直接在包根目录下伪造一个已安装的包"""

    def _install(name: str) -> Path:
        pkg_dir = Path(config.packages_dir) / name
        (pkg_dir / "bin").mkdir(parents=True)
        (pkg_dir / "bin" / "wine").write_text("#!/bin/sh\n", encoding="utf-8")
        return pkg_dir

    return _install
