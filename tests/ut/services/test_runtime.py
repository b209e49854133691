"""WineRuntime 测试 — 环境变量绑定与退出码"""

from __future__ import annotations

from pathlib import Path

import pytest

from winebox.core.exceptions import ExecutionError, MissingDependencyError
from winebox.services.runtime import WineRuntime

WINE = Path("/opt/packages/wine-8.0-amd64/bin/wine")


class TestBootstrap:
    def test_default_args(self, executor, tmp_path: Path) -> None:
        WineRuntime(executor).bootstrap(tmp_path, WINE)
        call = executor.calls[0]
        assert call["cmd"] == [str(WINE), "wineboot", "--init"]
        assert call["env"]["WINEPREFIX"] == str(tmp_path)
        assert call["capture"] is True

    def test_custom_args(self, executor, tmp_path: Path) -> None:
        WineRuntime(executor, bootstrap_args=["wineboot", "-u"]).bootstrap(tmp_path, WINE)
        assert executor.calls[0]["cmd"][1:] == ["wineboot", "-u"]

    def test_failure(self, executor, tmp_path: Path) -> None:
        executor.returncode = 1
        executor.stderr = "could not load kernel32.dll"
        with pytest.raises(ExecutionError, match="kernel32"):
            WineRuntime(executor).bootstrap(tmp_path, WINE)


class TestRun:
    @pytest.mark.parametrize("rc", [0, 1, 42])
    def test_returns_child_exit_code(self, executor, tmp_path: Path, rc: int) -> None:
        executor.returncode = rc
        assert WineRuntime(executor).run(tmp_path, WINE, ["notepad"]) == rc
        assert executor.calls[0]["capture"] is False

    def test_environment_inherited(self, executor, tmp_path: Path, monkeypatch) -> None:
        monkeypatch.setenv("DISPLAY", ":1")
        WineRuntime(executor).run(tmp_path, WINE, ["notepad"])
        assert executor.calls[0]["env"]["DISPLAY"] == ":1"


class TestTricks:
    def test_missing_helper(self, executor, monkeypatch) -> None:
        monkeypatch.setattr("winebox.utils.shell.shutil.which", lambda p: None)
        with pytest.raises(MissingDependencyError, match="winetricks"):
            WineRuntime(executor).require_tricks()
        assert executor.calls == []

    def test_helper_present(self, executor, monkeypatch) -> None:
        monkeypatch.setattr("winebox.utils.shell.shutil.which", lambda p: f"/bin/{p}")
        WineRuntime(executor, tricks_program="/opt/winetricks").require_tricks()

    def test_custom_program(self, executor, tmp_path: Path, monkeypatch) -> None:
        monkeypatch.setattr("winebox.utils.shell.shutil.which", lambda p: f"/bin/{p}")
        runtime = WineRuntime(executor, tricks_program="/opt/winetricks")
        runtime.tricks(tmp_path, WINE, ["dxvk"])
        call = executor.calls[0]
        assert call["cmd"] == ["/opt/winetricks", "dxvk"]
        assert call["env"]["WINE"] == str(WINE)
