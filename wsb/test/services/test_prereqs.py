"""Tests for wsb.services.prereqs."""

from __future__ import annotations

from pathlib import Path

import pytest

import wsb.services.prereqs as prereqs_mod
from wsb.core.result import Err, Ok
from wsb.output.console import MockConsole
from wsb.platform.detection import LinuxDistro, Platform, PlatformInfo
from wsb.platform.process import ProcessError
from wsb.services.prereqs import GitPrereqService, git_install_command

WINDOWS = PlatformInfo(Platform.WINDOWS, LinuxDistro.UNKNOWN)
MACOS = PlatformInfo(Platform.MACOS, LinuxDistro.UNKNOWN)
DEBIAN = PlatformInfo(Platform.LINUX, LinuxDistro.DEBIAN)


class TestInstallCommand:
    def test_windows_uses_winget_silently(self) -> None:
        command = git_install_command(WINDOWS)
        assert command is not None
        assert command[:4] == ["winget", "install", "--id", "Git.Git"]
        assert "--silent" in command
        assert "--accept-package-agreements" in command

    def test_macos(self) -> None:
        assert git_install_command(MACOS) == ["brew", "install", "git"]

    @pytest.mark.parametrize(
        ("distro", "manager"),
        [
            (LinuxDistro.DEBIAN, "apt"),
            (LinuxDistro.FEDORA, "dnf"),
            (LinuxDistro.ARCH, "pacman"),
            (LinuxDistro.SUSE, "zypper"),
        ],
    )
    def test_linux_by_distro(self, distro: LinuxDistro, manager: str) -> None:
        command = git_install_command(PlatformInfo(Platform.LINUX, distro))
        assert command is not None
        assert command[:2] == ["sudo", manager]
        assert command[-1] == "git"

    def test_unknown(self) -> None:
        assert git_install_command(PlatformInfo(Platform.LINUX, LinuxDistro.UNKNOWN)) is None
        assert git_install_command(PlatformInfo(Platform.UNKNOWN, LinuxDistro.UNKNOWN)) is None

    def test_returns_copy(self) -> None:
        command = git_install_command(DEBIAN)
        assert command is not None
        command.append("extra")
        assert git_install_command(DEBIAN) == ["sudo", "apt", "install", "-y", "git"]


class TestEnsure:
    def test_present_skips_install(self, monkeypatch: pytest.MonkeyPatch) -> None:
        def fail(*args: object, **kwargs: object) -> None:
            raise AssertionError("install must not run")

        monkeypatch.setattr(prereqs_mod, "run_process", fail)
        console = MockConsole()
        service = GitPrereqService(
            platform=DEBIAN, console=console, which=lambda name: "/usr/bin/git"
        )

        assert service.ensure() == Ok("/usr/bin/git")
        assert console.has_success()

    def test_missing_installs_then_finds(self, monkeypatch: pytest.MonkeyPatch) -> None:
        installed: list[list[str]] = []
        state = {"git": None}

        def fake_run(cmd: list[str], **kwargs: object) -> Ok[str]:
            installed.append(cmd)
            state["git"] = "/usr/bin/git"
            return Ok("")

        monkeypatch.setattr(prereqs_mod, "run_process", fake_run)
        service = GitPrereqService(
            platform=DEBIAN, console=MockConsole(), which=lambda name: state["git"]
        )

        assert service.ensure() == Ok("/usr/bin/git")
        assert installed == [["sudo", "apt", "install", "-y", "git"]]

    def test_install_failure(self, monkeypatch: pytest.MonkeyPatch) -> None:
        error = ProcessError(("winget",), 1, "", "No package found\n")
        monkeypatch.setattr(prereqs_mod, "run_process", lambda cmd, **kw: Err(error))
        monkeypatch.setattr(prereqs_mod, "_windows_default_git", lambda: Path("/nonexistent/git"))
        service = GitPrereqService(platform=WINDOWS, console=MockConsole(), which=lambda n: None)

        result = service.ensure()

        assert isinstance(result, Err)
        assert result.error.kind == "install_failed"
        assert result.error.hint == "No package found"

    def test_still_missing(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setattr(prereqs_mod, "run_process", lambda cmd, **kw: Ok(""))
        service = GitPrereqService(platform=MACOS, console=MockConsole(), which=lambda n: None)

        result = service.ensure()

        assert isinstance(result, Err)
        assert result.error.kind == "still_missing"

    def test_unsupported_platform(self) -> None:
        service = GitPrereqService(
            platform=PlatformInfo(Platform.LINUX, LinuxDistro.UNKNOWN),
            console=MockConsole(),
            which=lambda n: None,
        )

        result = service.ensure()

        assert isinstance(result, Err)
        assert result.error.kind == "unsupported"

    def test_dry_run_prints_command(self, monkeypatch: pytest.MonkeyPatch) -> None:
        def fail(*args: object, **kwargs: object) -> None:
            raise AssertionError("install must not run")

        monkeypatch.setattr(prereqs_mod, "run_process", fail)
        console = MockConsole()
        service = GitPrereqService(platform=MACOS, console=console, which=lambda n: None)

        assert service.ensure(dry_run=True) == Ok("git")
        assert console.find("brew install git")

    def test_windows_finds_fresh_install(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        git_exe = tmp_path / "Git" / "cmd" / "git.exe"
        git_exe.parent.mkdir(parents=True)
        git_exe.write_text("", encoding="utf-8")
        monkeypatch.setenv("ProgramFiles", str(tmp_path))
        service = GitPrereqService(platform=WINDOWS, console=MockConsole(), which=lambda n: None)

        assert service.find_git() == str(git_exe)
