import pytest
from pytest import MonkeyPatch

from kdeswitch.lib.exceptions import DownloadError, PackageError
from kdeswitch.lib.models.report import RunReport, StepStatus
from kdeswitch.lib.packages import install
from kdeswitch.lib.packages.install import (
	install_build_dependencies,
	install_dev_tools,
	install_manifest_dependencies,
	install_with_fallback,
)

from .conftest import FakeDnf

BUILD_DEPS = ['git', 'python3-dbus', 'clang-devel', 'jq']


def test_build_dependencies_are_all_requested(fake_dnf: FakeDnf) -> None:
	report = RunReport()

	install_build_dependencies(fake_dnf, BUILD_DEPS, ['fedora-rawhide'], report)

	assert fake_dnf.installs == [
		['dnf5', 'install', '-y', '--skip-broken', '--skip-unavailable', '--allowerasing', '--repo=fedora-rawhide', *BUILD_DEPS],
	]
	assert report.results[0].status == StepStatus.Ok


def test_build_dependency_failure_is_reported(fake_dnf: FakeDnf) -> None:
	fake_dnf.fail_when.append(lambda cmd: cmd[1] == 'install')
	report = RunReport()

	install_build_dependencies(fake_dnf, BUILD_DEPS, ['fedora-rawhide'], report)

	assert fake_dnf.installs[0][-len(BUILD_DEPS):] == BUILD_DEPS
	assert report.results[0].status == StepStatus.Failed


def test_multiple_repositories_are_joined(fake_dnf: FakeDnf) -> None:
	install_build_dependencies(fake_dnf, ['git'], ['copr:a:b:c', 'copr:a:b:d'], RunReport())

	assert '--repo=copr:a:b:c,copr:a:b:d' in fake_dnf.installs[0]


def test_manifest_dependencies(fake_dnf: FakeDnf, monkeypatch: MonkeyPatch) -> None:
	monkeypatch.setattr(install, 'fetch_dependency_manifest', lambda url, timeout=60: ['pkg-a', 'pkg-b'])
	report = RunReport()

	install_manifest_dependencies(fake_dnf, 'https://example.com/fedora.ini', ['fedora-rawhide'], report)

	assert fake_dnf.installs[0][-2:] == ['pkg-a', 'pkg-b']
	assert report.results[0].status == StepStatus.Ok


def test_manifest_fetch_failure_skips_install(fake_dnf: FakeDnf, monkeypatch: MonkeyPatch) -> None:
	def fail(url: str, timeout: int = 60) -> list[str]:
		raise DownloadError('Unable to fetch data')

	monkeypatch.setattr(install, 'fetch_dependency_manifest', fail)
	report = RunReport()

	install_manifest_dependencies(fake_dnf, 'https://example.com/fedora.ini', ['fedora-rawhide'], report)

	assert fake_dnf.installs == []
	assert report.results[0].status == StepStatus.Skipped


def test_fallback_stops_at_first_success(fake_dnf: FakeDnf) -> None:
	source = install_with_fallback(fake_dnf, ['neovim'], [['fedora-rawhide'], None])

	assert source == ['fedora-rawhide']
	assert len(fake_dnf.installs) == 1


def test_fallback_uses_default_source(fake_dnf: FakeDnf) -> None:
	fake_dnf.fail_when.append(lambda cmd: '--repo=fedora-rawhide' in cmd)

	source = install_with_fallback(fake_dnf, ['neovim'], [['fedora-rawhide'], None])

	assert source is None
	assert fake_dnf.installs[1] == ['dnf5', 'install', '-y', '--skip-broken', '--skip-unavailable', '--allowerasing', 'neovim']


def test_fallback_exhausted(fake_dnf: FakeDnf) -> None:
	fake_dnf.fail_when.append(lambda cmd: cmd[1] == 'install')

	with pytest.raises(PackageError):
		install_with_fallback(fake_dnf, ['neovim'], [['fedora-rawhide'], None])

	assert len(fake_dnf.installs) == 2


def test_dev_tools_are_independent(fake_dnf: FakeDnf) -> None:
	fake_dnf.fail_when.append(lambda cmd: cmd[1] == 'install' and cmd[-1] == 'kdevelop')
	report = RunReport()

	install_dev_tools(fake_dnf, ['neovim', 'kdevelop', 'zsh'], ['fedora-rawhide'], report)

	assert [cmd[-1] for cmd in fake_dnf.installs] == ['neovim', 'kdevelop', 'kdevelop', 'zsh']
	assert {r.target: r.status for r in report.results} == {
		'neovim': StepStatus.Ok,
		'kdevelop': StepStatus.Failed,
		'zsh': StepStatus.Ok,
	}
