from collections.abc import Callable
from pathlib import Path

import pytest

from kdeswitch.lib.dnf import Dnf
from kdeswitch.lib.exceptions import SysCallError
from kdeswitch.lib.models.config import AppImageConfig, KdeBuilderConfig, SwitcherConfig, Symlink
from kdeswitch.lib.output import logger
from kdeswitch.lib.systemd import Systemctl


class FakeDnf(Dnf):
	"""
	Records every command instead of executing it.
	Commands matching one of ``fail_when`` raise SysCallError.
	"""

	def __init__(self) -> None:
		super().__init__('dnf5')
		self.calls: list[list[str]] = []
		self.installed: set[str] = set()
		self.group_list_output = ''
		self.group_info_outputs: dict[str, str] = {}
		self.repoquery_output = ''
		self.fail_when: list[Callable[[list[str]], bool]] = []

	def _execute(self, cmd: list[str]) -> str:
		self.calls.append(cmd)

		for predicate in self.fail_when:
			if predicate(cmd):
				raise SysCallError(f'{cmd} exited with abnormal exit code [1]: Error: boom', 1, b'Last metadata expiration check\nError: boom')

		if cmd[0] == 'rpm':
			if cmd[-1] in self.installed:
				return f'{cmd[-1]}-1.0-1.fc42.x86_64'
			raise SysCallError(f'package {cmd[-1]} is not installed', 1)

		if cmd[1:3] == ['group', 'list']:
			return self.group_list_output

		if cmd[1:3] == ['group', 'info']:
			return self.group_info_outputs.get(cmd[-1], '')

		if cmd[1] == 'repoquery':
			return self.repoquery_output

		return ''

	def commands(self, name: str) -> list[list[str]]:
		return [cmd for cmd in self.calls if cmd[0] == 'dnf5' and name in cmd[1:4]]

	@property
	def swapped(self) -> list[str]:
		return [cmd[-1] for cmd in self.commands('swap')]

	@property
	def installs(self) -> list[list[str]]:
		return self.commands('install')


class FakeSystemctl(Systemctl):
	def __init__(self) -> None:
		self.calls: list[list[str]] = []
		self.failing: set[str] = set()

	def _execute(self, cmd: list[str]) -> str:
		self.calls.append(cmd)

		if cmd[-1] in self.failing:
			raise SysCallError(f'Failed to enable unit: Unit file {cmd[-1]} does not exist.', 1)

		return ''


@pytest.fixture(autouse=True)
def isolated_logger(tmp_path: Path) -> Path:
	log_dir = tmp_path / 'log'
	logger.set_directory(log_dir)
	logger.verbose = False
	return log_dir


@pytest.fixture
def fake_dnf() -> FakeDnf:
	return FakeDnf()


@pytest.fixture
def fake_systemctl() -> FakeSystemctl:
	return FakeSystemctl()


@pytest.fixture
def root(tmp_path: Path) -> Path:
	path = tmp_path / 'root'
	path.mkdir()
	return path


@pytest.fixture
def appimage_config(root: Path) -> AppImageConfig:
	return AppImageConfig(
		install_path=root / 'usr/bin/winboat',
		icon_path=root / 'usr/share/icons/hicolor/scalable/apps/winboat.svg',
		desktop_file=root / 'usr/share/applications/winboat.desktop',
	)


@pytest.fixture
def kde_builder_config(root: Path) -> KdeBuilderConfig:
	return KdeBuilderConfig(
		install_dir=root / 'usr/share/kde-builder',
		links=[
			Symlink(source='kde-builder', link=root / 'usr/bin/kde-builder'),
			Symlink(source='data/completions/zsh/_kde-builder', link=root / 'usr/share/zsh/site-functions/_kde-builder'),
			Symlink(
				source='data/completions/zsh/_kde-builder_projects_and_groups',
				link=root / 'usr/share/zsh/site-functions/_kde-builder_projects_and_groups',
			),
			Symlink(source='data/completions/bash/kde-builder.bash', link=root / 'usr/share/bash-completion/completions/kde-builder'),
		],
	)


@pytest.fixture
def switcher_config(appimage_config: AppImageConfig, kde_builder_config: KdeBuilderConfig) -> SwitcherConfig:
	return SwitcherConfig(
		arch='x86_64',
		appimage=appimage_config,
		kde_builder=kde_builder_config,
	)


@pytest.fixture(scope='session')
def config_fixture() -> Path:
	return Path(__file__).parent / 'data' / 'test_config.json'


@pytest.fixture(scope='session')
def manifest_fixture() -> Path:
	return Path(__file__).parent / 'data' / 'fedora.ini'
