import platform
from enum import Enum
from pathlib import Path

from pydantic import BaseModel, Field

from .repository import RAWHIDE_REPO_ID


class Step(Enum):
	Repositories = 'repositories'
	Swap = 'swap'
	BuildDeps = 'build-deps'
	ManifestDeps = 'manifest-deps'
	DevTools = 'dev-tools'
	KdeBuilder = 'kde-builder'
	AppImage = 'appimage'
	DesktopEntry = 'desktop-entry'
	Services = 'services'

	@classmethod
	def skippable(cls) -> list['Step']:
		return [step for step in cls if step != cls.Repositories]


class Symlink(BaseModel):
	# relative to the installed kde-builder tree
	source: str
	link: Path


class ServiceUnit(BaseModel):
	name: str
	now: bool = False


class KdeBuilderConfig(BaseModel):
	url: str = 'https://invent.kde.org/sdk/kde-builder.git'
	install_dir: Path = Path('/usr/share/kde-builder')
	links: list[Symlink] = Field(
		default_factory=lambda: [
			Symlink(source='kde-builder', link=Path('/usr/bin/kde-builder')),
			Symlink(
				source='data/completions/zsh/_kde-builder',
				link=Path('/usr/share/zsh/site-functions/_kde-builder'),
			),
			Symlink(
				source='data/completions/zsh/_kde-builder_projects_and_groups',
				link=Path('/usr/share/zsh/site-functions/_kde-builder_projects_and_groups'),
			),
			Symlink(
				source='data/completions/bash/kde-builder.bash',
				link=Path('/usr/share/bash-completion/completions/kde-builder'),
			),
		]
	)


class AppImageConfig(BaseModel):
	name: str = 'winboat'
	github_repo: str = 'TibixDev/winboat'
	install_path: Path = Path('/usr/bin/winboat')
	icon_url: str = 'https://raw.githubusercontent.com/TibixDev/winboat/refs/heads/main/gh-assets/winboat_logo.svg'
	icon_path: Path = Path('/usr/share/icons/hicolor/scalable/apps/winboat.svg')
	desktop_file: Path = Path('/usr/share/applications/winboat.desktop')
	comment: str = 'Windows for Penguins'
	categories: str = 'Utility;'

	def asset_name(self, version: str, arch: str) -> str:
		return f'{self.name}-{version}-{arch}.AppImage'


class SwitcherConfig(BaseModel):
	use_copr: bool = False
	coprs: list[str] = Field(
		default_factory=lambda: [
			'solopasha/plasma-unstable',
			'solopasha/kde-gear-unstable',
		]
	)
	rawhide_repo_id: str = RAWHIDE_REPO_ID
	rawhide_metalink: str = 'https://mirrors.fedoraproject.org/metalink?repo=rawhide&arch={arch}'
	repo_priority: int = 1
	arch: str = Field(default_factory=platform.machine)
	dnf_binary: str = 'dnf5'

	group_keywords: list[str] = Field(default_factory=lambda: ['kde', 'plasma'])
	fallback_patterns: list[str] = Field(default_factory=lambda: ['plasma6-*', 'kf6-*', 'kde*', 'kwin*', 'kio*'])

	build_dependencies: list[str] = Field(
		default_factory=lambda: [
			'git',
			'python3-dbus',
			'python3-pyyaml',
			'python3-setproctitle',
			'clang-devel',
			'kf6-kirigami-devel',
			'kf6-qqc2-desktop-style-devel',
			'kf6-kirigami-addons-devel',
			'clang-tools-extra',
			'git-clang-format',
			'jq',
		]
	)
	dependency_manifest_url: str = 'https://invent.kde.org/sysadmin/repo-metadata/-/raw/master/distro-dependencies/fedora.ini'
	install_flags: list[str] = Field(default_factory=lambda: ['-y', '--skip-broken', '--skip-unavailable', '--allowerasing'])

	dev_tools: list[str] = Field(
		default_factory=lambda: [
			'neovim',
			'zsh',
			'flatpak-builder',
			'kdevelop',
			'kdevelop-devel',
			'kdevelop-libs',
		]
	)

	kde_builder: KdeBuilderConfig = Field(default_factory=KdeBuilderConfig)
	appimage: AppImageConfig = Field(default_factory=AppImageConfig)

	services: list[ServiceUnit] = Field(
		default_factory=lambda: [
			ServiceUnit(name='podman.socket'),
			ServiceUnit(name='waydroid-container.service'),
			ServiceUnit(name='docker.service', now=True),
		]
	)

	skip: list[Step] = Field(default_factory=list)
	http_timeout: int = 60

	def rawhide_url(self) -> str:
		return self.rawhide_metalink.format(arch=self.arch)

	def is_skipped(self, step: Step) -> bool:
		return step in self.skip
