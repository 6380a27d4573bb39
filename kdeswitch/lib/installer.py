from .appimage import install_appimage
from .desktop import install_icon, write_desktop_entry
from .dnf import Dnf
from .kde_builder import install_kde_builder
from .models.config import Step, SwitcherConfig
from .models.report import RunReport
from .output import info
from .packages import (
	discover_packages,
	install_build_dependencies,
	install_dev_tools,
	install_manifest_dependencies,
	swap_installed_packages,
)
from .repositories import select_repositories
from .systemd import Systemctl, enable_services


class StackSwitcher:
	"""
	Runs every provisioning step once, in order. Each step reports
	into ``self.report`` and a failing step never stops the ones after it.
	"""

	def __init__(
		self,
		config: SwitcherConfig,
		dnf: Dnf | None = None,
		systemctl: Systemctl | None = None,
	):
		self.config = config
		self.dnf = dnf or Dnf(config.dnf_binary, config.install_flags)
		self.systemctl = systemctl or Systemctl()
		self.report = RunReport()
		self.repo_ids: list[str] = []

	def _skipped(self, step: Step) -> bool:
		if self.config.is_skipped(step):
			info(f'Skipping {step.value} (disabled by configuration)')
			self.report.skipped(step.value, '-', 'disabled by configuration')
			return True

		return False

	def enable_repositories(self) -> list[str]:
		self.repo_ids = select_repositories(self.config, self.dnf, self.report)
		return self.repo_ids

	def swap_kde_stack(self) -> None:
		if self._skipped(Step.Swap):
			return

		for repo in self.repo_ids:
			packages = discover_packages(
				self.dnf,
				repo,
				self.config.group_keywords,
				self.config.fallback_patterns,
			)

			if not packages:
				info(f'No KDE packages found in {repo}')
				self.report.skipped(Step.Swap.value, repo, 'no KDE packages found')
				continue

			swap_installed_packages(self.dnf, repo, packages, self.report)

	def install_dependencies(self) -> None:
		if not self._skipped(Step.BuildDeps):
			install_build_dependencies(self.dnf, self.config.build_dependencies, self.repo_ids, self.report)

		if not self._skipped(Step.ManifestDeps):
			install_manifest_dependencies(
				self.dnf,
				self.config.dependency_manifest_url,
				self.repo_ids,
				self.report,
				timeout=self.config.http_timeout,
			)

	def install_tools(self) -> None:
		if not self._skipped(Step.DevTools):
			install_dev_tools(self.dnf, self.config.dev_tools, self.repo_ids, self.report)

		if not self._skipped(Step.KdeBuilder):
			install_kde_builder(self.config.kde_builder, self.report)

	def install_application(self) -> None:
		if not self._skipped(Step.AppImage):
			install_appimage(self.config.appimage, self.config.arch, self.report, timeout=self.config.http_timeout)

		if not self._skipped(Step.DesktopEntry):
			install_icon(self.config.appimage, self.report, timeout=self.config.http_timeout)
			write_desktop_entry(self.config.appimage, self.report)

	def enable_services(self) -> None:
		if not self._skipped(Step.Services):
			enable_services(self.systemctl, self.config.services, self.report)

	def run(self) -> RunReport:
		self.enable_repositories()
		self.swap_kde_stack()
		self.install_dependencies()
		self.install_tools()
		self.install_application()
		self.enable_services()

		mode = 'COPR' if self.config.use_copr else 'Rawhide'
		info(f'All done. KDE stack + tools have been processed ({mode} mode).')

		return self.report
