from ..dnf import Dnf
from ..exceptions import DownloadError, PackageError, RequirementError, SysCallError
from ..models.config import Step
from ..models.report import RunReport
from ..output import error, info
from .manifest import fetch_dependency_manifest


def install_build_dependencies(dnf: Dnf, packages: list[str], repos: list[str], report: RunReport) -> None:
	info('Installing KDE build dependencies (sourced from KDE repo when available)')

	try:
		dnf.install(packages, repos=repos)
		report.ok(Step.BuildDeps.value, ' '.join(packages))
	except (SysCallError, RequirementError) as err:
		error(f'Some KDE build dependencies failed to install: {err}')
		report.failed(Step.BuildDeps.value, ' '.join(packages), str(err))


def install_manifest_dependencies(dnf: Dnf, url: str, repos: list[str], report: RunReport, timeout: int = 60) -> None:
	info(f'Fetching KDE dependency list from {url}')

	try:
		packages = fetch_dependency_manifest(url, timeout=timeout)
	except DownloadError as err:
		error(f'Failed to fetch KDE dependencies list or list empty: {err}')
		report.skipped(Step.ManifestDeps.value, url, str(err))
		return

	info(f'Installing {len(packages)} KDE dependencies from KDE repo(s)')

	try:
		dnf.install(packages, repos=repos)
		report.ok(Step.ManifestDeps.value, url, f'{len(packages)} packages')
	except (SysCallError, RequirementError) as err:
		error(f'Some KDE dependencies failed: {err}')
		report.failed(Step.ManifestDeps.value, url, str(err))


def install_with_fallback(dnf: Dnf, packages: list[str], sources: list[list[str] | None]) -> list[str] | None:
	"""
	Tries each source in order and stops at the first successful install.
	A source of None means the default, unscoped repositories.

	Returns the source that worked, raises PackageError once every source failed.
	"""
	failures = []

	for index, source in enumerate(sources):
		try:
			dnf.install(packages, repos=source)
			return source
		except (SysCallError, RequirementError) as err:
			failures.append(f'{_describe(source)}: {err}')

		if index + 1 < len(sources):
			info(f'Attempting to install {" ".join(packages)} from {_describe(sources[index + 1])}')

	raise PackageError(f'Failed to install {" ".join(packages)}: ' + '; '.join(failures))


def _describe(source: list[str] | None) -> str:
	if source is None:
		return 'default repos'
	return ' '.join(source)


def install_dev_tools(dnf: Dnf, tools: list[str], repos: list[str], report: RunReport) -> None:
	info('Installing development tools')

	sources: list[list[str] | None] = [repos, None] if repos else [None]

	for tool in tools:
		try:
			source = install_with_fallback(dnf, [tool], sources)
			report.ok(Step.DevTools.value, tool, _describe(source))
		except PackageError as err:
			error(str(err))
			report.failed(Step.DevTools.value, tool, str(err))
