from ..dnf import Dnf
from ..exceptions import RequirementError, SysCallError
from ..models.config import Step
from ..models.report import RunReport
from ..output import error, info


def swap_installed_packages(dnf: Dnf, repo: str, packages: list[str], report: RunReport) -> None:
	"""
	Reinstalls every package of ``packages`` that is already installed
	from ``repo``. Packages that are not installed are never touched.
	"""
	if not packages:
		info(f'No packages to process for repo {repo}')
		report.skipped(Step.Swap.value, repo, 'no packages')
		return

	for package in packages:
		if not package:
			continue

		if not dnf.is_installed(package):
			info(f'Skipping {package} (not installed)')
			report.skipped(Step.Swap.value, package, 'not installed')
			continue

		info(f'Swapping {package} (from {repo})')

		try:
			dnf.swap(repo, package)
			report.ok(Step.Swap.value, package, repo)
		except (SysCallError, RequirementError) as err:
			error(f'Swap failed for {package}: {err}')
			report.failed(Step.Swap.value, package, str(err))
