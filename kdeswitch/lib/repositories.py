from .dnf import Dnf
from .exceptions import RequirementError, SysCallError
from .models.config import Step, SwitcherConfig
from .models.report import RunReport
from .models.repository import RepositoryMode, copr_repo_id
from .output import error, info, warn


def _prioritize(dnf: Dnf, repo_id: str, priority: int) -> None:
	# lower number wins, the KDE repos must outrank the stock Fedora ones for the swaps
	info(f'Setting priority={priority} for {repo_id}')

	try:
		dnf.set_priority(repo_id, priority)
	except (SysCallError, RequirementError) as err:
		warn(f'Could not set priority for {repo_id}: {err}')


def _enable_coprs(config: SwitcherConfig, dnf: Dnf, report: RunReport) -> list[str]:
	repo_ids = []

	for copr in config.coprs:
		info(f'Enabling COPR: {copr}')

		try:
			dnf.enable_copr(copr)
			report.ok(Step.Repositories.value, copr)
		except (SysCallError, RequirementError) as err:
			error(f'Failed to enable COPR: {copr}: {err}')
			report.failed(Step.Repositories.value, copr, str(err))

		repo_id = copr_repo_id(copr)
		repo_ids.append(repo_id)
		_prioritize(dnf, repo_id, config.repo_priority)

	return repo_ids


def _enable_rawhide(config: SwitcherConfig, dnf: Dnf, report: RunReport) -> list[str]:
	url = config.rawhide_url()
	info('Adding Rawhide mirrorlist repo')

	try:
		dnf.add_repo(url)
		report.ok(Step.Repositories.value, config.rawhide_repo_id, url)
	except (SysCallError, RequirementError) as err:
		error(f'Failed to add Rawhide repo: {err}')
		report.failed(Step.Repositories.value, config.rawhide_repo_id, str(err))

	_prioritize(dnf, config.rawhide_repo_id, config.repo_priority)

	return [config.rawhide_repo_id]


def select_repositories(config: SwitcherConfig, dnf: Dnf, report: RunReport) -> list[str]:
	"""
	Enables the KDE package source(s) for the configured mode and
	returns the repository ids every later KDE operation is scoped to.
	Enabling failures are reported but the ids are returned regardless.
	"""
	mode = RepositoryMode.from_flag(config.use_copr)

	if mode == RepositoryMode.Copr:
		info('Mode: COPR KDE stack')
		repo_ids = _enable_coprs(config, dnf, report)
	else:
		info('Mode: Rawhide KDE stack (only KDE groups, build deps, dev tools)')
		repo_ids = _enable_rawhide(config, dnf, report)

	info(f'KDE repo ids: {" ".join(repo_ids)}')
	return repo_ids
