from collections.abc import Iterable

from ..exceptions import RequirementError, SysCallError
from ..general import SysCommand
from ..output import debug


class Dnf:
	def __init__(self, binary: str = 'dnf5', install_flags: list[str] | None = None):
		self.binary = binary
		self.install_flags = install_flags if install_flags is not None else ['-y', '--skip-broken', '--skip-unavailable', '--allowerasing']

	def _execute(self, cmd: list[str]) -> str:
		"""
		The single place commands leave the process,
		returns the decoded output or raises SysCallError.
		"""
		return SysCommand(cmd).decode()

	def run(self, *args: str) -> str:
		return self._execute([self.binary, *args])

	def enable_copr(self, copr: str) -> None:
		self.run('-y', 'copr', 'enable', copr)

	def add_repo(self, url: str) -> None:
		self.run('-y', 'config-manager', '--add-repo', url)

	def set_priority(self, repo_id: str, priority: int) -> None:
		self.run('-y', 'config-manager', 'setopt', f'{repo_id}.priority={priority}')

	def group_list(self, repo: str) -> str:
		return self.run('group', 'list', f'--repo={repo}', '--verbose')

	def group_info(self, repo: str, group: str) -> str:
		return self.run('group', 'info', f'--repo={repo}', group)

	def repoquery(self, repo: str, patterns: Iterable[str]) -> str:
		return self.run('repoquery', f'--repo={repo}', '--qf', '%{name}\n', *patterns)

	def install(self, packages: Iterable[str], repos: list[str] | None = None) -> str:
		"""
		Installs packages, scoped to ``repos`` when given,
		otherwise from whatever the default configuration enables.
		"""
		args = ['install', *self.install_flags]

		if repos:
			args.append('--repo=' + ','.join(repos))

		return self.run(*args, *packages)

	def swap(self, repo: str, package: str) -> str:
		# same name on both sides, this reinstalls the package from the prioritized repo
		return self.run('swap', '-y', '--allowerasing', f'--repo={repo}', package, package)

	def is_installed(self, package: str) -> bool:
		try:
			self._execute(['rpm', '-q', package])
		except (SysCallError, RequirementError):
			debug(f'{package} is not installed')
			return False

		return True


__all__ = [
	'Dnf',
]
