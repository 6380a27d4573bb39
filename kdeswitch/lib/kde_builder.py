import shutil
import tempfile
from pathlib import Path

from .exceptions import RequirementError, SysCallError
from .general import SysCommand
from .models.config import KdeBuilderConfig, Step, Symlink
from .models.report import RunReport
from .output import error, info, warn


def clone_repository(url: str, destination: Path) -> None:
	SysCommand(['git', 'clone', url, str(destination)])


def _force_symlink(target: Path, link: Path) -> None:
	link.parent.mkdir(parents=True, exist_ok=True)

	if link.is_symlink() or link.exists():
		link.unlink()

	link.symlink_to(target)


def _create_links(install_dir: Path, links: list[Symlink], report: RunReport) -> None:
	for entry in links:
		target = install_dir / entry.source

		if not target.exists():
			warn(f'{entry.source} is not part of kde-builder, not linking {entry.link}')
			report.skipped(Step.KdeBuilder.value, str(entry.link), f'missing {target}')
			continue

		try:
			_force_symlink(target, entry.link)
			report.ok(Step.KdeBuilder.value, str(entry.link), str(target))
		except OSError as err:
			error(f'Failed to link {entry.link}: {err}')
			report.failed(Step.KdeBuilder.value, str(entry.link), str(err))


def install_kde_builder(config: KdeBuilderConfig, report: RunReport) -> None:
	"""
	Clones kde-builder, copies it into place and links the
	executable and shell completions. The clone lives in a
	temporary directory that is removed on every path.
	"""
	info('Installing kde-builder...')

	with tempfile.TemporaryDirectory(prefix='kde-builder-') as tmpdir:
		checkout = Path(tmpdir) / 'kde-builder'

		try:
			clone_repository(config.url, checkout)
		except (SysCallError, RequirementError) as err:
			error(f'Failed to clone kde-builder: {err}')
			report.failed(Step.KdeBuilder.value, config.url, str(err))
			return

		try:
			config.install_dir.mkdir(parents=True, exist_ok=True)
			shutil.copytree(
				checkout,
				config.install_dir,
				symlinks=True,
				dirs_exist_ok=True,
				ignore=shutil.ignore_patterns('.git'),
			)
		except OSError as err:
			error(f'Failed to copy kde-builder into {config.install_dir}: {err}')
			report.failed(Step.KdeBuilder.value, str(config.install_dir), str(err))
			return

		report.ok(Step.KdeBuilder.value, str(config.install_dir), config.url)

	_create_links(config.install_dir, config.links, report)
