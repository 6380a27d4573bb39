from pathlib import Path

from .exceptions import DownloadError
from .models.config import AppImageConfig, Step
from .models.report import RunReport
from .networking import download_file
from .output import error, info


def render_desktop_entry(config: AppImageConfig) -> str:
	return '\n'.join([
		'[Desktop Entry]',
		f'Name={config.name}',
		f'Exec={config.install_path} %U',
		'Terminal=false',
		'Type=Application',
		f'Icon={config.name}',
		f'StartupWMClass={config.name}',
		f'Comment={config.comment}',
		f'Categories={config.categories}',
	]) + '\n'


def _placeholder(path: Path) -> None:
	path.parent.mkdir(parents=True, exist_ok=True)
	path.write_bytes(b'')
	path.chmod(0o644)


def install_icon(config: AppImageConfig, report: RunReport, timeout: int = 60) -> None:
	"""
	Leaves an empty icon in place even when the download fails,
	so the desktop entry never points at a missing file.
	"""
	info(f'Installing {config.name} icon...')

	try:
		_placeholder(config.icon_path)
	except OSError as err:
		error(f'Failed to create {config.icon_path}: {err}')
		report.failed(Step.DesktopEntry.value, str(config.icon_path), str(err))
		return

	try:
		download_file(config.icon_url, config.icon_path, timeout=timeout)
		report.ok(Step.DesktopEntry.value, str(config.icon_path))
	except DownloadError as err:
		error(f'Failed to download icon: {err}')
		report.failed(Step.DesktopEntry.value, str(config.icon_path), str(err))


def write_desktop_entry(config: AppImageConfig, report: RunReport) -> None:
	info('Creating desktop entry...')

	try:
		config.desktop_file.parent.mkdir(parents=True, exist_ok=True)
		config.desktop_file.write_text(render_desktop_entry(config))
		report.ok(Step.DesktopEntry.value, str(config.desktop_file))
	except OSError as err:
		error(f'Failed to write {config.desktop_file}: {err}')
		report.failed(Step.DesktopEntry.value, str(config.desktop_file), str(err))
