import shutil
import tempfile
from pathlib import Path

from pydantic import ValidationError

from .exceptions import DownloadError
from .models.config import AppImageConfig, Step
from .models.release import Release
from .models.report import RunReport
from .networking import download_file, fetch_json
from .output import debug, error, info

GITHUB_API = 'https://api.github.com'


def latest_release(github_repo: str, timeout: int = 60) -> Release | None:
	"""
	Looks up the latest release of ``owner/project`` on GitHub.
	Returns None when the lookup fails or the release carries no tag.
	"""
	url = f'{GITHUB_API}/repos/{github_repo}/releases/latest'

	try:
		release = Release.model_validate(fetch_json(url, timeout=timeout))
	except DownloadError as err:
		debug(f'Release lookup for {github_repo} failed: {err}')
		return None
	except ValidationError as err:
		debug(f'Unexpected release document from {url}: {err}')
		return None

	if not release.has_tag:
		return None

	return release


def _install_binary(source: Path, destination: Path) -> None:
	destination.parent.mkdir(parents=True, exist_ok=True)
	shutil.move(str(source), str(destination))
	destination.chmod(0o755)


def install_appimage(config: AppImageConfig, arch: str, report: RunReport, timeout: int = 60) -> None:
	info(f'Installing latest {config.name}...')

	if (release := latest_release(config.github_repo, timeout=timeout)) is None:
		info(f'Could not determine latest {config.name} release (skipping)')
		report.skipped(Step.AppImage.value, config.github_repo, 'no release tag')
		return

	asset = config.asset_name(release.version, arch)
	url = release.asset_url(config.github_repo, asset)

	with tempfile.TemporaryDirectory(prefix=f'{config.name}-') as tmpdir:
		downloaded = Path(tmpdir) / asset
		info(f'Downloading {url}')

		try:
			download_file(url, downloaded, timeout=timeout)
		except DownloadError as err:
			error(f'Failed to download {config.name} AppImage: {err}')
			report.failed(Step.AppImage.value, url, str(err))
			return

		info(f'Installing {config.name} {release.version}')

		try:
			_install_binary(downloaded, config.install_path)
		except OSError as err:
			error(f'Failed to install {config.name}: {err}')
			report.failed(Step.AppImage.value, str(config.install_path), str(err))
			return

	report.ok(Step.AppImage.value, str(config.install_path), release.version)
