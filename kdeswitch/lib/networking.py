import json
import shutil
from pathlib import Path
from typing import Any
from urllib.error import URLError
from urllib.request import Request, urlopen

from .exceptions import DownloadError
from .output import debug

USER_AGENT = 'kdeswitch'


def _request(url: str, accept: str | None = None) -> Request:
	headers = {'User-Agent': USER_AGENT}

	if accept:
		headers['Accept'] = accept

	return Request(url, headers=headers)


def fetch_data_from_url(url: str, timeout: int = 60) -> str:
	try:
		with urlopen(_request(url), timeout=timeout) as response:
			data = response.read().decode('UTF-8')
	except URLError as e:
		raise DownloadError(f'Unable to fetch data from url: {url}\n{e}')
	except (OSError, UnicodeDecodeError) as e:
		raise DownloadError(f'Unexpected error when reading response from {url}: {e}')

	debug(f'Fetched {len(data)} characters from {url}')
	return data


def fetch_json(url: str, timeout: int = 60) -> Any:
	try:
		with urlopen(_request(url, accept='application/json'), timeout=timeout) as response:
			return json.loads(response.read().decode('UTF-8'))
	except URLError as e:
		raise DownloadError(f'Unable to fetch data from url: {url}\n{e}')
	except (OSError, ValueError) as e:
		raise DownloadError(f'Unexpected error when parsing response from {url}: {e}')


def download_file(url: str, destination: Path, timeout: int = 60) -> Path:
	"""
	Streams ``url`` into ``destination``, redirects are followed.
	"""
	try:
		with urlopen(_request(url), timeout=timeout) as response, destination.open('wb') as fh:
			shutil.copyfileobj(response, fh)
	except URLError as e:
		raise DownloadError(f'Unable to download {url}\n{e}')
	except OSError as e:
		raise DownloadError(f'Unable to write {url} to {destination}: {e}')

	debug(f'Downloaded {url} to {destination}')
	return destination
