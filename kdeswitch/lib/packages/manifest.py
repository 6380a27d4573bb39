import re

from ..exceptions import DownloadError
from ..networking import fetch_data_from_url

_SKIP_LINE = re.compile(r'^\s*#|^\s*$')


def parse_dependency_manifest(content: str) -> list[str]:
	"""
	Turns the distro dependency list into package names.

	The first line is a header and always dropped, after that comment
	and blank lines are ignored and every remaining token is a package.
	"""
	lines = content.splitlines()[1:]
	packages = []

	for line in lines:
		if _SKIP_LINE.match(line):
			continue

		packages.extend(line.split())

	return packages


def fetch_dependency_manifest(url: str, timeout: int = 60) -> list[str]:
	content = fetch_data_from_url(url, timeout=timeout)

	if not (packages := parse_dependency_manifest(content)):
		raise DownloadError(f'Dependency list at {url} is empty')

	return packages
