import re
from collections.abc import Iterable

from ..dnf import Dnf
from ..exceptions import RequirementError, SysCallError
from ..output import debug, info


def parse_group_list(output: str, keywords: Iterable[str]) -> list[str]:
	"""
	Picks the group ids out of ``dnf group list --verbose`` output
	whose line mentions any of the keywords (case-insensitive).
	"""
	pattern = re.compile('|'.join(re.escape(k) for k in keywords), re.IGNORECASE)
	groups = []

	for line in output.splitlines():
		if not pattern.search(line):
			continue

		if fields := line.split():
			groups.append(fields[0])

	return groups


def parse_group_packages(output: str) -> list[str]:
	"""
	Returns the first column of every indented line following a
	``Packages:`` header, up to the next unindented line.
	"""
	packages = []
	in_section = False

	for line in output.splitlines():
		if in_section:
			if line and not line[0].isspace():
				in_section = False
			elif fields := line.split():
				packages.append(fields[0])
				continue

		if 'Packages:' in line:
			in_section = True

	return packages


def _unique_sorted(names: Iterable[str]) -> list[str]:
	return sorted({name.strip() for name in names if name.strip()})


def discover_kde_groups(dnf: Dnf, repo: str, keywords: Iterable[str]) -> list[str]:
	info(f'Discovering KDE groups in repo: {repo}')

	try:
		output = dnf.group_list(repo)
	except (SysCallError, RequirementError) as err:
		debug(f'Group listing failed for {repo}: {err}')
		return []

	return parse_group_list(output, keywords)


def collect_pkgs_from_groups(dnf: Dnf, repo: str, groups: Iterable[str]) -> list[str]:
	packages: list[str] = []

	for group in groups:
		info(f'Collecting packages from group: {group}')

		try:
			packages += parse_group_packages(dnf.group_info(repo, group))
		except (SysCallError, RequirementError) as err:
			debug(f'Could not read group {group} from {repo}: {err}')

	return _unique_sorted(packages)


def collect_pkgs_fallback(dnf: Dnf, repo: str, patterns: Iterable[str]) -> list[str]:
	try:
		output = dnf.repoquery(repo, patterns)
	except (SysCallError, RequirementError) as err:
		debug(f'Pattern query failed for {repo}: {err}')
		return []

	return _unique_sorted(output.splitlines())


def discover_packages(
	dnf: Dnf,
	repo: str,
	keywords: Iterable[str],
	patterns: Iterable[str],
) -> list[str]:
	"""
	Package names the repository offers for the KDE stack,
	taken from its comps groups when there are any and from
	a name pattern query otherwise. Always deduplicated and sorted.
	"""
	if groups := discover_kde_groups(dnf, repo, keywords):
		return collect_pkgs_from_groups(dnf, repo, groups)

	info(f'No KDE groups found in repo {repo}, using fallback pattern scan')
	return collect_pkgs_fallback(dnf, repo, patterns)
