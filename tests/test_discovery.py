from pathlib import Path

from kdeswitch.lib.dnf import Dnf
from kdeswitch.lib.exceptions import SysCallError
from kdeswitch.lib.packages.discovery import (
	collect_pkgs_fallback,
	discover_kde_groups,
	discover_packages,
	parse_group_list,
	parse_group_packages,
)

from .conftest import FakeDnf

KEYWORDS = ['kde', 'plasma']
PATTERNS = ['plasma6-*', 'kf6-*', 'kde*', 'kwin*', 'kio*']

GROUP_LIST = '''\
ID                   Name                       Installed
kde-desktop          KDE                               no
gnome-desktop        GNOME                             no
kde-apps             KDE Applications                  no
plasma-mobile        Plasma Mobile                     no
development-tools    Development Tools                 no
'''

GROUP_INFO_DESKTOP = '''\
Id                   : kde-desktop
Name                 : KDE
Packages:
   plasma-desktop    mandatory
   kwin              mandatory
   dolphin           default
Description          : The KDE Plasma Workspaces
'''

GROUP_INFO_APPS = '''\
Id                   : kde-apps
Packages:
   dolphin           default
   konsole           default
'''


def test_parse_group_list_matches_keywords_case_insensitive() -> None:
	assert parse_group_list(GROUP_LIST, KEYWORDS) == ['kde-desktop', 'kde-apps', 'plasma-mobile']


def test_parse_group_list_without_matches() -> None:
	assert parse_group_list('ID   Name\ngnome-desktop  GNOME\n', KEYWORDS) == []


def test_parse_group_packages_stops_at_next_section() -> None:
	assert parse_group_packages(GROUP_INFO_DESKTOP) == ['plasma-desktop', 'kwin', 'dolphin']


def test_parse_group_packages_runs_to_end_of_output() -> None:
	assert parse_group_packages(GROUP_INFO_APPS) == ['dolphin', 'konsole']


def test_parse_group_packages_without_section() -> None:
	assert parse_group_packages('Id : kde-desktop\n') == []


def test_groups_are_used_when_present(fake_dnf: FakeDnf) -> None:
	fake_dnf.group_list_output = GROUP_LIST
	fake_dnf.group_info_outputs = {
		'kde-desktop': GROUP_INFO_DESKTOP,
		'kde-apps': GROUP_INFO_APPS,
	}

	packages = discover_packages(fake_dnf, 'fedora-rawhide', KEYWORDS, PATTERNS)

	assert packages == ['dolphin', 'konsole', 'kwin', 'plasma-desktop']
	assert fake_dnf.commands('repoquery') == []


def test_fallback_query_runs_without_groups(fake_dnf: FakeDnf) -> None:
	fake_dnf.group_list_output = 'ID   Name   Installed\n'
	fake_dnf.repoquery_output = 'kwin-x11\nkio-core\nkwin-x11\n\nkf6-kio\n'

	packages = discover_packages(fake_dnf, 'fedora-rawhide', KEYWORDS, PATTERNS)

	assert packages == ['kf6-kio', 'kio-core', 'kwin-x11']

	repoquery = fake_dnf.commands('repoquery')
	assert len(repoquery) == 1
	assert repoquery[0][-5:] == PATTERNS
	assert '--repo=fedora-rawhide' in repoquery[0]


def test_failed_group_listing_means_no_groups(fake_dnf: FakeDnf) -> None:
	fake_dnf.fail_when.append(lambda cmd: cmd[1:3] == ['group', 'list'])

	assert discover_kde_groups(fake_dnf, 'fedora-rawhide', KEYWORDS) == []


def test_failed_fallback_query_is_empty(fake_dnf: FakeDnf) -> None:
	fake_dnf.fail_when.append(lambda cmd: cmd[1] == 'repoquery')

	assert collect_pkgs_fallback(fake_dnf, 'fedora-rawhide', PATTERNS) == []


def test_unreadable_group_is_skipped(fake_dnf: FakeDnf) -> None:
	fake_dnf.group_list_output = GROUP_LIST
	fake_dnf.group_info_outputs = {'kde-apps': GROUP_INFO_APPS}
	fake_dnf.fail_when.append(lambda cmd: cmd[1:3] == ['group', 'info'] and cmd[-1] == 'kde-desktop')

	assert discover_packages(fake_dnf, 'fedora-rawhide', KEYWORDS, PATTERNS) == ['dolphin', 'konsole']


def test_sys_call_error_keeps_exit_code() -> None:
	err = SysCallError('failed', 3, b'output')
	assert err.exit_code == 3
	assert err.worker_log == b'output'


DNF_STUB = '''\
#!/bin/sh
echo ' Copr repo for plasma-unstable owned by solopasha' >&2
case "$1" in
	group) printf 'ID                   Name       Installed\\ngnome-desktop        GNOME             no\\n' ;;
	repoquery) printf 'kwin-x11\\n' ;;
esac
'''


def test_stderr_does_not_reach_discovery(tmp_path: Path) -> None:
	stub = tmp_path / 'dnf5'
	stub.write_text(DNF_STUB)
	stub.chmod(0o755)

	dnf = Dnf(str(stub))

	assert discover_kde_groups(dnf, 'copr:copr.fedorainfracloud.org:solopasha:plasma-unstable', KEYWORDS) == []
	assert discover_packages(dnf, 'copr:copr.fedorainfracloud.org:solopasha:plasma-unstable', KEYWORDS, ['kwin*']) == ['kwin-x11']
