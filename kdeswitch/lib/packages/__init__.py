from .discovery import collect_pkgs_fallback, collect_pkgs_from_groups, discover_kde_groups, discover_packages
from .install import install_build_dependencies, install_dev_tools, install_manifest_dependencies, install_with_fallback
from .manifest import fetch_dependency_manifest, parse_dependency_manifest
from .swap import swap_installed_packages

__all__ = [
	'collect_pkgs_fallback',
	'collect_pkgs_from_groups',
	'discover_kde_groups',
	'discover_packages',
	'fetch_dependency_manifest',
	'install_build_dependencies',
	'install_dev_tools',
	'install_manifest_dependencies',
	'install_with_fallback',
	'parse_dependency_manifest',
	'swap_installed_packages',
]
