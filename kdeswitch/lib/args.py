import argparse
import http.client
import json
import os
import urllib.parse
from argparse import ArgumentParser
from importlib.metadata import PackageNotFoundError, version
from pathlib import Path
from typing import Any
from urllib.request import Request, urlopen

from pydantic import ValidationError
from pydantic.dataclasses import dataclass as p_dataclass

from .exceptions import ConfigurationError
from .models.config import Step, SwitcherConfig
from .output import error, logger

ENV_USE_COPR = 'KDESWITCH_USE_COPR'


@p_dataclass
class Arguments:
	config: Path | None = None
	config_url: str | None = None
	use_copr: bool = False
	arch: str | None = None
	skip: list[str] | None = None
	report: Path | None = None
	log_dir: Path = Path('/var/log/kdeswitch')
	debug: bool = False


class ConfigHandler:
	def __init__(self, argv: list[str] | None = None) -> None:
		self._parser: ArgumentParser = self._define_arguments()
		self._args: Arguments = self._parse_args(argv)

		logger.set_directory(self._args.log_dir)
		logger.verbose = self._args.debug

		self._config = self._build_config(self._parse_config())

	@property
	def config(self) -> SwitcherConfig:
		return self._config

	@property
	def args(self) -> Arguments:
		return self._args

	@staticmethod
	def _get_version() -> str:
		try:
			return version('kdeswitch')
		except PackageNotFoundError:
			return 'kdeswitch version not found'

	def _define_arguments(self) -> ArgumentParser:
		parser = ArgumentParser(
			prog='kdeswitch',
			description='Switch the KDE/Plasma stack between COPR and Rawhide and provision developer tooling',
			formatter_class=argparse.ArgumentDefaultsHelpFormatter,
		)
		parser.add_argument(
			'-v',
			'--version',
			action='version',
			version='%(prog)s ' + self._get_version(),
		)
		parser.add_argument(
			'--config',
			type=Path,
			nargs='?',
			default=None,
			help='JSON configuration file',
		)
		parser.add_argument(
			'--config-url',
			type=str,
			nargs='?',
			default=None,
			help='Url to a JSON configuration file',
		)
		parser.add_argument(
			'--use-copr',
			action='store_true',
			default=False,
			help=f'Source the KDE stack from COPR instead of Rawhide (also enabled by {ENV_USE_COPR}=1)',
		)
		parser.add_argument(
			'--arch',
			type=str,
			default=None,
			help='Override the detected machine architecture',
		)
		parser.add_argument(
			'--skip',
			action='append',
			default=None,
			help='Step to leave out, can be given multiple times (' + ', '.join(step.value for step in Step.skippable()) + ')',
		)
		parser.add_argument(
			'--report',
			type=Path,
			default=None,
			help='Write the run report as JSON to this file',
		)
		parser.add_argument(
			'--log-dir',
			type=Path,
			default=Path('/var/log/kdeswitch'),
			help='Directory for kdeswitch.log and the command history',
		)
		parser.add_argument(
			'--debug',
			action='store_true',
			default=False,
			help='Print debug messages to the terminal',
		)

		return parser

	def _parse_args(self, argv: list[str] | None) -> Arguments:
		argparse_args = vars(self._parser.parse_args(argv))
		args: Arguments = Arguments(**argparse_args)

		if not args.use_copr and os.environ.get(ENV_USE_COPR, '0') == '1':
			args.use_copr = True

		return args

	def _parse_config(self) -> dict[str, Any]:
		config_data: str | None = None

		if self._args.config is not None:
			config_data = self._read_file(self._args.config)
		elif self._args.config_url is not None:
			config_data = self._fetch_from_url(self._args.config_url)

		if config_data is None:
			return {}

		try:
			config = json.loads(config_data)
		except json.JSONDecodeError as err:
			raise ConfigurationError(f'Configuration is not valid JSON: {err}')

		if not isinstance(config, dict):
			raise ConfigurationError('Configuration must be a JSON object')

		return self._cleanup_config(config)

	def _build_config(self, config: dict[str, Any]) -> SwitcherConfig:
		# command line wins over the configuration file
		if self._args.use_copr:
			config['use_copr'] = True

		if self._args.arch:
			config['arch'] = self._args.arch

		if self._args.skip:
			config['skip'] = list(dict.fromkeys([*config.get('skip', []), *self._args.skip]))

		try:
			switcher_config = SwitcherConfig.model_validate(config)
		except ValidationError as err:
			raise ConfigurationError(f'Invalid configuration: {err}')

		if Step.Repositories in switcher_config.skip:
			raise ConfigurationError('The repositories step can not be skipped')

		return switcher_config

	def _fetch_from_url(self, url: str) -> str:
		try:
			if not urllib.parse.urlparse(url).scheme:
				raise ConfigurationError(f'Not a valid url: {url}')

			req = Request(url, headers={'User-Agent': 'kdeswitch'})
			with urlopen(req) as resp:
				return resp.read().decode('utf-8')
		except (OSError, http.client.HTTPException, ValueError) as err:
			raise ConfigurationError(f'Could not fetch JSON from {url}: {err}')

	def _read_file(self, path: Path) -> str:
		if not path.exists():
			raise ConfigurationError(f'Could not find file {path}')

		try:
			return path.read_text()
		except (OSError, UnicodeDecodeError) as err:
			raise ConfigurationError(f'Could not read configuration file {path}: {err}')

	def _cleanup_config(self, config: dict[str, Any]) -> dict[str, Any]:
		clean_args = {}
		for key, val in config.items():
			if isinstance(val, dict):
				val = self._cleanup_config(val)

			if val is not None:
				clean_args[key] = val

		return clean_args


def load_config_handler(argv: list[str] | None = None) -> ConfigHandler | None:
	try:
		return ConfigHandler(argv)
	except (ConfigurationError, PermissionError) as err:
		error(str(err))

	return None
