"""Switch a Fedora image's KDE/Plasma stack to COPR or Rawhide and provision developer tooling."""

import json
import os
import sys

from .lib.args import load_config_handler
from .lib.installer import StackSwitcher
from .lib.models.report import RunReport
from .lib.output import debug, error, info, log, logger, warn


def _write_report(report: RunReport, path: os.PathLike[str] | str) -> None:
	try:
		with open(path, 'w') as fh:
			json.dump(report.json(), fh, indent=4)
	except OSError as err:
		error(f'Could not write run report to {path}: {err}')
		return

	debug(f'Run report written to {path}')


def main(argv: list[str] | None = None) -> int:
	if (handler := load_config_handler(argv)) is None:
		return 1

	if os.geteuid() != 0:
		warn('kdeswitch is not running as root, most steps will fail')

	config = handler.config
	debug(f'Configuration: {config.model_dump_json()}')

	switcher = StackSwitcher(config)
	report = switcher.run()

	info('Summary')
	log(report.summary().rstrip())

	if failures := report.failures:
		warn(f'{len(failures)} step(s) failed, see {logger.path} for details')

	if handler.args.report:
		_write_report(report, handler.args.report)

	return 0


def run_as_a_module() -> None:
	sys.exit(main())
