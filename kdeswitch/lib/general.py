from __future__ import annotations

import os
import stat
import subprocess
import time
from pathlib import Path
from shutil import which
from typing_extensions import override

from .exceptions import RequirementError, SysCallError
from .output import debug, logger


def locate_binary(name: str) -> str:
	if path := which(name):
		return path
	raise RequirementError(f'Binary {name} does not exist.')


def summarize_output(output: str, max_lines: int = 5) -> str:
	"""
	Condenses command output for an error message.
	Metadata refresh chatter from dnf is dropped and only the first
	max_lines remaining lines are kept.
	"""
	lines = [line for line in output.splitlines() if line.strip() and not line.startswith('Last metadata')]
	return '\n'.join(lines[:max_lines])


class SysCommand:
	"""
	Runs a command to completion. stdout is the parsed output, stderr is
	only kept for error reporting.
	A non-zero exit code raises SysCallError, a missing binary raises RequirementError.
	"""

	def __init__(
		self,
		cmd: list[str],
		environment_vars: dict[str, str] | None = None,
		working_directory: str | Path | None = None,
	):
		self.cmd = list(cmd)
		self.working_directory = working_directory

		# define the standard locale for command outputs, parsing relies on it
		self.environment_vars = {'LC_ALL': 'C'}
		if environment_vars:
			self.environment_vars.update(environment_vars)

		self._trace_log = b''
		self._error_log = b''
		self._exit_code: int | None = None

		self.execute()

	@override
	def __repr__(self) -> str:
		return self.decode()

	def execute(self) -> None:
		if not self.cmd[0].startswith(('/', './')):
			self.cmd[0] = locate_binary(self.cmd[0])

		_log_cmd(self.cmd)

		env = {**os.environ, **self.environment_vars}

		result = subprocess.run(
			self.cmd,
			stdout=subprocess.PIPE,
			stderr=subprocess.PIPE,
			env=env,
			cwd=self.working_directory,
		)

		self._trace_log = result.stdout
		self._error_log = result.stderr
		self._exit_code = result.returncode

		if self._exit_code != 0:
			debug(f'{self.cmd} exited with {self._exit_code}')

			raise SysCallError(
				f'{self.cmd} exited with abnormal exit code [{self._exit_code}]: {summarize_output(self._failure_output())}',
				self._exit_code,
				worker_log=self._error_log + self._trace_log,
			)

	def _failure_output(self) -> str:
		return (self._error_log or self._trace_log).decode('utf-8', errors='backslashreplace')

	def decode(self, encoding: str = 'utf-8', errors: str = 'backslashreplace', strip: bool = True) -> str:
		val = self._trace_log.decode(encoding, errors=errors)

		if strip:
			return val.strip()
		return val

	@property
	def exit_code(self) -> int | None:
		return self._exit_code

	@property
	def trace_log(self) -> bytes:
		return self._trace_log

	@property
	def error_log(self) -> bytes:
		return self._error_log


def _log_cmd(cmd: list[str]) -> None:
	history_logfile = logger.directory / 'cmd_history.txt'

	change_perm = False
	if history_logfile.exists() is False:
		change_perm = True

	try:
		with history_logfile.open('a') as cmd_log:
			cmd_log.write(f'{time.time()} {cmd}\n')

		if change_perm:
			history_logfile.chmod(stat.S_IRUSR | stat.S_IWUSR | stat.S_IRGRP)
	except (PermissionError, FileNotFoundError):
		# If history_logfile does not exist, ignore the error
		pass
