import logging
import os
import sys
from dataclasses import asdict, is_dataclass
from datetime import UTC, datetime
from enum import Enum
from pathlib import Path
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
	from _typeshed import DataclassInstance


class FormattedOutput:
	@classmethod
	def _get_values(cls, o: 'DataclassInstance') -> dict[str, Any]:
		if hasattr(o, 'table_data'):
			return o.table_data()
		elif is_dataclass(o):
			return asdict(o)
		else:
			return o.__dict__  # type: ignore[unreachable]

	@classmethod
	def as_table(cls, obj: list[Any]) -> str:
		"""
		Renders a list of records as a plain text table, one record per line.
		"""
		raw_data = [cls._get_values(o) for o in obj]

		column_width: dict[str, int] = {}
		for o in raw_data:
			for k, v in o.items():
				column_width.setdefault(k, 0)
				column_width[k] = max([column_width[k], len(str(v)), len(k)])

		columns = list(column_width.keys())

		output = ''
		key_list = []
		for key in columns:
			width = column_width[key]
			key_list.append(key.replace('_', ' ').ljust(width))

		output += ' | '.join(key_list) + '\n'
		output += '-' * len(output) + '\n'

		for record in raw_data:
			obj_data = []
			for key in columns:
				width = column_width[key]
				value = record.get(key, '')

				if isinstance(value, int | float):
					obj_data.append(str(value).rjust(width))
				else:
					obj_data.append(str(value).ljust(width))

			output += ' | '.join(obj_data) + '\n'

		return output


class Journald:
	@staticmethod
	def log(message: str, level: int = logging.DEBUG) -> None:
		try:
			import systemd.journal  # type: ignore[import-not-found]
		except ModuleNotFoundError:
			return None

		log_adapter = logging.getLogger('kdeswitch')

		# one journal handler per process, log() runs for every message
		if not any(isinstance(h, systemd.journal.JournalHandler) for h in log_adapter.handlers):
			log_fmt = logging.Formatter('[%(levelname)s]: %(message)s')
			log_ch = systemd.journal.JournalHandler()
			log_ch.setFormatter(log_fmt)
			log_adapter.addHandler(log_ch)
			log_adapter.setLevel(logging.DEBUG)

		log_adapter.log(level, message)


class Logger:
	def __init__(self, path: Path = Path('/var/log/kdeswitch')) -> None:
		self._path = path
		self.verbose = False

	@property
	def path(self) -> Path:
		return self._path / 'kdeswitch.log'

	@property
	def directory(self) -> Path:
		return self._path

	def set_directory(self, path: Path) -> None:
		self._path = path

	def _check_permissions(self) -> None:
		log_file = self.path

		try:
			self._path.mkdir(exist_ok=True, parents=True)
			log_file.touch(exist_ok=True)

			with log_file.open('a') as f:
				f.write('')
		except PermissionError:
			# Fallback to creating the log file in the current folder
			self._path = Path('./').absolute()

			warn(f'Not enough permission to place log file at {log_file}, creating it in {self.path} instead')

	def log(self, level: int, content: str) -> None:
		self._check_permissions()

		with self.path.open('a') as f:
			ts = _timestamp()
			level_name = logging.getLevelName(level)
			f.write(f'[{ts}] - {level_name} - {content}\n')


logger = Logger()


def _supports_color() -> bool:
	"""
	Return True if the running system's terminal supports color,
	and False otherwise.

	Re-used from:
		https://github.com/django/django/blob/master/django/core/management/color.py#L12
	"""
	supported_platform = sys.platform != 'win32' or 'ANSICON' in os.environ

	# isatty is not always implemented, #6223.
	is_a_tty = hasattr(sys.stdout, 'isatty') and sys.stdout.isatty()
	return supported_platform and is_a_tty


class Font(Enum):
	bold = '1'
	italic = '3'
	underscore = '4'
	blink = '5'
	reverse = '7'
	conceal = '8'


def _stylize_output(
	text: str,
	fg: str,
	bg: str | None,
	reset: bool,
	font: tuple[Font, ...] = (),
) -> str:
	"""
	Heavily influenced by:
		https://github.com/django/django/blob/ae8338daf34fd746771e0678081999b656177bae/django/utils/termcolors.py#L13

	Adds styling to a text given a set of color arguments.
	"""
	colors = {
		'black': '0',
		'red': '1',
		'green': '2',
		'yellow': '3',
		'blue': '4',
		'magenta': '5',
		'cyan': '6',
		'white': '7',
		'gray': '8;5;246',
		'grey': '8;5;246',
	}

	foreground = {key: f'3{colors[key]}' for key in colors}
	background = {key: f'4{colors[key]}' for key in colors}
	code_list = []

	if text == '' and reset:
		return '\x1b[0m'

	code_list.append(foreground[str(fg)])

	if bg:
		code_list.append(background[str(bg)])

	for o in font:
		code_list.append(o.value)

	ansi = ';'.join(code_list)

	return f'\033[{ansi}m{text}\033[0m'


def _timestamp() -> str:
	now = datetime.now(tz=UTC)
	return now.strftime('%Y-%m-%d %H:%M:%S')


def info(
	*msgs: str,
	level: int = logging.INFO,
	fg: str = 'blue',
	bg: str | None = None,
	reset: bool = False,
	font: tuple[Font, ...] = (Font.bold,),
) -> None:
	log(*msgs, level=level, fg=fg, bg=bg, reset=reset, font=font)


def debug(
	*msgs: str,
	level: int = logging.DEBUG,
	fg: str = 'white',
	bg: str | None = None,
	reset: bool = False,
	font: tuple[Font, ...] = (),
) -> None:
	log(*msgs, level=level, fg=fg, bg=bg, reset=reset, font=font)


def error(
	*msgs: str,
	level: int = logging.ERROR,
	fg: str = 'red',
	bg: str | None = None,
	reset: bool = False,
	font: tuple[Font, ...] = (Font.bold,),
) -> None:
	log(*msgs, level=level, fg=fg, bg=bg, reset=reset, font=font)


def warn(
	*msgs: str,
	level: int = logging.WARNING,
	fg: str = 'yellow',
	bg: str | None = None,
	reset: bool = False,
	font: tuple[Font, ...] = (),
) -> None:
	log(*msgs, level=level, fg=fg, bg=bg, reset=reset, font=font)


def log(
	*msgs: str,
	level: int = logging.INFO,
	fg: str = 'white',
	bg: str | None = None,
	reset: bool = False,
	font: tuple[Font, ...] = (),
) -> None:
	text = ' '.join([str(x) for x in msgs])

	logger.log(level, text)

	if _supports_color():
		text = _stylize_output(text, fg, bg, reset, font)

	Journald.log(text, level=level)

	if level == logging.DEBUG and not logger.verbose:
		return

	stream = sys.stderr if level >= logging.ERROR else sys.stdout
	stream.write(text + '\n')
	stream.flush()
