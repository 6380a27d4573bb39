from .exceptions import RequirementError, ServiceException, SysCallError
from .general import SysCommand
from .models.config import ServiceUnit, Step
from .models.report import RunReport
from .output import error, info


class Systemctl:
	def _execute(self, cmd: list[str]) -> str:
		return SysCommand(cmd, environment_vars={'SYSTEMD_COLORS': '0'}).decode()

	def enable(self, unit: str, now: bool = False) -> None:
		args = ['systemctl', 'enable']

		if now:
			args.append('--now')

		try:
			self._execute([*args, unit])
		except (SysCallError, RequirementError) as err:
			raise ServiceException(f'Unable to enable service {unit}: {err}')


def enable_services(systemctl: Systemctl, services: list[ServiceUnit], report: RunReport) -> None:
	for service in services:
		if service.now:
			info(f'Enabling and starting {service.name}...')
		else:
			info(f'Enabling {service.name}...')

		try:
			systemctl.enable(service.name, now=service.now)
			report.ok(Step.Services.value, service.name, 'enabled and started' if service.now else 'enabled')
		except ServiceException as err:
			error(str(err))
			report.failed(Step.Services.value, service.name, str(err))
