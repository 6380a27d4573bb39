class RequirementError(Exception):
	pass


class SysCallError(Exception):
	def __init__(self, message: str, exit_code: int | None = None, worker_log: bytes = b'') -> None:
		super().__init__(message)
		self.message = message
		self.exit_code = exit_code
		self.worker_log = worker_log


class PackageError(Exception):
	pass


class ServiceException(Exception):
	pass


class DownloadError(Exception):
	"""
	Raised when a remote resource could not be fetched or was empty.
	"""


class ConfigurationError(Exception):
	pass
