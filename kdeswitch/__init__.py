"""Switch a Fedora image's KDE/Plasma stack to COPR or Rawhide and provision developer tooling."""

from .lib.installer import StackSwitcher
from .lib.models import RunReport, StepResult, StepStatus, SwitcherConfig
from .main import main, run_as_a_module

__all__ = [
	'RunReport',
	'StackSwitcher',
	'StepResult',
	'StepStatus',
	'SwitcherConfig',
	'main',
	'run_as_a_module',
]
