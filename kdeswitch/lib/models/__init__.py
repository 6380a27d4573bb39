from .config import AppImageConfig, KdeBuilderConfig, ServiceUnit, Step, SwitcherConfig, Symlink
from .release import Release
from .report import RunReport, StepResult, StepStatus
from .repository import RAWHIDE_REPO_ID, RepositoryMode, copr_repo_id

__all__ = [
	'RAWHIDE_REPO_ID',
	'AppImageConfig',
	'KdeBuilderConfig',
	'Release',
	'RepositoryMode',
	'RunReport',
	'ServiceUnit',
	'Step',
	'StepResult',
	'StepStatus',
	'SwitcherConfig',
	'Symlink',
	'copr_repo_id',
]
