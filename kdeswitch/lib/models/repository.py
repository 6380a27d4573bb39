from enum import Enum

COPR_HUB = 'copr.fedorainfracloud.org'
RAWHIDE_REPO_ID = 'fedora-rawhide'


class RepositoryMode(Enum):
	Copr = 'copr'
	Rawhide = 'rawhide'

	@classmethod
	def from_flag(cls, use_copr: bool) -> 'RepositoryMode':
		return cls.Copr if use_copr else cls.Rawhide


def copr_repo_id(copr: str, hub: str = COPR_HUB) -> str:
	"""
	Returns the dnf5 repository id of a COPR project,
	``owner/project`` becomes ``copr:<hub>:owner:project``.
	"""
	return f'copr:{hub}:' + copr.replace('/', ':')
