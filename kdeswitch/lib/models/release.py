from pydantic import BaseModel, ConfigDict


class Release(BaseModel):
	"""
	The subset of a GitHub release document that is consumed.
	"""

	model_config = ConfigDict(extra='ignore')

	tag_name: str | None = None

	@property
	def has_tag(self) -> bool:
		return bool(self.tag_name) and self.tag_name != 'null'

	@property
	def version(self) -> str:
		if not self.tag_name:
			return ''
		return self.tag_name.removeprefix('v')

	def asset_url(self, github_repo: str, asset_name: str) -> str:
		return f'https://github.com/{github_repo}/releases/download/{self.tag_name}/{asset_name}'
