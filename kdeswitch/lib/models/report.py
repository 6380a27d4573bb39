from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from ..output import FormattedOutput


class StepStatus(Enum):
	Ok = 'ok'
	Failed = 'failed'
	Skipped = 'skipped'


@dataclass
class StepResult:
	step: str
	target: str
	status: StepStatus
	detail: str = ''

	def table_data(self) -> dict[str, str]:
		return {
			'step': self.step,
			'target': self.target,
			'status': self.status.value,
			'detail': self.detail.splitlines()[0] if self.detail else '',
		}

	def json(self) -> dict[str, Any]:
		return {
			'step': self.step,
			'target': self.target,
			'status': self.status.value,
			'detail': self.detail,
		}


@dataclass
class RunReport:
	results: list[StepResult] = field(default_factory=list)

	def add(self, step: str, target: str, status: StepStatus, detail: str = '') -> StepResult:
		result = StepResult(step, target, status, detail)
		self.results.append(result)
		return result

	def ok(self, step: str, target: str, detail: str = '') -> StepResult:
		return self.add(step, target, StepStatus.Ok, detail)

	def failed(self, step: str, target: str, detail: str = '') -> StepResult:
		return self.add(step, target, StepStatus.Failed, detail)

	def skipped(self, step: str, target: str, detail: str = '') -> StepResult:
		return self.add(step, target, StepStatus.Skipped, detail)

	def for_step(self, step: str) -> list[StepResult]:
		return [r for r in self.results if r.step == step]

	@property
	def failures(self) -> list[StepResult]:
		return [r for r in self.results if r.status == StepStatus.Failed]

	def summary(self) -> str:
		if not self.results:
			return 'No steps were run'

		return FormattedOutput.as_table(self.results)

	def json(self) -> dict[str, Any]:
		return {
			'results': [r.json() for r in self.results],
			'failed': len(self.failures),
		}
