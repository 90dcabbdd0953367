"""JSON reporter: the full review result, machine readable."""

import json

from localspy.reviewer.models import ReviewResult
from localspy.reviewer.reporters.base import BaseReporter


class JsonReporter(BaseReporter):
    """Reporter that serializes the complete review result as JSON."""

    def render(self, result: ReviewResult) -> str:
        return json.dumps(result.to_json_dict(), indent=2)

    def report(self, result: ReviewResult) -> None:
        self.console.print_json(self.render(result))
