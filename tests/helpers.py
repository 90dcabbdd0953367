"""Test helpers: a scripted backend and builders for configs and replies."""

import json

from localspy.backend.base import Backend
from localspy.errors import BackendError
from localspy.reviewer.models import ReviewConfig


class ScriptedBackend(Backend):
    """In-memory backend answering from a file name -> reply table.

    A reply that is an Exception instance is raised instead of returned.
    """

    def __init__(self, replies=None, installed=("codellama:7b",), pull_error=None):
        self.replies = dict(replies or {})
        self.installed = list(installed)
        self.pull_error = pull_error
        self.pulled = []
        self.prompts = []

    def list_models(self):
        return list(self.installed)

    def has_model(self, model):
        return model in self.installed

    def pull_model(self, model):
        if self.pull_error is not None:
            raise self.pull_error
        self.pulled.append(model)
        self.installed.append(model)

    def generate(self, model, prompt, temperature, max_tokens):
        self.prompts.append(prompt)
        for name, reply in self.replies.items():
            if f"/{name}\n" in prompt:
                if isinstance(reply, Exception):
                    raise reply
                return reply
        raise BackendError("no scripted reply")


def make_config(**overrides) -> ReviewConfig:
    values = {
        "model": "codellama:7b",
        "temperature": 0.1,
        "max_tokens": 2000,
        "include_patterns": ["**/*.{ts,py}"],
        "exclude_patterns": [],
        "review_types": ["security", "performance", "bugs"],
        "output_format": "json",
        "severity": "all",
    }
    values.update(overrides)
    return ReviewConfig.model_validate(values)


def issue_json(**fields) -> dict:
    issue = {
        "type": "security",
        "severity": "high",
        "title": "SQL injection",
        "description": "User input is concatenated into a query.",
    }
    issue.update(fields)
    return issue


def reply_text(*issues, confidence=0.9) -> str:
    return json.dumps({"issues": list(issues), "confidence": confidence})
