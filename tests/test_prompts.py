from helpers import make_config

from localspy.reviewer.models import SeverityThreshold, SourceFile
from localspy.reviewer.prompts import build_prompt, severity_instruction


def test_prompt_embeds_file_and_categories(source_file):
    config = make_config(review_types=["security", "bugs"], severity="medium")
    prompt = build_prompt(source_file, config)

    assert "Analyze the following python code" in prompt
    assert "issues related to: security, bugs." in prompt
    assert f"File: {source_file.path}\n" in prompt
    assert f"```python\n{source_file.content}\n```" in prompt
    assert 'Only report issues whose "type" is one of: security, bugs.' in prompt
    assert "Only include issues with medium severity or higher" in prompt
    assert '"issues": [' in prompt
    assert '"confidence": 0.85' in prompt


def test_prompt_lists_focus_only_for_requested_categories(source_file):
    prompt = build_prompt(source_file, make_config(review_types=["style"]))
    assert "Code style and best practices" in prompt
    assert "Security vulnerabilities" not in prompt
    assert "Performance bottlenecks" not in prompt


def test_prompt_is_deterministic(source_file, config):
    assert build_prompt(source_file, config) == build_prompt(source_file, config)


def test_prompt_keeps_braces_in_content(source_file, config):
    file = source_file.model_copy(update={"content": "def f():\n    return {'a': '{b}'}\n"})
    assert "return {'a': '{b}'}" in build_prompt(file, config)


def test_empty_reply_example_is_valid_json_text(source_file, config):
    assert '{"issues": [], "confidence": 1.0}' in build_prompt(source_file, config)


def test_severity_instruction():
    assert severity_instruction(SeverityThreshold.ALL).startswith("Include issues of any severity")
    assert "high severity or higher" in severity_instruction(SeverityThreshold.HIGH)


EXPECTED_PROMPT = """You are an expert code reviewer. Analyze the following python code for issues related to: security.

File: /project/app.py
Code:
```python
x = eval(input())
```

Respond with a single JSON object and nothing else, using this structure:
{
  "issues": [
    {
      "type": "security|performance|bugs|style|maintainability|complexity",
      "severity": "low|medium|high",
      "title": "Brief issue title",
      "description": "Detailed description of the issue",
      "line": 10,
      "column": 5,
      "suggestion": "How to fix this issue",
      "code": "problematic code snippet"
    }
  ],
  "confidence": 0.85
}

Focus on:
- Security vulnerabilities (injection, XSS, unsafe deserialization, secrets in code)

Rules:
- Only report issues whose "type" is one of: security.
- Only include issues with high severity or higher (low < medium < high).
- Provide specific line numbers when possible.
- Give actionable suggestions for fixes.
- If there are no issues, return {"issues": [], "confidence": 1.0}."""


def test_prompt_exact_output():
    file = SourceFile(path="/project/app.py", content="x = eval(input())", language="python", size=17)
    config = make_config(review_types=["security"], severity="high")
    assert build_prompt(file, config) == EXPECTED_PROMPT
