"""Prompt construction for file reviews."""

from localspy.reviewer.models import FindingCategory, ReviewConfig, SeverityThreshold, SourceFile

# What the model should look for, per category
CATEGORY_FOCUS = {
    FindingCategory.SECURITY: "Security vulnerabilities (injection, XSS, unsafe deserialization, secrets in code)",
    FindingCategory.PERFORMANCE: "Performance bottlenecks (needless work in loops, blocking calls, excessive allocations)",
    FindingCategory.BUGS: "Potential bugs and logic errors (off-by-one, unhandled errors, wrong conditions)",
    FindingCategory.STYLE: "Code style and best practices",
    FindingCategory.MAINTAINABILITY: "Maintainability issues (duplication, unclear naming, tight coupling)",
    FindingCategory.COMPLEXITY: "Complexity problems (deep nesting, long functions, convoluted control flow)",
}

RESPONSE_SCHEMA = """{
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
}"""

REVIEW_PROMPT = """You are an expert code reviewer. Analyze the following {language} code for issues related to: {categories}.

File: {path}
Code:
```{language}
{content}
```

Respond with a single JSON object and nothing else, using this structure:
{schema}

Focus on:
{focus}

Rules:
- Only report issues whose "type" is one of: {categories}.
- {severity_rule}
- Provide specific line numbers when possible.
- Give actionable suggestions for fixes.
- If there are no issues, return {{"issues": [], "confidence": 1.0}}."""


def severity_instruction(threshold: SeverityThreshold) -> str:
    """Describe the severity restriction for the prompt."""
    if threshold is SeverityThreshold.ALL:
        return "Include issues of any severity (low, medium or high)."
    return f"Only include issues with {threshold.value} severity or higher (low < medium < high)."


def build_prompt(file: SourceFile, config: ReviewConfig) -> str:
    """Render the review prompt for one file.

    Pure function of its arguments: the same file and configuration always
    produce the same prompt.
    """
    categories = ", ".join(category.value for category in config.review_types)
    focus = "\n".join(f"- {CATEGORY_FOCUS[category]}" for category in config.review_types)
    return REVIEW_PROMPT.format(
        language=file.language,
        categories=categories,
        path=file.path,
        content=file.content,
        schema=RESPONSE_SCHEMA,
        focus=focus,
        severity_rule=severity_instruction(config.severity),
    )
