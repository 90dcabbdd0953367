"""I/O configuration: output formats, file patterns and size limits."""

from typing import Literal

# Output format type
OutputFormat = Literal["json", "markdown", "console"]

# Used when the configuration lists no include patterns at all
DEFAULT_INCLUDE_PATTERNS: list[str] = [
    "**/*.{js,ts,jsx,tsx,py,java,cpp,c,go,rs,php}",
]

# Always excluded, in addition to the configured exclude patterns
BUILTIN_EXCLUDE_PATTERNS: list[str] = [
    "**/node_modules/**",
    "**/dist/**",
    "**/build/**",
    "**/.git/**",
    "**/coverage/**",
]

# Files above this size are assumed to be generated and are not reviewed
MAX_FILE_SIZE = 100 * 1024

# Candidate configuration files, in lookup order
CONFIG_FILE_NAMES: list[str] = [
    "localspy.yaml",
    "localspy.yml",
    "ai-review.json",
]
