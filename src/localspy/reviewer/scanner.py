"""File selection: resolve include/exclude globs into reviewable files."""

import logging
from pathlib import Path

from wcmatch import glob

from localspy.config_io import BUILTIN_EXCLUDE_PATTERNS, DEFAULT_INCLUDE_PATTERNS, MAX_FILE_SIZE
from localspy.reviewer.models import Diagnostic, ReviewConfig, ScanResult, SourceFile

logger = logging.getLogger(__name__)

# ** crosses directories and {a,b} expands
GLOB_FLAGS = glob.GLOBSTAR | glob.BRACE
# Relative paths are matched with forward slashes on every platform
MATCH_FLAGS = GLOB_FLAGS | glob.FORCEUNIX

# Language detection based on file extension
EXTENSION_TO_LANGUAGE = {
    ".js": "javascript",
    ".jsx": "javascript",
    ".mjs": "javascript",
    ".cjs": "javascript",
    ".ts": "typescript",
    ".tsx": "typescript",
    ".py": "python",
    ".java": "java",
    ".cpp": "cpp",
    ".cc": "cpp",
    ".hpp": "cpp",
    ".c": "c",
    ".h": "c",
    ".go": "go",
    ".rs": "rust",
    ".php": "php",
    ".rb": "ruby",
    ".cs": "csharp",
    ".swift": "swift",
    ".kt": "kotlin",
    ".scala": "scala",
    ".sh": "shell",
    ".sql": "sql",
}


def detect_language(path: str | Path) -> str:
    """Get the language tag for a file, ``text`` when the extension is unknown."""
    return EXTENSION_TO_LANGUAGE.get(Path(path).suffix.lower(), "text")


class FileSelector:
    """Selects the files of a project that should be reviewed.

    Include patterns are unioned in order; exclude patterns (the configured
    ones plus the built-in vendor/build directories) always win.
    """

    def __init__(self, config: ReviewConfig, max_file_size: int = MAX_FILE_SIZE) -> None:
        """Initialize the file selector.

        Args:
            config: Review configuration holding the glob patterns
            max_file_size: Files larger than this many bytes are skipped
        """
        self.include_patterns = list(config.include_patterns) or list(DEFAULT_INCLUDE_PATTERNS)
        self.exclude_patterns = list(config.exclude_patterns) + BUILTIN_EXCLUDE_PATTERNS
        self.max_file_size = max_file_size

    def is_excluded(self, rel_path: str) -> bool:
        """Check whether a root-relative path matches any exclude pattern."""
        return glob.globmatch(rel_path, self.exclude_patterns, flags=MATCH_FLAGS)

    def match(self, root: Path) -> list[str]:
        """Get the root-relative paths selected by the glob patterns.

        Paths keep the order of the include pattern that first matched them;
        matches of one pattern are sorted.
        """
        selected: dict[str, None] = {}
        for pattern in self.include_patterns:
            # exclude prunes matching directories during the walk
            matches = glob.glob(
                pattern,
                flags=GLOB_FLAGS | glob.NODIR,
                root_dir=str(root),
                exclude=self.exclude_patterns,
            )
            for rel_path in sorted(matches):
                if rel_path in selected or self.is_excluded(rel_path):
                    continue
                selected[rel_path] = None
        return list(selected)

    def _load(self, path: Path) -> SourceFile | None:
        """Read a file, or return None when it is too large to review.

        Raises:
            OSError: If the file cannot be read
            UnicodeDecodeError: If the file is not valid UTF-8 text
        """
        size = path.stat().st_size
        if size > self.max_file_size:
            logger.debug(f"Skipping {path}: {size} bytes exceeds {self.max_file_size}")
            return None

        return SourceFile(
            path=str(path),
            content=path.read_text(encoding="utf-8"),
            language=detect_language(path),
            size=size,
        )

    def scan(self, root: str | Path) -> ScanResult:
        """Find and read the reviewable files under a root directory.

        Args:
            root: Project directory

        Returns:
            ScanResult with the files in discovery order and a diagnostic for
            every file that could not be read

        Raises:
            ValueError: If root does not exist or is not a directory
        """
        root = Path(root).resolve()
        if not root.exists():
            raise ValueError(f"Root directory does not exist: {root}")
        if not root.is_dir():
            raise ValueError(f"Root is not a directory: {root}")

        files: list[SourceFile] = []
        diagnostics: list[Diagnostic] = []
        for rel_path in self.match(root):
            path = root / rel_path
            try:
                source = self._load(path)
            except (OSError, UnicodeDecodeError) as e:
                logger.warning(f"Failed to read {path}: {e}")
                diagnostics.append(Diagnostic(path=str(path), stage="scan", message=str(e)))
                continue
            if source is not None:
                files.append(source)

        logger.info(f"Found {len(files)} files to review")
        return ScanResult(files=files, diagnostics=diagnostics)
