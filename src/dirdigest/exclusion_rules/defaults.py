"""Built-in default exclusions.

These tables are consulted identically by every run and are never mutated. Directory
and file names are matched as basename patterns at any depth; extensions are compared
case-insensitively and only suppress content, not the path.
"""

from typing import Tuple

from .pattern import GlobPattern

DEFAULT_IGNORED_DIRS: Tuple[str, ...] = (
    ".git/",
    ".github/",
    ".vscode/",
    ".idea/",
    "venv/",
    ".env/",
    "node_modules/",
    ".next/",
    "out/",
    "__pycache__/",
    "target/",
    "pkg/",
    "build/",
    "dist/",
    "coverage/",
)

DEFAULT_IGNORED_FILES: Tuple[str, ...] = (
    # Lock files
    "pnpm-lock.yaml",
    "package-lock.json",
    "yarn.lock",
    "Cargo.lock",
    # Tooling metadata
    ".tsbuildinfo",
    ".DS_Store",
    "components.json",
    "biome.json",
    "next-env.d.ts",
    ".gitignore",
    ".prettierrc.json",
    "LICENSE",
    ".nvmrc",
    ".npmrc",
    ".eslintrc.json",
    ".prettierignore",
    "vercel.json",
)

CONTENT_EXCLUDED_EXTENSIONS = frozenset(
    {
        # Images
        ".png",
        ".jpg",
        ".jpeg",
        ".gif",
        ".bmp",
        ".ico",
        ".webp",
        ".svg",
        # Fonts
        ".woff",
        ".woff2",
        ".ttf",
        ".eot",
        ".otf",
        # Archives
        ".zip",
        ".gz",
        ".tar",
        ".rar",
        ".7z",
        ".pack",
        # Binaries and documents
        ".wasm",
        ".dll",
        ".exe",
        ".so",
        ".a",
        ".lib",
        ".bin",
        ".o",
        ".pdf",
    }
)

DEFAULT_IGNORE_FILE_NAMES: Tuple[str, ...] = (".gitignore", ".ignore")

HIDDEN_PATTERN = ".*"

DEFAULT_PATTERNS: Tuple[GlobPattern, ...] = tuple(
    GlobPattern.compile(pattern) for pattern in DEFAULT_IGNORED_DIRS + DEFAULT_IGNORED_FILES
)


def has_content_excluded_extension(relative_path: str) -> bool:
    """Check whether a file's extension marks its content as never embeddable.

    Example:
        >>> has_content_excluded_extension("assets/Logo.PNG")
        True
        >>> has_content_excluded_extension("src/main.py")
        False
    """
    name = relative_path.rsplit("/", 1)[-1]
    dot = name.rfind(".")
    if dot <= 0:
        return False
    return name[dot:].lower() in CONTENT_EXCLUDED_EXTENSIONS
