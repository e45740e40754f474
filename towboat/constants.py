"""Global constants for towboat"""

import re

APP_NAME = "towboat"
APP_DESCRIPTION = "A stow-like tool for cross-platform dotfiles with build tags"

# Package manifest
MANIFEST_FILE_NAME = "boat.toml"

# Deployment cache
CACHE_FILE_NAME = ".towboat_cache.json"
CACHE_ENV_VAR = "TOWBOAT_CACHE"

# Build tags
DEFAULT_BUILD_TAG = "default"
DEFAULT_TARGET_DIR = "~"
DEFAULT_STOW_DIR = "."

# Tag names allowed inside block markers; a tag may itself contain hyphens
TAG_NAME_PATTERN = r"[^{}\s]+"
# Comment token preceding a marker: "#", "//", "--", ";", '"', "<!--", ...
COMMENT_TOKEN_PATTERN = r"[^\w\s{}]+"

BLOCK_START_RE = re.compile(
    rf"^[ \t]*{COMMENT_TOKEN_PATTERN}[ \t]*\{{(?P<tag>{TAG_NAME_PATTERN})-[ \t]*$"
)
BLOCK_END_RE = re.compile(
    rf"^[ \t]*{COMMENT_TOKEN_PATTERN}[ \t]*-(?P<tag>{TAG_NAME_PATTERN})\}}[ \t]*$"
)

# Hashing
HASH_ALGORITHM = "sha256"
HASH_CHUNK_SIZE = 8192

# Logging
LOG_FORMAT = "%(message)s"


class ErrorCode:
    CONFIGURATION_ERROR = "TB001"
    MISSING_SOURCE = "TB002"
    TARGET_EXISTS = "TB003"
    MANUAL_MODIFICATION = "TB004"
    IO_ERROR = "TB005"
    PATH_ERROR = "TB006"


# Display constants
EMOJI_SUCCESS = "✓"
EMOJI_ERROR = "✗"
EMOJI_WARNING = "⚠"
EMOJI_ARROW = "→"
EMOJI_LINK = "🔗"

# Message templates
MSG_SYMLINKED = f"{EMOJI_LINK} Created symlink: {{target}} {EMOJI_ARROW} {{source}}"
MSG_MATERIALIZED = f"{EMOJI_SUCCESS} Created processed file: {{target}}"
MSG_DRIFT_OVERWRITTEN = " (manual modifications overwritten)"
MSG_ALREADY_CORRECT = f"{EMOJI_SUCCESS} Already deployed: {{target}}"
MSG_ADOPTED = f"{EMOJI_SUCCESS} Adopted {{target}} into {{source}}"
MSG_REMOVED = f"{EMOJI_SUCCESS} Removed: {{target}}"
MSG_WOULD_SYMLINK = "Would create symlink: {source} -> {target}"
MSG_WOULD_MATERIALIZE = "Would create processed file: {source} -> {target}"
MSG_WOULD_ADOPT = "Would adopt: {target} -> {source}"
MSG_WOULD_REMOVE = "Would remove: {target}"
MSG_WOULD_CREATE_DIR = "Would create directory: {path}"

HINT_FORCE_OR_ADOPT = (
    "Use --force to overwrite the target, or --adopt to pull the existing "
    "file back into the package"
)
HINT_MANUAL_MODIFICATION = (
    "The deployed file was edited after deployment. Use --force to overwrite "
    "your edits, or --adopt to copy them back into the package"
)
