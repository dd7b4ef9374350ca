# Constants
SERVER_NAME = "fzf-mcp"

FZF_VERSION = "0.58.0"
FZF_RELEASE_URL = "https://github.com/junegunn/fzf/releases/download/v{version}"

DEFAULT_DIRECTORY = "."
DEFAULT_FILE_PATTERN = "*"
DEFAULT_MAX_RESULTS = 50
DEFAULT_TIMEOUT = 30.0

NO_MATCHES = "No matches found"
NO_FILES = "No files found in directory"
NO_ITEMS = "No items to filter"

# fzf --filter exit statuses
FZF_EXIT_MATCH = 0
FZF_EXIT_NO_MATCH = 1
