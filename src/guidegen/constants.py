"""Constants for guidegen."""

SOURCE_SUFFIX = ".kt"

# Sources in these formats must be converted before they can be published
UNSUPPORTED_SUFFIXES = frozenset({".md"})

DOC_PAGE_SUFFIX = ".markdown"

EXAMPLES_NAMESPACE = "examples"

# Appended to a file's base name by the Kotlin compiler for top-level functions
ENTRY_POINT_SUFFIX = "Kt"

INDEX_PADDING = 3

SECTION_INDEX_NAMES = frozenset({"index", "home"})

# Jekyll parent value for top-level section pages
ROOT_PARENT = "~"

URL_DIRECTIVE = "URL"
TITLE_DIRECTIVE = "Title"
PARENT_DIRECTIVE = "ParentTitle"
ORDER_DIRECTIVE = "Order"

DEFAULT_INCLUDE_PATTERNS = ["*.kt", "*.md"]

DEFAULT_IGNORE_PATTERNS = [
    "build",
    ".gradle",
    ".idea",
    ".git",
]
