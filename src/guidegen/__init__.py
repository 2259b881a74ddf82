"""Documentation pages and runnable examples from annotated Kotlin guides."""

__version__ = "2025.4.1"

from .errors import (
    GuidegenError,
    MissingDirectiveError,
    SourceStructureError,
    UnsupportedFormatError,
)
from .model import Generated, GenerationReport, ParseResult, Skipped, SourceUnit
from .pipeline import (
    GenerateConfig,
    generate_all,
    get_examples_class_names,
    process_file,
    process_sources,
)

__all__ = [
    "__version__",
    # Pipeline
    "GenerateConfig",
    "generate_all",
    "get_examples_class_names",
    "process_file",
    "process_sources",
    # Model
    "Generated",
    "GenerationReport",
    "ParseResult",
    "Skipped",
    "SourceUnit",
    # Errors
    "GuidegenError",
    "MissingDirectiveError",
    "SourceStructureError",
    "UnsupportedFormatError",
]
