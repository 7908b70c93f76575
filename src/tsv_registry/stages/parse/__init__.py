from .markdown import MarkdownTable, parse_markdown_table, read_registry_markdown
from .stage import stage_parse

__all__ = [
    "MarkdownTable",
    "parse_markdown_table",
    "read_registry_markdown",
    "stage_parse",
]
