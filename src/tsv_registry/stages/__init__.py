from .parse import stage_parse
from .publish import stage_publish
from .validate import stage_validate

__all__ = [
    "stage_parse",
    "stage_validate",
    "stage_publish",
]
