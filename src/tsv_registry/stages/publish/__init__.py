from .artifacts import (
    STABLE_NAME,
    TSV_CONTENT_TYPE,
    VERSION_LENGTH,
    PublishOutput,
    content_version,
    hashed_name,
    render_artifact,
    write_registry_artifacts,
)
from .stage import stage_publish
from .tsv import TSV_COLUMNS, build_tsv_body, normalize_tags, sanitize_field

__all__ = [
    "STABLE_NAME",
    "TSV_COLUMNS",
    "TSV_CONTENT_TYPE",
    "VERSION_LENGTH",
    "PublishOutput",
    "build_tsv_body",
    "content_version",
    "hashed_name",
    "normalize_tags",
    "render_artifact",
    "sanitize_field",
    "stage_publish",
    "write_registry_artifacts",
]
