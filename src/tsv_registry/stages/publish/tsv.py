from __future__ import annotations

from typing import Iterable

from tsv_registry.stages.validate.types import REQUIRED_COLUMNS, RegistryRow

TSV_COLUMNS: tuple[str, ...] = REQUIRED_COLUMNS

_UNSAFE = str.maketrans({"\t": " ", "\r": " ", "\n": " "})


def sanitize_field(value: object) -> str:
    """
    Replace tab, CR and LF with a space so a field never breaks the record.
    """
    return str(value if value is not None else "").translate(_UNSAFE)


def normalize_tags(raw: str) -> str:
    return ",".join(t.strip() for t in str(raw or "").split(",") if t.strip())


def tsv_line(row: RegistryRow) -> str:
    fields = (
        row.slug.strip(),
        row.title.strip(),
        row.url.strip(),
        normalize_tags(row.tags),
    )
    return "\t".join(sanitize_field(f) for f in fields)


def build_tsv_body(rows: Iterable[RegistryRow]) -> str:
    lines = ["\t".join(TSV_COLUMNS)]
    lines.extend(tsv_line(r) for r in rows)
    return "\n".join(lines) + "\n"
