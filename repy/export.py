"""
JSON export / import of a parsed Catalog.

Output format (one array of faculties):

    [
      {"name": ..., "semester": ..., "courses": [
        {"id": 14003, "name": ..., "academicPoints": 3.0,
         "lecturerInCharge": ..., "weeklyHours": {"lecture": 2},
         "testDates": [{"year": 2023, "month": 7, "day": 20}],
         "groups": [{"id": 10, "teachers": [...], "events": [...],
                     "type": "lecture", "description": ""}]}
      ]}
    ]

Hebrew is written as-is (ensure_ascii=False), UTF-8 encoded.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, List

from repy.model import Catalog, Faculty


def catalog_to_list(catalog: Catalog) -> List[dict[str, Any]]:
    return [f.to_dict() for f in catalog]


def catalog_from_list(data: Any) -> Catalog:
    """
    Rebuild a Catalog from decoded JSON. Raises ValueError on unknown
    enum values (e.g. an unknown group type) and TypeError/KeyError on
    data of the wrong shape.
    """
    if not isinstance(data, list):
        raise TypeError(f"Expected a list of faculties, got {type(data).__name__}")
    return [Faculty.from_dict(f) for f in data]


def dumps(catalog: Catalog) -> str:
    return json.dumps(catalog_to_list(catalog), ensure_ascii=False, indent=2)


def loads(text: str) -> Catalog:
    return catalog_from_list(json.loads(text))


def write_json(catalog: Catalog, out_path: str | Path) -> None:
    """
    Write the catalog to `out_path`, creating parent directories if needed.
    """
    out = Path(out_path)
    out.parent.mkdir(parents=True, exist_ok=True)
    out.write_text(dumps(catalog) + "\n", encoding="utf-8")


def load_json(path: str | Path) -> Catalog:
    return loads(Path(path).read_text(encoding="utf-8"))
