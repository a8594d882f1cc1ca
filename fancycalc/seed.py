"""
Grade table seeding.

The grade tables are imported from the grading spreadsheets. Run
`python data/build_grade_seed.py` to turn CSV exports of those sheets into
data/grade_tables.json; the app loads that file into empty tables on startup.

Seed layout:

    {
      "Pear 8 Mains": {
        "kgs":    [{"table_width": 60, "crown_angle": 30.0, "pavilion_depth": 45.2,
                    "kgs": "1", "feye": "2"}, ...],
        "bowtie": [{"crown_angle": 30.0, "halves_min": 40.0, "halves_max": 41.0,
                    "bowtie": "1"}, ...]
      },
      ...
    }
"""

import json
import logging
import os

from sqlalchemy.orm import Session

from .models import GRADE_TABLE_MODELS

logger = logging.getLogger(__name__)


def load_grade_seed(path: str) -> dict:
    """Read a seed file. Missing or unreadable file → {}."""
    try:
        with open(path) as f:
            payload = json.load(f)
    except FileNotFoundError:
        return {}
    except json.JSONDecodeError as e:
        logger.warning("Grade seed %s is not valid JSON: %s", path, e)
        return {}
    logger.info("Loaded grade seed for %d shape(s) from %s", len(payload), path)
    return payload


def _model_columns(model) -> set:
    return {c.name for c in model.__table__.columns if c.name != "id"}


def seed_grade_tables(db: Session, payload: dict) -> int:
    """
    Insert seed rows into grade tables that are still empty.

    Tables that already hold rows are left alone - edit them through the
    spreadsheet import, not by re-seeding. Returns the number of rows added.
    """
    added = 0
    for shape, tables in payload.items():
        models = GRADE_TABLE_MODELS.get(shape)
        if models is None:
            logger.warning("Grade seed names unknown shape %r - skipped", shape)
            continue
        for kind, model in zip(("kgs", "bowtie"), models):
            rows = tables.get(kind) or []
            if not rows or db.query(model).first() is not None:
                continue
            allowed = _model_columns(model)
            for row in rows:
                db.add(model(**{k: v for k, v in row.items() if k in allowed}))
            added += len(rows)
    db.commit()
    return added


def seed_from_file(db: Session, path: str) -> int:
    if not os.path.exists(path):
        logger.info("No grade seed at %s - grade tables left as they are", path)
        return 0
    return seed_grade_tables(db, load_grade_seed(path))
