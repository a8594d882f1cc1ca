#!/usr/bin/env python3
"""
Build data/grade_tables.json from CSV exports of the grading spreadsheets.

Usage:
    python data/build_grade_seed.py

Expects one CSV per lookup table in data/raw/, named after the table:
  - pear_8_mains_kgs.csv     - columns: table_width, crown_angle, pavilion_depth, kgs, feye
  - pear_8_mains_bowtie.csv  - columns: crown_angle, halves_min, halves_max, bowtie
  - ... same for pear_4_mains, oval_8_mains, oval_4_mains, marq_8_mains, marq_4_mains

Key columns must be numeric; rows where they aren't are skipped. Grade
cells are kept as text (blank / "n/a" cells are normal in the sheets).

Output:
  - data/grade_tables.json - loaded into empty grade tables on app startup
"""

import csv
import json
import sys
from pathlib import Path

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

KGS_KEYS = ("table_width", "crown_angle", "pavilion_depth")
KGS_GRADES = ("kgs", "feye")
BOWTIE_KEYS = ("crown_angle", "halves_min", "halves_max")
BOWTIE_GRADES = ("bowtie",)


def _float(text):
    try:
        return float(str(text).strip())
    except (TypeError, ValueError):
        return None


def load_table_csv(path: Path, key_columns: tuple, grade_columns: tuple) -> list:
    """Read one sheet export. Returns rows with float keys and text grades."""
    rows = []
    skipped = 0
    with open(path, newline="", encoding="utf-8-sig") as f:
        for record in csv.DictReader(f):
            # Header cells in the sheet exports are sometimes padded
            record = {(k or "").strip().lower(): v for k, v in record.items()}
            keys = {col: _float(record.get(col)) for col in key_columns}
            if any(v is None for v in keys.values()):
                skipped += 1
                continue
            row = dict(keys)
            for col in grade_columns:
                cell = (record.get(col) or "").strip()
                row[col] = cell or None
            rows.append(row)
    if skipped:
        print(f"  {path.name}: skipped {skipped} row(s) with non-numeric keys")
    return rows


def build_seed(raw_dir: Path) -> dict:
    """Collect every sheet export found in raw_dir into the seed layout."""
    from fancycalc.models import GRADE_TABLE_MODELS

    seed = {}
    for shape, (kgs_model, bowtie_model) in GRADE_TABLE_MODELS.items():
        tables = {}
        kgs_file = raw_dir / f"{kgs_model.__tablename__}.csv"
        if kgs_file.exists():
            tables["kgs"] = load_table_csv(kgs_file, KGS_KEYS, KGS_GRADES)
            print(f"  {shape}: {len(tables['kgs'])} KGS rows")
        bowtie_file = raw_dir / f"{bowtie_model.__tablename__}.csv"
        if bowtie_file.exists():
            tables["bowtie"] = load_table_csv(bowtie_file, BOWTIE_KEYS, BOWTIE_GRADES)
            print(f"  {shape}: {len(tables['bowtie'])} Bowtie rows")
        if tables:
            seed[shape] = tables
    return seed


def main():
    raw_dir = Path(__file__).parent / "raw"
    output_path = Path(__file__).parent / "grade_tables.json"
    print(f"Loading grade sheets from {raw_dir}...\n")

    if not raw_dir.exists():
        print(f"Directory {raw_dir} does not exist - nothing to load")
        return

    seed = build_seed(raw_dir)
    if not seed:
        print("\nNo grade sheets found.")
        return

    with open(output_path, "w") as f:
        json.dump(seed, f, indent=2)
    print(f"\nWrote grade tables for {len(seed)} shape(s) to {output_path}")


if __name__ == "__main__":
    main()
