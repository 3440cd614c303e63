"""
This script loads CSV files exported by the resell tracker (or prepared by
hand in the same layout) into the database.

Files are matched to a collection by name:
- sales-<year>.csv
- inventory.csv
- expenses-<year>.csv

Every row is recreated through the regular creation path, so platform fees and
profit are recomputed. Rows that fail validation are skipped and logged.

Run from the project root:
    python data-migration/script.py [folder]
"""


from __future__ import annotations

import logging
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from db import SessionLocal, engine, Base  # noqa: E402
from app.services.csv_import import import_file, kind_from_filename  # noqa: E402

logger = logging.getLogger("data-migration")

EXPORTS_DIR = Path("data-migration/exports")


def import_exported_csvs_to_db(folder: Path = EXPORTS_DIR) -> int:
    folder = Path(folder)
    csv_files = sorted(f for f in folder.glob("*.csv") if kind_from_filename(f))
    if not csv_files:
        raise FileNotFoundError(f"No exported CSV files found in: {folder.resolve()}")

    Base.metadata.create_all(bind=engine)

    session = SessionLocal()
    total_inserted = 0

    try:
        for f in csv_files:
            inserted = import_file(session, f)
            total_inserted += inserted
            logger.info("Imported %d rows from %s", inserted, f.name)

        logger.info("DONE. Total inserted: %d", total_inserted)
    finally:
        session.close()

    return total_inserted


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO, format="%(asctime)s [%(name)s] %(levelname)s: %(message)s")
    target = Path(sys.argv[1]) if len(sys.argv) > 1 else EXPORTS_DIR
    import_exported_csvs_to_db(target)
