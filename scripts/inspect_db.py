import os
import sqlite3
import sys

ROOT = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
if ROOT not in sys.path:
    sys.path.insert(0, ROOT)

from core.config import DB_PATH  # noqa: E402

TABLES = ("patients", "appointments", "treatments", "settings")


def main():
    print("DB:", DB_PATH, "exists:", os.path.exists(DB_PATH))
    if not os.path.exists(DB_PATH):
        return
    con = sqlite3.connect(DB_PATH)
    try:
        cur = con.cursor()
        for table in TABLES:
            cur.execute(f"PRAGMA table_info('{table}')")
            cols = [r[1] for r in cur.fetchall()]
            if not cols:
                print(f"{table}: missing")
                continue
            cur.execute(f"SELECT COUNT(*) FROM {table}")
            print(f"{table}: {cur.fetchone()[0]} rows, cols={cols}")
        cur.execute(
            "SELECT a.id, a.date, a.time, a.status, p.full_name FROM appointments a "
            "LEFT JOIN patients p ON a.patient_id = p.id ORDER BY a.date, a.time LIMIT 10"
        )
        for r in cur.fetchall():
            print(r)
    finally:
        con.close()


if __name__ == "__main__":
    main()
