"""Basic CRUD example for mini_crud EntityAccessor."""

from __future__ import annotations

import sqlite3
import sys
from pathlib import Path

# Allow running this script directly from repository root.
PROJECT_ROOT = next(
    (parent for parent in Path(__file__).resolve().parents if (parent / "mini_crud").exists()),
    None,
)
if PROJECT_ROOT and str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from mini_crud import EntityAccessor, SQLiteDialect, StatementExecutor


class User:
    # Table name is declared, never derived from the class name.
    __table__ = "users"
    __columns__ = ("email", "age")


def main() -> None:
    # 1) Create executor and accessor.
    conn = sqlite3.connect(":memory:")
    db = StatementExecutor(conn, SQLiteDialect())
    users = EntityAccessor(db, User)

    try:
        # 2) Create table (schema management is up to the application).
        db.execute(
            'CREATE TABLE "users" ("id" INTEGER PRIMARY KEY AUTOINCREMENT, '
            '"email" TEXT NOT NULL, "age" INTEGER);'
        )

        # 3) Insert rows. Unknown keys and "id" are ignored.
        alice_id = users.create({"email": "alice@example.com", "age": 25, "id": 999})
        bob_id = users.create({"email": "bob@example.com", "age": 30, "is_admin": True})
        print("Inserted ids:", alice_id, bob_id)

        # 4) Get by id, full row and projected.
        print("Fetched by id:", users.get_by_id(alice_id))
        print("Only email:", users.get_by_id(alice_id, ["email"]))

        # 5) Partial update.
        print("Updated row count:", users.update(bob_id, {"age": 31}))

        # 6) List all rows and count.
        print("All users:", users.get(sort=["id"]))
        print("Count:", users.count())

        # 7) Delete by id.
        print("Deleted row count:", users.delete(alice_id))
        print("After delete:", users.get())
    finally:
        conn.close()


if __name__ == "__main__":
    main()
