"""Sorting, projection, and pagination with EntityAccessor.get()."""

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

from mini_crud import ArgumentError, EntityAccessor, EntityDescriptor, SortSpec, StatementExecutor


def main() -> None:
    conn = sqlite3.connect(":memory:")
    # Dialect is inferred from the sqlite3 connection.
    db = StatementExecutor(conn)
    books = EntityAccessor(db, EntityDescriptor("books", ("title", "year")))

    try:
        db.execute(
            'CREATE TABLE "books" ("id" INTEGER PRIMARY KEY AUTOINCREMENT, '
            '"title" TEXT NOT NULL, "year" INTEGER);'
        )
        for title, year in [("Dune", 1965), ("Emma", 1815), ("Ubik", 1969), ("Solaris", 1961)]:
            books.create({"title": title, "year": year})

        # Direction tokens are case-insensitive; unknown ones mean ASC.
        print("Newest first:", books.get(columns=["title"], sort=["year:desc"]))
        print("Bogus direction:", books.get(columns=["title"], sort=["year:sideways"]))

        # SortSpec works too, and unknown sort/projection columns are dropped.
        print(
            "Mixed:",
            books.get(columns=["title", "price"], sort=[SortSpec("title", desc=True), "nope"]),
        )

        # Pages need a sort; offset needs a count.
        print("Page 2:", books.get(sort=["id"], count=2, offset=2))
        try:
            books.get(count=2)
        except ArgumentError as exc:
            print("Rejected:", exc)
    finally:
        conn.close()


if __name__ == "__main__":
    main()
