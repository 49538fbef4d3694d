"""
Example 01: Fluent Mappings

This example demonstrates defining ClassMap mappings, collecting them in a
mappings container and building a Configuration, exporting the generated
mapping markup along the way.
"""

import io
import sqlite3
import tempfile
from dataclasses import dataclass
from pathlib import Path

from rowmap import ClassMap, fluently


@dataclass
class Author:
    """Author entity"""
    id: int
    name: str


@dataclass
class Book:
    """Book entity"""
    id: int
    title: str
    pages: int


class AuthorMap(ClassMap):
    entity = Author

    def __init__(self):
        super().__init__()
        self.table("authors").id("id").map("name", nullable=False)
        self.has_many("books", Book, "author_id")


class BookMap(ClassMap):
    entity = Book

    def __init__(self):
        super().__init__()
        self.table("books").id("id").auto_fields()


def main():
    export_dir = Path(tempfile.mkdtemp())
    export_path = export_dir / "mappings.xml"
    stream = io.StringIO()

    cfg = (
        fluently()
        .mappings(
            lambda m: m.fluent_mappings
            .add(AuthorMap)
            .add(BookMap)
            .export_to(export_path)
            .export_to(stream)
        )
        .build_configuration()
    )

    print("=== Exported mapping markup ===")
    print(stream.getvalue())
    print(f"Also written to {export_path}")

    print("\n=== Schema ===")
    conn = sqlite3.connect(":memory:")
    conn.row_factory = sqlite3.Row
    for statement in cfg.generate_schema_script():
        print(statement + ";")
        conn.execute(statement)

    conn.execute("INSERT INTO authors (id, name) VALUES (1, 'Ursula')")
    conn.execute("INSERT INTO books (id, title, pages, author_id) VALUES (1, 'The Dispossessed', 387, 1)")

    print("\n=== Mapped rows ===")
    rows = [dict(r) for r in conn.execute("SELECT * FROM books")]
    for book in cfg.mapper_for(Book).map_many(rows):
        print(f"  {book}")
    conn.close()


if __name__ == "__main__":
    main()
