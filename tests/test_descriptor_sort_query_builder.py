from __future__ import annotations

import unittest

from mini_crud.core.descriptor import EntityDescriptor
from mini_crud.core.query_builder import (
    append_limit_offset,
    compile_assignments,
    compile_id_match,
    compile_insert_values,
    compile_order_by,
    compile_projection,
    filter_data,
    merge_params,
    missing_columns,
    resolve_sort,
    select_columns,
)
from mini_crud.core.sorting import SortSpec, parse_sort
from mini_crud.ports.db_api.dialects import MySQLDialect, PostgresDialect, SQLiteDialect


class Article:
    __table__ = "articles"
    __columns__ = ("title", "body", "views")


class EntityDescriptorTests(unittest.TestCase):
    def test_columns_are_ordered_and_deduplicated(self) -> None:
        descriptor = EntityDescriptor("t", ("b", "a", "b"))
        self.assertEqual(descriptor.columns, ("b", "a"))
        self.assertEqual(descriptor.whitelist, ("id", "b", "a"))

    def test_list_columns_are_frozen_to_tuple(self) -> None:
        descriptor = EntityDescriptor("t", ["a", "b"])  # type: ignore[arg-type]
        self.assertEqual(descriptor.columns, ("a", "b"))

    def test_invalid_declarations_raise(self) -> None:
        with self.assertRaises(ValueError):
            EntityDescriptor("", ("a",))
        with self.assertRaises(ValueError):
            EntityDescriptor("t", ("id", "a"))
        with self.assertRaises(ValueError):
            EntityDescriptor("t", ("a", ""))
        with self.assertRaises(TypeError):
            EntityDescriptor("t", "abc")  # type: ignore[arg-type]

    def test_descriptor_is_immutable(self) -> None:
        descriptor = EntityDescriptor("t", ("a",))
        with self.assertRaises(AttributeError):
            descriptor.table = "other"  # type: ignore[misc]

    def test_of_reads_declared_class_attributes(self) -> None:
        descriptor = EntityDescriptor.of(Article)
        self.assertEqual(descriptor.table, "articles")
        self.assertEqual(descriptor.columns, ("title", "body", "views"))
        self.assertEqual(EntityDescriptor.of(Article()), descriptor)
        self.assertIs(EntityDescriptor.of(descriptor), descriptor)

    def test_of_never_derives_table_from_class_name(self) -> None:
        class NoTable:
            __columns__ = ("a",)

        class NoColumns:
            __table__ = "x"

        with self.assertRaises(ValueError):
            EntityDescriptor.of(NoTable)
        with self.assertRaises(TypeError):
            EntityDescriptor.of(NoColumns)

    def test_membership_helpers(self) -> None:
        descriptor = EntityDescriptor.of(Article)
        self.assertTrue(descriptor.is_column("title"))
        self.assertFalse(descriptor.is_column("id"))
        self.assertTrue(descriptor.is_selectable("id"))
        self.assertFalse(descriptor.is_selectable("evil; DROP TABLE x"))
        self.assertFalse(descriptor.is_selectable(3))


class SortSpecTests(unittest.TestCase):
    def test_parse_defaults_and_normalizes_direction(self) -> None:
        samples = [
            ("title", SortSpec("title", False)),
            ("title:ASC", SortSpec("title", False)),
            ("title:desc", SortSpec("title", True)),
            ("title:Desc", SortSpec("title", True)),
            ("title:bogus", SortSpec("title", False)),
            ("title:", SortSpec("title", False)),
            (" title : DESC ", SortSpec("title", True)),
        ]
        for raw, expected in samples:
            with self.subTest(raw=raw):
                self.assertEqual(SortSpec.parse(raw), expected)

    def test_parse_sort_accepts_specs_strings_and_none(self) -> None:
        self.assertEqual(parse_sort(None), [])
        self.assertEqual(parse_sort("views:desc"), [SortSpec("views", True)])
        self.assertEqual(
            parse_sort(["title", SortSpec("views", desc=True)]),
            [SortSpec("title"), SortSpec("views", True)],
        )
        with self.assertRaises(TypeError):
            parse_sort([1])  # type: ignore[list-item]

    def test_direction_property(self) -> None:
        self.assertEqual(SortSpec("a").direction, "ASC")
        self.assertEqual(SortSpec("a", desc=True).direction, "DESC")


class QueryBuilderTests(unittest.TestCase):
    def setUp(self) -> None:
        self.descriptor = EntityDescriptor.of(Article)

    def test_filter_data_drops_unknown_keys_and_id(self) -> None:
        data = {"views": 3, "id": 99, "title": "t", "evil; DROP TABLE x": 1}
        self.assertEqual(filter_data(self.descriptor, data), {"title": "t", "views": 3})
        self.assertEqual(list(filter_data(self.descriptor, data)), ["title", "views"])

    def test_missing_columns(self) -> None:
        self.assertEqual(missing_columns(self.descriptor, {"title": "t"}), ["body", "views"])
        self.assertEqual(missing_columns(self.descriptor, {"title": 1, "body": None, "views": 0}), [])

    def test_select_columns_always_includes_id_first(self) -> None:
        self.assertEqual(select_columns(self.descriptor), ["id", "title", "body", "views"])
        self.assertEqual(select_columns(self.descriptor, []), ["id", "title", "body", "views"])
        self.assertEqual(select_columns(self.descriptor, ["views", "title"]), ["id", "views", "title"])
        self.assertEqual(select_columns(self.descriptor, ["title", "id", "title"]), ["id", "title"])
        self.assertEqual(select_columns(self.descriptor, "body"), ["id", "body"])

    def test_select_columns_drops_unknown_names(self) -> None:
        self.assertEqual(select_columns(self.descriptor, ["title", "password", "1=1; --"]), ["id", "title"])
        self.assertEqual(select_columns(self.descriptor, ["nope"]), ["id"])

    def test_compile_projection_quotes_per_dialect(self) -> None:
        self.assertEqual(
            compile_projection(self.descriptor, SQLiteDialect(), ["title"]), "`id`, `title`"
        )
        self.assertEqual(compile_projection(self.descriptor, MySQLDialect(), ["title"]), "`id`, `title`")

    def test_resolve_sort_drops_unknown_columns(self) -> None:
        specs = resolve_sort(self.descriptor, ["evil; DROP TABLE x:desc", "views:desc", "id"])
        self.assertEqual(specs, [SortSpec("views", True), SortSpec("id", False)])

    def test_compile_order_by(self) -> None:
        dialect = SQLiteDialect()
        self.assertEqual(compile_order_by(None, dialect), "")
        self.assertEqual(compile_order_by([], dialect), "")
        self.assertEqual(
            compile_order_by([SortSpec("views", True), SortSpec("title")], dialect),
            " ORDER BY `views` DESC, `title` ASC",
        )

    def test_append_limit_offset_named(self) -> None:
        sql, params = append_limit_offset("SELECT 1", None, limit=2, offset=1, dialect=SQLiteDialect())
        self.assertEqual(sql, "SELECT 1 LIMIT :__limit OFFSET :__offset")
        self.assertEqual(params, {"__limit": 2, "__offset": 1})

        sql, params = append_limit_offset("SELECT 1", None, limit=None, offset=None, dialect=SQLiteDialect())
        self.assertEqual(sql, "SELECT 1")
        self.assertIsNone(params)

    def test_append_limit_offset_positional(self) -> None:
        sql, params = append_limit_offset("SELECT 1", [7], limit=2, offset=4, dialect=PostgresDialect())
        self.assertEqual(sql, "SELECT 1 LIMIT %s OFFSET %s")
        self.assertEqual(params, [7, 2, 4])

    def test_append_limit_offset_rejects_mixed_param_styles(self) -> None:
        with self.assertRaises(TypeError):
            append_limit_offset("SELECT 1", [7], limit=2, offset=None, dialect=SQLiteDialect())

    def test_compile_id_match(self) -> None:
        named = compile_id_match(5, SQLiteDialect())
        self.assertEqual(named.sql, " WHERE `id` = :id")
        self.assertEqual(named.params, {"id": 5})

        positional = compile_id_match(5, MySQLDialect())
        self.assertEqual(positional.sql, " WHERE `id` = %s")
        self.assertEqual(positional.params, [5])

    def test_compile_assignments(self) -> None:
        named = compile_assignments({"title": "a", "views": 2}, SQLiteDialect())
        self.assertEqual(named.sql, "`title` = :title_1, `views` = :views_2")
        self.assertEqual(named.params, {"title_1": "a", "views_2": 2})

        positional = compile_assignments({"title": "a", "views": 2}, PostgresDialect())
        self.assertEqual(positional.sql, '"title" = %s, "views" = %s')
        self.assertEqual(positional.params, ["a", 2])

    def test_named_parameter_names_are_sanitized(self) -> None:
        fragment = compile_assignments({"first name": "a"}, SQLiteDialect())
        self.assertEqual(fragment.sql, "`first name` = :first_name_1")

    def test_compile_insert_values(self) -> None:
        named = compile_insert_values({"title": "a", "views": 2}, SQLiteDialect())
        self.assertEqual(named.sql, "(`id`, `title`, `views`) VALUES (NULL, :title_1, :views_2)")
        self.assertEqual(named.params, {"title_1": "a", "views_2": 2})

        positional = compile_insert_values({"title": "a"}, PostgresDialect())
        self.assertEqual(positional.sql, '("id", "title") VALUES (DEFAULT, %s)')
        self.assertEqual(positional.params, ["a"])

    def test_merge_params(self) -> None:
        self.assertEqual(merge_params({"a": 1}, {"b": 2}), {"a": 1, "b": 2})
        self.assertEqual(merge_params([1], [2]), [1, 2])
        self.assertEqual(merge_params(None, [2]), [2])
        self.assertEqual(merge_params({"a": 1}, None), {"a": 1})
        with self.assertRaises(TypeError):
            merge_params({"a": 1}, [2])


if __name__ == "__main__":
    unittest.main()
