from __future__ import annotations

import sqlite3
import unittest

from mini_sproc import CallError, CallerConfig, CallResult, CallStatusError, OutputParams, Row


class _OutCall:
    def __init__(self, values: dict[int, object]):
        self.values = values
        self.reads: list[int] = []

    def get_out(self, position: int) -> object:
        self.reads.append(position)
        return self.values[position]


class RowTests(unittest.TestCase):
    def test_tuple_row_with_column_names(self) -> None:
        row = Row((1, "alice"), ["id", "name"])
        self.assertEqual(row[0], 1)
        self.assertEqual(row["name"], "alice")
        self.assertEqual(row.keys(), ["id", "name"])
        self.assertEqual(row.as_dict(), {"id": 1, "name": "alice"})
        self.assertEqual(len(row), 2)
        self.assertEqual(list(row), [1, "alice"])

    def test_mapping_row(self) -> None:
        row = Row({"id": 7, "name": "bob"})
        self.assertEqual(row[1], "bob")
        self.assertEqual(row["id"], 7)

    def test_sqlite_row_factory_is_supported(self) -> None:
        conn = sqlite3.connect(":memory:")
        conn.row_factory = sqlite3.Row
        try:
            raw = conn.execute("SELECT 3 AS id, 'c' AS name").fetchone()
            row = Row(raw)
            self.assertEqual(row["name"], "c")
            self.assertEqual(row[0], 3)
        finally:
            conn.close()

    def test_missing_keys(self) -> None:
        row = Row((1,), ["id"])
        with self.assertRaises(KeyError):
            row["missing"]
        with self.assertRaises(IndexError):
            row[3]
        self.assertIsNone(row.get("missing"))
        self.assertEqual(row.get(5, "d"), "d")

    def test_row_without_names_cannot_map_to_dict(self) -> None:
        with self.assertRaises(TypeError):
            Row((1, 2)).as_dict()

    def test_mismatched_names_raise(self) -> None:
        with self.assertRaises(ValueError):
            Row((1, 2), ["only"])


class OutputParamsTests(unittest.TestCase):
    def test_index_maps_to_declared_positions(self) -> None:
        call = _OutCall({3: "a", 4: 10})
        out = OutputParams(call, [3, 4])

        self.assertEqual(len(out), 2)
        self.assertEqual(out[0], "a")
        self.assertEqual(out[-1], 10)
        self.assertEqual(out.as_list(), ["a", 10])
        self.assertEqual(call.reads, [3, 4, 3, 4])

    def test_get_out_of_range(self) -> None:
        out = OutputParams(_OutCall({1: "a"}), [1])
        self.assertEqual(out.get(0), "a")
        self.assertIsNone(out.get(4, None))
        with self.assertRaises(IndexError):
            out.get(4)
        with self.assertRaises(IndexError):
            out[1]


class CallResultTests(unittest.TestCase):
    def test_unpacks_as_pair(self) -> None:
        items, output = CallResult([1, 2], "out")
        self.assertEqual(items, [1, 2])
        self.assertEqual(output, "out")

    def test_defaults_are_absent(self) -> None:
        result: CallResult[int, str] = CallResult()
        self.assertIsNone(result.items)
        self.assertIsNone(result.output)


class CallerConfigTests(unittest.TestCase):
    def test_defaults(self) -> None:
        config = CallerConfig()
        self.assertTrue(config.use_status_fields)
        self.assertEqual(config.success_code, 0)
        self.assertTrue(config.commit)

    def test_is_immutable(self) -> None:
        config = CallerConfig()
        with self.assertRaises(AttributeError):
            config.success_code = 1  # type: ignore[misc]
        changed = config.replace(success_code=1)
        self.assertEqual(changed.success_code, 1)
        self.assertEqual(config.success_code, 0)

    def test_success_code_must_be_int(self) -> None:
        with self.assertRaises(TypeError):
            CallerConfig(success_code="0")  # type: ignore[arg-type]
        with self.assertRaises(TypeError):
            CallerConfig(success_code=True)

    def test_from_env(self) -> None:
        config = CallerConfig.from_env(
            {
                "MINI_SPROC_USE_STATUS_FIELDS": "off",
                "MINI_SPROC_SUCCESS_CODE": " 1 ",
                "MINI_SPROC_COMMIT": "No",
                "UNRELATED": "x",
            }
        )
        self.assertEqual(config, CallerConfig(use_status_fields=False, success_code=1, commit=False))

    def test_from_env_defaults_and_prefix(self) -> None:
        self.assertEqual(CallerConfig.from_env({}), CallerConfig())
        config = CallerConfig.from_env({"APP_SUCCESS_CODE": "5"}, prefix="APP_")
        self.assertEqual(config.success_code, 5)

    def test_from_env_invalid_values(self) -> None:
        with self.assertRaisesRegex(ValueError, "MINI_SPROC_USE_STATUS_FIELDS"):
            CallerConfig.from_env({"MINI_SPROC_USE_STATUS_FIELDS": "maybe"})
        with self.assertRaisesRegex(ValueError, "MINI_SPROC_SUCCESS_CODE"):
            CallerConfig.from_env({"MINI_SPROC_SUCCESS_CODE": "zero"})


class CallErrorTests(unittest.TestCase):
    def test_driver_error_shape(self) -> None:
        err = CallError("boom", statement="{call p()}")
        self.assertEqual(str(err), "boom")
        self.assertIsNone(err.code)
        self.assertFalse(err.is_status_error)
        self.assertEqual(err.statement, "{call p()}")

    def test_status_error_is_call_error(self) -> None:
        partial = CallResult([1], None)
        err = CallStatusError(1, "duplicate key", result=partial)
        self.assertIsInstance(err, CallError)
        self.assertTrue(err.is_status_error)
        self.assertEqual(err.code, 1)
        self.assertEqual(err.message, "duplicate key")
        self.assertIs(err.result, partial)
        self.assertEqual(str(err), "[1] duplicate key")


if __name__ == "__main__":
    unittest.main()
