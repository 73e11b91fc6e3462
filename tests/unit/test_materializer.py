from executor.materializer import materialize, sorted_items, to_text


class FakeCursor:
    def __init__(self, columns, rows):
        self.description = [(name, None, None, None, None, None, None) for name in columns] if columns else None
        self.rows = rows

    def fetchall(self):
        return list(self.rows)


def test_materialize_pairs_values_with_columns_as_text():
    rows = materialize(FakeCursor(["id", "name"], [(1, "a")]))
    assert rows == [{"id": "1", "name": "a"}]
    assert sorted_items(rows[0]) == [("id", "1"), ("name", "a")]


def test_materialize_zero_rows_is_empty_result():
    assert materialize(FakeCursor(["id"], [])) == []


def test_materialize_without_columns_is_empty_result():
    assert materialize(FakeCursor(None, [(1,)])) == []


def test_materialize_keeps_cursor_and_column_order():
    rows = materialize(FakeCursor(["zeta", "alpha"], [(2, "x"), (1, "y")]))
    assert [row["zeta"] for row in rows] == ["2", "1"]
    assert list(rows[0]) == ["zeta", "alpha"]
    assert sorted_items(rows[0]) == [("alpha", "x"), ("zeta", "2")]


def test_materialize_degrades_when_columns_cannot_be_read():
    class BrokenCursor:
        @property
        def description(self):
            raise RuntimeError("cursor gone")

        def fetchall(self):
            raise AssertionError("rows should not be fetched")

    assert materialize(BrokenCursor()) == []


def test_to_text_renders_raw_values():
    assert to_text(None) == ""
    assert to_text(b"caf\xc3\xa9") == "café"
    assert to_text(bytearray(b"abc")) == "abc"
    assert to_text(memoryview(b"xyz")) == "xyz"
    assert to_text(b"\xff") == "�"
    assert to_text(2.5) == "2.5"
