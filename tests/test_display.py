"""repr of columns and tables"""
from py_labeled import Column, LabeledTable, MISSING
from py_labeled import display


class TestColumnRepr:

	def test_footer(self):
		assert repr(Column([1, 2, 3])).endswith("# 3 element column <int>")

	def test_labels_and_missing(self):
		text = repr(Column([1.5, MISSING], name="rate", labels=["Peru", "Chile"]))
		lines = text.splitlines()
		assert lines[0].strip() == "rate"
		assert lines[1].startswith("Peru")
		assert "Missing" in lines[2]
		assert lines[-1] == "# 2 element column <float>"

	def test_text_is_quoted(self):
		assert "'north'" in repr(Column(["north"]))

	def test_long_column_truncated(self, monkeypatch):
		monkeypatch.setattr(display, "MAX_HEAD_ROWS", 2)
		text = repr(Column(list(range(10))))
		assert "..." in text
		assert "9" in text
		assert "\n4\n" not in text


class TestTableRepr:

	def test_footer(self, measles):
		assert repr(measles).endswith("# 3×2 table <int, int>")

	def test_headers(self, measles):
		lines = repr(measles).splitlines()
		assert "'United States'" in lines[0]
		assert "Brazil" in lines[0]
		assert ".united_states" in lines[1]
		assert lines[2].startswith("1990")

	def test_missing_shown(self, measles):
		assert "Missing" in repr(measles)

	def test_attribute_row_omitted_when_names_match(self):
		t = LabeledTable({"a": [1], "b": [2]})
		lines = repr(t).splitlines()
		assert not lines[1].strip().startswith(".")

	def test_wide_table_truncated(self, monkeypatch):
		monkeypatch.setattr(display, "MAX_HEAD_COLS", 1)
		t = LabeledTable({f"c{i}": [i] for i in range(4)})
		text = repr(t)
		assert "c0" in text and "c3" in text
		assert "c1" not in text
		assert text.endswith("# 1×4 table <int, ..., int>")

	def test_empty(self):
		assert repr(LabeledTable()) == "# 0×0 table"
