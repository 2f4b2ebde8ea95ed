import pytest
from py_labeled import LabeledTable, MISSING


@pytest.fixture
def measles():
	"""Reported cases per year, with one unreported year"""
	return LabeledTable(
		{
			"United States": [27786, 9643, 2237],
			"Brazil": [61435, MISSING, 7934],
		},
		index=["1990", "1991", "1992"],
	)


@pytest.fixture
def small():
	return LabeledTable({"A": [5, 15, 25], "B": [1, 2, 3]}, index=[1990, 1991, 1992])
