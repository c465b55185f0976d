"""Tests for DataviewExecutor."""

import pytest

from vs_dataview.dataview.errors import DataviewSyntaxError
from vs_dataview.dataview.executor import DataviewExecutor

PROJ_QUERY = "```vs-dataview\ntable a, b\nfrom #proj\nwhere a > 1\n```"


class TestDataviewExecutor:
    """Test end-to-end query execution."""

    def test_filters_by_tag_and_condition(self, proj_documents):
        table = DataviewExecutor(proj_documents).run(PROJ_QUERY)
        assert table == (
            "| File | a | b |\n"
            "| --- | --- | --- |\n"
            "| [[two]] | 2 | x |\n"
            "| [[three]] | 3 |  |"
        )

    def test_no_condition_keeps_every_tagged_document(self, proj_documents):
        table = DataviewExecutor(proj_documents).run("table a\nfrom #proj")
        assert table.split("\n")[2:] == [
            "| [[zero]] | 0 |",
            "| [[two]] | 2 |",
            "| [[three]] | 3 |",
        ]

    def test_no_matches(self, proj_documents):
        table = DataviewExecutor(proj_documents).run("table a\nfrom #nothing")
        assert table == "| File | a |\n| --- | --- |"

    def test_unparseable_condition_matches_nothing(self, proj_documents):
        table = DataviewExecutor(proj_documents).run("table a\nfrom #proj\nwhere a >")
        assert table.count("\n") == 1

    def test_failing_condition_excludes_only_that_document(self, make_document):
        documents = [
            make_document("ok", tags=["proj"], owner={"name": "sam"}),
            make_document("broken", tags=["proj"]),
        ]
        table = DataviewExecutor(documents).run("table owner\nfrom #proj\nwhere owner.name == 'sam'")
        assert "[[ok]]" in table
        assert "[[broken]]" not in table

    def test_string_tags(self, make_document):
        documents = [make_document("note", tags="#proj, misc")]
        table = DataviewExecutor(documents).run("table tags\nfrom #proj")
        assert table.endswith("| [[note]] | #proj, misc |")

    def test_untagged_documents_are_skipped(self, make_document):
        documents = [make_document("plain", a=1), make_document("tagged", tags=["proj"], a=1)]
        table = DataviewExecutor(documents).run("table a\nfrom #proj")
        assert "[[plain]]" not in table
        assert "[[tagged]]" in table

    def test_dates_render_in_cells(self, make_document):
        documents = [make_document("event", tags=["proj"], when="2024-11-09")]
        table = DataviewExecutor(documents).run("table when\nfrom #proj")
        assert table.endswith("| [[event]] | November 09, 2024 |")

    def test_invalid_query_raises_before_reading_documents(self):
        def documents():
            raise AssertionError("documents were read")
            yield  # pragma: no cover

        with pytest.raises(DataviewSyntaxError, match="missing from clause"):
            DataviewExecutor(documents()).run("table a")
