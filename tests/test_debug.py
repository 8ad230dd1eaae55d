"""Tests for the document tree dump and plain-data conversion."""

from __future__ import annotations

import io

from rulesheet.debug import document_to_dict, dump_document
from rulesheet.engine import parse


class TestDumpDocument:
    def test_tree_layout(self):
        out = io.StringIO()
        dump_document(parse("a, b { color: red; margin: 0 }"), file=out)
        assert out.getvalue() == (
            "Document\n"
            "  RuleSet a, b\n"
            "    Rule color: red\n"
            "    Rule margin: 0\n"
        )

    def test_empty_document(self):
        out = io.StringIO()
        dump_document(parse(""), file=out)
        assert out.getvalue() == "Document\n"


class TestDocumentToDict:
    def test_structure(self):
        data = document_to_dict(parse("a{x:1}\nb, c{}"))
        assert data == {
            "rule_sets": [
                {"selectors": ["a"], "rules": [{"key": "x", "value": "1"}]},
                {"selectors": ["b", "c"], "rules": []},
            ]
        }


class TestDefaultStream:
    def test_default_writes_to_current_stderr(self, capsys):
        dump_document(parse("a{}"))
        assert capsys.readouterr().err == "Document\n  RuleSet a\n"
