"""
Tests for the command-line interface.
"""

import json

import pytest

from cvflow.cli import create_parser, main
from cvflow.version import __version__


class TestParser:

    def test_paginate_defaults(self):
        args = create_parser().parse_args(["paginate", "resume.json"])

        assert args.command == "paginate"
        assert args.page_size == "a4"
        assert args.capacity is None
        assert args.ledger is False
        assert args.log_level == "WARNING"

    def test_paginate_options(self):
        args = create_parser().parse_args([
            "--log-level", "DEBUG", "paginate", "resume.json",
            "-o", "out.json", "--page-size", "letter", "--capacity", "700", "--ledger", "-q",
        ])

        assert args.output == "out.json"
        assert args.page_size == "letter"
        assert args.capacity == 700.0
        assert args.ledger and args.quiet
        assert args.log_level == "DEBUG"

    def test_unknown_page_size_is_rejected(self):
        with pytest.raises(SystemExit):
            create_parser().parse_args(["paginate", "resume.json", "--page-size", "a3"])


class TestMain:

    def test_version(self, capsys):
        assert main(["version"]) == 0

        assert f"cvflow v{__version__}" in capsys.readouterr().out

    def test_no_command_prints_help(self, capsys):
        assert main([]) == 0

        assert "paginate" in capsys.readouterr().out

    def test_missing_input(self, tmp_path, capsys):
        assert main(["paginate", str(tmp_path / "missing.json")]) == 1

        assert "File not found" in capsys.readouterr().err

    def test_paginate_writes_default_output(self, sample_document_path):
        assert main(["paginate", str(sample_document_path), "-q"]) == 0

        output = sample_document_path.with_suffix(".pages.json")
        data = json.loads(output.read_text(encoding="utf-8"))
        assert data["format"] == "cvflow_pages"
        assert data["metadata"]["total_pages"] >= 1
        assert data["pages"][-1]["end"] == [4, 0]

    def test_paginate_with_capacity_and_ledger(self, sample_document_path, tmp_path):
        output = tmp_path / "pages.json"

        code = main([
            "paginate", str(sample_document_path), "-o", str(output),
            "--capacity", "5000", "--ledger", "-q",
        ])

        assert code == 0
        data = json.loads(output.read_text(encoding="utf-8"))
        assert data["metadata"] == {"total_pages": 1, "capacity": 5000.0}
        assert len(data["pages"][0]["ledger"]) == 10

    def test_paginate_prints_summary(self, sample_document_path, capsys):
        assert main(["paginate", str(sample_document_path)]) == 0

        assert "Saved" in capsys.readouterr().err

    def test_malformed_document_exits_with_2(self, tmp_path, capsys):
        path = tmp_path / "bad.json"
        path.write_text(json.dumps({
            "sections": [{"sectionType": "Summary", "sectionTitle": "Summary", "data": {"rows": ["a", "b"]}}],
        }), encoding="utf-8")

        assert main(["paginate", str(path), "-q"]) == 2

        err = capsys.readouterr().err
        assert "MalformedDocumentError" in err
        assert "(malformed_document)" in err

    @pytest.mark.parametrize("section", [
        {"sectionType": "Skill", "sectionTitle": "Skills", "data": ["Python"]},
        {"sectionType": "Skill", "sectionTitle": "Skills", "rows": ["Python"], "column": "left"},
        {"sectionType": "Skill", "sectionTitle": "Skills", "data": {"rows": ["Python"], "displaySetting": "x"}},
    ])
    def test_misshapen_sections_exit_with_2(self, tmp_path, capsys, section):
        path = tmp_path / "misshapen.json"
        path.write_text(json.dumps({"sections": [section]}), encoding="utf-8")

        assert main(["paginate", str(path), "-q"]) == 2

        assert "DocumentImportError" in capsys.readouterr().err

    def test_invalid_capacity_exits_with_2(self, sample_document_path):
        assert main(["paginate", str(sample_document_path), "--capacity", "0", "-q"]) == 2

    def test_info_json(self, sample_document_path, capsys):
        assert main(["info", str(sample_document_path), "--json"]) == 0

        info = json.loads(capsys.readouterr().out)
        assert info["total_rows"] == 7
        assert [entry["type"] for entry in info["sections"]] == ["header", "summary", "experience", "skill"]
        assert info["design_font"]["fontSize"] == "sm"

    def test_info_text(self, sample_document_path, capsys):
        assert main(["info", str(sample_document_path)]) == 0

        out = capsys.readouterr().out
        assert "Sections: 4, rows: 7" in out
        assert "experience" in out
