import json

import pytest

import run
from test_main import to_hocr


@pytest.fixture
def hocr_file(tmp_path, sheet_tokens):
    pytest.importorskip("lxml")
    path = tmp_path / "sheet.hocr"
    path.write_text(to_hocr(sheet_tokens), encoding="utf-8")
    return path


def test_cli_writes_csv_and_json(tmp_path, hocr_file):
    csv_path = tmp_path / "out.csv"
    json_path = tmp_path / "out.json"

    run.main([str(csv_path), "--hocr_path", str(hocr_file), "--json", str(json_path)])

    assert csv_path.read_text(encoding="utf-8-sig").splitlines()[1] == "J. Smith,180,210,190,580,20,600"
    assert json.loads(json_path.read_text(encoding="utf-8"))[0]["total"] == "600"


def test_cli_config_file_and_flag_override(tmp_path, hocr_file):
    config_path = tmp_path / "cfg.json"
    config_path.write_text(json.dumps({"row_tolerance": 100}), encoding="utf-8")
    csv_path = tmp_path / "out.csv"

    # row_tolerance 100 merges the rows; the flag puts it back to 15
    run.main([str(csv_path), "--hocr_path", str(hocr_file), "--config", str(config_path), "--row-tolerance", "15"])

    assert len(csv_path.read_text(encoding="utf-8-sig").splitlines()) == 2


def test_cli_requires_one_input(tmp_path):
    with pytest.raises(SystemExit):
        run.main([str(tmp_path / "out.csv")])


def test_cli_exits_on_missing_input(tmp_path):
    with pytest.raises(SystemExit) as exc:
        run.main([str(tmp_path / "out.csv"), "--hocr_path", str(tmp_path / "nope.hocr")])
    assert exc.value.code == 1
