import pytest

import main
from contractguard.errors import UpstreamError
from contractguard.pipeline import run_pipeline


@pytest.fixture
def use_completion(monkeypatch):
    def install(complete):
        monkeypatch.setattr(
            main, "run_pipeline",
            lambda doc, progress_callback=None: run_pipeline(
                doc, complete=complete, progress_callback=progress_callback,
            ),
        )
    return install


def test_no_args_prints_usage(capsys):
    assert main.main([]) == 0
    assert "Usage:" in capsys.readouterr().out


@pytest.mark.parametrize("args", [["--json"], ["c.txt", "--mime"], ["c.txt", "--bogus"]])
def test_bad_args(args, capsys):
    assert main.main(args) == 1
    assert "Error:" in capsys.readouterr().out


def test_missing_file(tmp_path, capsys):
    assert main.main([str(tmp_path / "nope.txt")]) == 1
    assert "File not found" in capsys.readouterr().out


def test_unreadable_input_reports_error(tmp_path, capsys):
    folder = tmp_path / "contract.txt"
    folder.mkdir()
    assert main.main([str(folder)]) == 1
    assert "Error reading file" in capsys.readouterr().out


def test_analyze_and_export(tmp_path, contract_text, completion_spy, use_completion, capsys):
    use_completion(completion_spy)
    src = tmp_path / "deal.txt"
    src.write_text(contract_text, encoding="utf-8")
    out_dir = tmp_path / "out"

    assert main.main([str(src), "--json", "--export-dir", str(out_dir)]) == 0

    out = capsys.readouterr().out
    assert '"overallScore": 70' in out
    written = sorted(p.name for p in out_dir.iterdir())
    assert len(written) == 2
    assert written[0].startswith("ContractGuard_Analysis_deal_txt_")
    assert written[1].startswith("ContractGuard_Revised_deal_txt_")


def test_pipeline_errors_exit_nonzero(tmp_path, contract_text, use_completion, capsys):
    def failing(prompt):
        raise UpstreamError("network down")

    use_completion(failing)
    src = tmp_path / "deal.txt"
    src.write_text(contract_text, encoding="utf-8")
    assert main.main([str(src)]) == 1
    assert "Analysis failed: network down" in capsys.readouterr().out
