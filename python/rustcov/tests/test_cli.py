from unittest.mock import patch

from rustcov import cli
from rustcov.config import BINARY_GROUPS


def test_install_help(capsys):
    assert cli.main(["--install-help"]) == 0
    out = capsys.readouterr().out
    assert "libdw-dev" in out
    assert "sudo make install" in out


def test_list_groups(capsys):
    assert cli.main(["--list"]) == 0
    out = capsys.readouterr().out
    for group in BINARY_GROUPS:
        assert f"  {group}" in out


def test_defaults_passed_to_runner(workspace, monkeypatch):
    monkeypatch.setenv("RUSTCOV_PROJECT_ROOT", str(workspace))
    monkeypatch.delenv("RUSTCOV_BEST_EFFORT", raising=False)
    with patch("rustcov.cli.run_coverage", return_value=0) as mock_run:
        assert cli.main([]) == 0
    settings = mock_run.call_args.args[0]
    assert settings.project_root == workspace
    assert settings.groups == BINARY_GROUPS
    assert settings.best_effort is False
    assert mock_run.call_args.kwargs == {"open_report_when_done": True}


def test_flags_passed_to_runner(workspace):
    with patch("rustcov.cli.run_coverage", return_value=3) as mock_run:
        status = cli.main(
            [
                "--project-root",
                str(workspace),
                "--group",
                "ethash",
                "--group",
                "ethsync",
                "--best-effort",
                "--no-open",
            ]
        )
    assert status == 3
    settings = mock_run.call_args.args[0]
    assert settings.groups == ["ethash", "ethsync"]
    assert settings.best_effort is True
    assert mock_run.call_args.kwargs == {"open_report_when_done": False}


def test_invalid_group(workspace, capsys):
    with patch("rustcov.cli.run_coverage") as mock_run:
        assert cli.main(["--project-root", str(workspace), "--group", "nope"]) == 2
    mock_run.assert_not_called()
    assert "unknown group" in capsys.readouterr().err


def test_interrupted(workspace, capsys):
    with patch("rustcov.cli.run_coverage", side_effect=KeyboardInterrupt):
        assert cli.main(["--project-root", str(workspace)]) == 130
    assert "interrupted" in capsys.readouterr().err


def test_missing_kcov_end_to_end(workspace, capsys):
    with patch("rustcov.runner.find_tool", return_value=None), patch(
        "rustcov.command.subprocess.run"
    ) as mock_subprocess:
        assert cli.main(["--project-root", str(workspace)]) == 1
    mock_subprocess.assert_not_called()
    captured = capsys.readouterr()
    assert captured.err == (
        "Install kcov first (run with --install-help for details). Aborting.\n"
    )
    assert not (workspace / "target" / "coverage").exists()


def test_missing_project_root(tmp_path, capsys):
    with patch("rustcov.cli.run_coverage") as mock_run:
        assert cli.main(["--project-root", str(tmp_path / "missing")]) == 2
    mock_run.assert_not_called()
    assert "not a directory" in capsys.readouterr().err
