import logging

import pytest

from mica.__main__ import main
from mica.runtime_context import get_depth_limit


def test_runs_script_and_echoes(tmp_path, capsys):
    script = tmp_path / "hello.lisp"
    script.write_text(
        '#!/usr/bin/env mica\n(defun sq (x) (* x x))\n(echo (sq 7))\n(echo "done")\n',
        encoding="utf-8",
    )
    assert main([str(script)]) == 0
    assert capsys.readouterr().out.splitlines() == ["49", '"done"']


def test_error_exit_status(tmp_path, caplog):
    script = tmp_path / "bad.lisp"
    script.write_text("(echo undefined-thing)", encoding="utf-8")
    with caplog.at_level(logging.ERROR, logger="mica"):
        assert main([str(script)]) == 1
    assert "MicaUnboundSymbol" in caplog.text


def test_missing_script(tmp_path):
    assert main([str(tmp_path / "absent.lisp")]) == 1


def test_max_depth_option(tmp_path):
    script = tmp_path / "deep.lisp"
    script.write_text("(defun down (n) (if (eq n 0) 0 (down (- n 1))))\n(down 50)\n", encoding="utf-8")
    assert main(["--max-depth", "30", str(script)]) == 1
    assert get_depth_limit() == 30


def test_invalid_depth_setting_is_a_usage_error(tmp_path, monkeypatch, capsys):
    script = tmp_path / "ok.lisp"
    script.write_text("(echo 1)", encoding="utf-8")
    monkeypatch.setenv("MICA_MAX_DEPTH", "deep")
    with pytest.raises(SystemExit) as exc:
        main([str(script)])
    assert exc.value.code == 2
    captured = capsys.readouterr()
    assert "MICA_MAX_DEPTH" in captured.err
    assert captured.out == ""


def test_non_positive_max_depth_option(tmp_path):
    script = tmp_path / "ok.lisp"
    script.write_text("(echo 1)", encoding="utf-8")
    with pytest.raises(SystemExit) as exc:
        main(["--max-depth", "0", str(script)])
    assert exc.value.code == 2
