import pytest

from ring_cli.repl import RingShell, main, run_program_lines


def test_run_program_lines_walkthrough(capsys):
    shell = run_program_lines(
        [
            "# comment",
            "add 5 3 8 1",
            "update 4 3",
            "",
            "size",
            "remove 3",
            "show",
            "debug",
            "check",
            "first",
            "last",
            "contains 3 7",
            "count 3",
        ]
    )
    out = capsys.readouterr().out.splitlines()
    assert out[0] == "   └─ SortedCollection([1, 3, 5, 8])"
    assert out[1] == "   └─ SortedCollection([1, 3, 3, 4, 5, 8]) changed=True"
    assert out[2] == "   └─ 6"
    assert out[4] == "   └─ SortedCollection([1, 3, 4, 5, 8])"
    assert out[5] == "   └─ (1,3,4,5,8)"
    assert out[6] == "   └─ ok"
    assert out[7] == "   └─ 1"
    assert out[8] == "   └─ 8"
    assert out[9] == "   └─ True False"
    assert out[10] == "   └─ 1"
    assert len(shell.coll) == 5


def test_text_mode_keeps_strings(capsys):
    shell = RingShell(text=True)
    run_program_lines(["add pear fig apple", "discard fig kiwi"], shell)
    out = capsys.readouterr().out.splitlines()
    assert out[0] == "   └─ SortedCollection(['apple', 'fig', 'pear'])"
    assert out[1] == "   └─ SortedCollection(['apple', 'pear']) removed=1"


def test_number_parsing():
    shell = RingShell()
    assert shell.values(["2", "1.5"]) == [2, 1.5]
    with pytest.raises(ValueError):
        shell.values(["pear"])


def test_unknown_command():
    with pytest.raises(ValueError, match="unknown command"):
        RingShell().run("frobnicate", [])


@pytest.mark.parametrize("cmd", ["last", "size", "show", "clear", "metrics"])
def test_commands_without_operands_reject_arguments(cmd):
    shell = RingShell()
    shell.run("add", ["1", "2"])
    with pytest.raises(ValueError, match=f"{cmd} takes no arguments"):
        shell.run(cmd, ["junk"])
    assert len(shell.coll) == 2


def test_clear_and_metrics(capsys):
    run_program_lines(["add 1", "clear", "metrics"])
    out = capsys.readouterr().out.splitlines()
    assert out[1] == "   └─ SortedCollection([])"
    assert out[2].startswith("   └─ compares=")


def test_main_runs_file(tmp_path, capsys):
    script = tmp_path / "cmds.txt"
    script.write_text("add 2 1\nupdate 9 0\nshow\n")
    assert main([str(script), "--guards"]) == 0
    out = capsys.readouterr().out.splitlines()
    assert out[-1] == "   └─ SortedCollection([0, 1, 2, 9])"


def test_main_reports_errors(tmp_path, capsys):
    script = tmp_path / "cmds.txt"
    script.write_text("add 1\nremove 5\n")
    assert main([str(script)]) == 1
    assert "not in collection" in capsys.readouterr().err


def test_repl_reads_until_exit(monkeypatch, capsys):
    lines = iter(["add 3 1", "first", "last x", "exit"])
    monkeypatch.setattr("builtins.input", lambda prompt="": next(lines))
    from ring_cli.repl import repl

    shell = repl()
    out = capsys.readouterr().out
    assert "SortedCollection([1, 3])" in out
    assert "ERROR" in out
    assert len(shell.coll) == 2
