"""End-to-end tests for the command line front end."""

from maia.cli import main

ADDSUB = "learnline:alg:ekv-losning-ensteg-addsub"
MULDIV = "learnline:alg:ekv-losning-ensteg-muldiv"


def run(tmp_path, *args):
    return main(["--state-dir", str(tmp_path), "--log-level", "WARNING", *args])


class TestCli:

    def test_lines(self, tmp_path, capsys):
        assert run(tmp_path, "lines") == 0
        out = capsys.readouterr().out
        assert "Learn Graph Map" in out
        assert ADDSUB in out
        assert "Prerequisites: " + ADDSUB in out

    def test_walk_through_line(self, tmp_path, capsys):
        assert run(tmp_path, "start", ADDSUB) == 0
        assert "Välkommen" in capsys.readouterr().out

        assert run(tmp_path, "advance", ADDSUB) == 0
        out = capsys.readouterr().out
        assert "Step 1, item 3" in out
        assert "Focus: 10 = 10" in out

        assert run(tmp_path, "complete", ADDSUB) == 0
        out = capsys.readouterr().out
        assert "Completed" in out
        assert "multiplication" in out

        assert run(tmp_path, "progress") == 0
        assert "Overall progress: 50%" in capsys.readouterr().out

    def test_locked_line(self, tmp_path, capsys):
        assert run(tmp_path, "start", MULDIV) == 1
        assert "Locked" in capsys.readouterr().out

    def test_advance_refuses_locked_line(self, tmp_path, capsys):
        assert run(tmp_path, "advance", MULDIV) == 1
        assert "Locked" in capsys.readouterr().out
        assert run(tmp_path, "lines") == 0
        out = capsys.readouterr().out
        assert "In progress" not in out

    def test_unknown_line(self, tmp_path, capsys):
        assert run(tmp_path, "advance", "nope") == 1
        assert "Unknown learn line: nope" in capsys.readouterr().err

    def test_recommend(self, tmp_path, capsys):
        assert run(tmp_path, "recommend", "--limit", "1") == 0
        out = capsys.readouterr().out
        assert ADDSUB in out
        assert MULDIV not in out

    def test_language_is_remembered(self, tmp_path, capsys):
        assert run(tmp_path, "language", "sv") == 0
        assert "Maia Lärande-assistent" in capsys.readouterr().out
        assert run(tmp_path, "lines") == 0
        out = capsys.readouterr().out
        assert "Lärolinjeutforskare" in out
        assert "Lösning av enstegsekvationer" in out

    def test_unsupported_language(self, tmp_path, capsys):
        assert run(tmp_path, "language", "xx") == 1
        assert "Unsupported language" in capsys.readouterr().err

    def test_reset(self, tmp_path, capsys):
        run(tmp_path, "complete", ADDSUB)
        capsys.readouterr()
        assert run(tmp_path, "reset") == 0
        assert run(tmp_path, "progress") == 0
        assert "Overall progress: 0%" in capsys.readouterr().out
