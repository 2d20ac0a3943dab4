"""
Tests for the questionnaire runner and the command line.

These tests validate:
- Resuming from a left over persistence file
- Imported answers and autofill
- Exit codes and result files of the command line
"""

import json
from pathlib import Path

from questree.answers import AnswerKind, QuestionAnswer, QuestionAnswerInput
from questree.config import RunnerConfig
from questree.entries import IntEntry, QuestionEntry
from questree.questionnaire import Questionnaire

from tests.scripted_view import CANCEL, ScriptedView

EXAMPLE = Path(__file__).resolve().parent.parent / "examples" / "family.json"


def build():
    return Questionnaire.create(
        "id00",
        "Start?",
        [
            QuestionEntry(id="id01", query_text="Name?"),
            QuestionEntry(id="id02", query_text="Age?", entry_type=IntEntry()),
        ],
    )


class TestQuestionnaireRunner:
    """Tests for QuestionnaireRunner."""

    def test_fresh_session_writes_log(self, tmp_path):
        from questree.runner import QuestionnaireRunner

        log = tmp_path / "answers.tmp"
        view = ScriptedView(decisions=[True], inputs=["Homer", "39"])
        runner = QuestionnaireRunner(build(), config=RunnerConfig(persistence_file=str(log)), view=view)
        result = runner.run()

        assert result.is_finished
        assert log.read_text(encoding="utf-8") == 'id01={"String":"Homer"}\nid02={"Int":39}\n'
        assert view.proceed_calls == [("id00", 0, None)]

    def test_resume_from_persistence_file(self, tmp_path):
        """Test that a left over log is offered, replayed and written again."""
        from questree.runner import RESUME_BLOCK_ID, QuestionnaireRunner

        log = tmp_path / "answers.tmp"
        log.write_text('id01={"String":"Homer"}\n', encoding="utf-8")
        view = ScriptedView(decisions=[True], inputs=["40"])
        config = RunnerConfig(persistence_file=str(log), autofill=True)
        result = QuestionnaireRunner(build(), config=config, view=view).run()

        assert result.is_finished
        assert view.proceed_calls[0] == (RESUME_BLOCK_ID, 0, None)
        assert view.proceed_calls[1] == ("id00", 0, True)
        assert log.read_text(encoding="utf-8") == 'id01={"String":"Homer"}\nid02={"Int":40}\n'

    def test_declining_resume_starts_fresh(self, tmp_path):
        from questree.runner import QuestionnaireRunner

        log = tmp_path / "answers.tmp"
        log.write_text('id01={"String":"Homer"}\n', encoding="utf-8")
        view = ScriptedView(decisions=[False, True], inputs=["Marge", "38"])
        result = QuestionnaireRunner(build(), config=RunnerConfig(persistence_file=str(log)), view=view).run()

        assert result.answers.iterations[0][0].answer.value == "Marge"
        assert log.read_text(encoding="utf-8") == 'id01={"String":"Marge"}\nid02={"Int":38}\n'

    def test_canceling_resume_prompt(self, tmp_path):
        from questree.runner import QuestionnaireRunner

        log = tmp_path / "answers.tmp"
        log.write_text('id01={"String":"Homer"}\n', encoding="utf-8")
        view = ScriptedView(decisions=[CANCEL])
        result = QuestionnaireRunner(build(), config=RunnerConfig(persistence_file=str(log)), view=view).run()

        assert result.is_canceled
        # the log is kept for the next start
        assert log.exists()
        assert view.titles == []

    def test_imported_data_skips_resume_prompt(self, tmp_path):
        from questree.runner import QuestionnaireRunner

        log = tmp_path / "answers.tmp"
        log.write_text('id01={"String":"Homer"}\n', encoding="utf-8")
        imported = [
            QuestionAnswer(id="id01", answer=QuestionAnswerInput(AnswerKind.STRING, "Ned")),
            QuestionAnswer(id="id02", answer=QuestionAnswerInput(AnswerKind.INT, 60)),
        ]
        view = ScriptedView()
        config = RunnerConfig(persistence_file=str(tmp_path / "new.tmp"), autofill=True)
        result = QuestionnaireRunner(build(), config=config, imported_data=imported, view=view).run()

        assert result.is_finished
        assert [c[0] for c in view.proceed_calls] == ["id00"]
        assert [a.value for _, a in result.answers.iter_answers()] == ["Ned", 60]

    def test_title_override(self, tmp_path):
        from questree.runner import QuestionnaireRunner

        view = ScriptedView(decisions=[False])
        config = RunnerConfig(persistence_file=str(tmp_path / "a.tmp"), title="Census")
        QuestionnaireRunner(build(), config=config, view=view).run()

        assert view.titles == ["Census"]


class TestCommandLine:
    """Tests for the questree command."""

    def test_check(self, capsys):
        from questree.cli import main

        assert main(["check", str(EXAMPLE)]) == 0
        assert "OK (15 positions)" in capsys.readouterr().out

    def test_outline(self, capsys):
        from questree.cli import main

        assert main(["outline", str(EXAMPLE)]) == 0
        out = capsys.readouterr().out
        assert "Family and jobs" in out
        assert "[repeated] id04_04" in out

    def test_missing_definition(self, tmp_path, capsys):
        from questree.cli import main

        assert main(["check", str(tmp_path / "missing.json")]) == 2
        assert "Error:" in capsys.readouterr().err

    def test_no_command(self):
        from questree.cli import main

        assert main([]) == 1

    def test_run_with_import(self, tmp_path, monkeypatch):
        """Test a complete run fed from an imported log and terminal input."""
        from questree import cli

        definition = tmp_path / "q.json"
        definition.write_text(json.dumps(build().to_dict()), encoding="utf-8")
        imported = tmp_path / "import.tmp"
        imported.write_text('id01={"String":"Homer"}\n', encoding="utf-8")
        output = tmp_path / "result.json"

        lines = ["39"]
        monkeypatch.setattr("builtins.input", lambda prompt="": lines.pop(0))
        monkeypatch.chdir(tmp_path)
        monkeypatch.delenv("QUESTREE_PERSISTENCE_FILE", raising=False)

        code = cli.main([
            "run", str(definition),
            "--import", str(imported),
            "--autofill",
            "--output", str(output),
        ])

        assert code == 0
        result = json.loads(output.read_text(encoding="utf-8"))
        answers = result["Finished"]["iterations"][0]
        assert answers[0] == {"Question": {"id": "id01", "answer": {"String": "Homer"}}}
        assert answers[1] == {"Question": {"id": "id02", "answer": {"Int": 39}}}
        assert (tmp_path / "questree.tmp").exists()

    def test_run_canceled(self, tmp_path, monkeypatch):
        from questree import cli

        definition = tmp_path / "q.json"
        definition.write_text(json.dumps(build().to_dict()), encoding="utf-8")

        def closed_input(prompt=""):
            raise EOFError

        monkeypatch.setattr("builtins.input", closed_input)
        monkeypatch.chdir(tmp_path)
        monkeypatch.delenv("QUESTREE_PERSISTENCE_FILE", raising=False)

        assert cli.main(["run", str(definition)]) == 1
