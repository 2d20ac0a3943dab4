"""
Tests for the CLI view with scripted terminal input.
"""

from questree.answers import EMPTY_ANSWER, AnswerKind, QuestionAnswerInput
from questree.entries import IntEntry, OptionEntry, QuestionEntry
from questree.io.base_io import MsgLevel


def make_view(inputs, fast_forward=False):
    """CLI view reading from ``inputs``; EOF once they run out."""
    from questree.io.cli_io import CLIQuestionnaireView

    lines = list(inputs)
    printed = []

    def fake_input(prompt):
        printed.append(prompt)
        if not lines:
            raise EOFError
        return lines.pop(0)

    def fake_print(*args):
        printed.append(" ".join(str(a) for a in args))

    view = CLIQuestionnaireView(fast_forward=fast_forward, input_func=fake_input, output=fake_print)
    return view, printed


class TestProceedScreen:
    """Tests for yes/no prompts."""

    def test_yes_and_no(self):
        view, _ = make_view(["y"])
        assert view.show_proceed_screen("id01", "Go?", None, 3, 1).proceed is True

        view, _ = make_view(["no"])
        assert view.show_proceed_screen("id01", "Go?", None, 3, 1).proceed is False

    def test_invalid_input_is_asked_again(self):
        view, printed = make_view(["maybe", "y"])
        result = view.show_proceed_screen("id01", "Go?", None, 3, 1)

        assert result.proceed is True
        assert any(line.startswith("[!] ") for line in printed)

    def test_empty_input_takes_preferred(self):
        view, printed = make_view([""])
        result = view.show_proceed_screen("id01", "Go?", None, 3, 2, preferred=False)

        assert result.proceed is False
        assert "[y/N]: " in printed
        assert "[2/3] Go?" in printed

    def test_cancel(self):
        view, _ = make_view(["q"])
        assert view.show_proceed_screen("id01", "Go?", None, 3, 1).canceled

        view, _ = make_view([])
        assert view.show_proceed_screen("id01", "Go?", None, 3, 1).canceled

    def test_fast_forward_accepts_preferred(self):
        view, _ = make_view([], fast_forward=True)
        result = view.show_proceed_screen("id01", "Go?", None, 3, 1, preferred=True)

        assert not result.canceled
        assert result.proceed is True


class TestQuestionScreen:
    """Tests for question prompts."""

    def test_validated_answer(self):
        view, printed = make_view(["abc", "42"])
        q = QuestionEntry(id="id01", query_text="Age?", entry_type=IntEntry(), position=1)
        result = view.show_question_screen(q, 5)

        assert result.answer == QuestionAnswerInput(AnswerKind.INT, 42)
        assert "[1/5] Age?" in printed

    def test_options_are_listed(self):
        view, printed = make_view(["1"])
        q = QuestionEntry(id="id01", query_text="Kind?", entry_type=OptionEntry(options=["a", "b"]))
        result = view.show_question_screen(q, 0)

        assert result.answer.value == "b"
        assert "  0) a" in printed
        assert "  1) b" in printed

    def test_empty_input_keeps_preferred(self):
        view, _ = make_view([""])
        q = QuestionEntry(id="id01", query_text="Name?")
        preferred = QuestionAnswerInput(AnswerKind.STRING, "Homer")

        assert view.show_question_screen(q, 1, preferred).answer == preferred

    def test_fast_forward(self):
        view, _ = make_view([], fast_forward=True)
        q = QuestionEntry(id="id01", query_text="Name?")
        preferred = QuestionAnswerInput(AnswerKind.STRING, "Homer")

        assert view.show_question_screen(q, 1, preferred).answer == preferred

    def test_fast_forward_accepts_replayed_skip(self):
        view, _ = make_view([], fast_forward=True)
        q = QuestionEntry(id="id01", query_text="Age?", entry_type=IntEntry(), required=False)
        skipped = QuestionAnswerInput.from_json('{"Int":null}')

        assert view.show_question_screen(q, 1, skipped).answer.is_empty
        assert view.fast_forward

    def test_empty_marker_ends_fast_forward(self):
        view, _ = make_view(["Marge"], fast_forward=True)
        q = QuestionEntry(id="id01", query_text="Name?")

        result = view.show_question_screen(q, 1, EMPTY_ANSWER)
        assert result.answer.value == "Marge"
        assert view.fast_forward is False

    def test_eof_cancels(self):
        view, _ = make_view([])
        q = QuestionEntry(id="id01", query_text="Name?")
        assert view.show_question_screen(q, 1).canceled

    def test_cancel_word_is_a_valid_string_answer(self):
        view, _ = make_view(["q"])
        q = QuestionEntry(id="id01", query_text="Initial?")
        result = view.show_question_screen(q, 1)

        assert not result.canceled
        assert result.answer.value == "q"

    def test_cancel_word_cancels_an_invalid_answer(self):
        view, _ = make_view(["quit"])
        q = QuestionEntry(id="id02", query_text="Age?", entry_type=IntEntry())
        assert view.show_question_screen(q, 1).canceled


class TestMessages:
    """Tests for messages and the title."""

    def test_levels(self):
        view, printed = make_view([])
        view.show_message("hello")
        view.show_message("careful", MsgLevel.CRITICAL)
        view.print_title("Family")

        assert "hello" in printed
        assert "[ERROR] careful" in printed
        assert "Family" in printed
