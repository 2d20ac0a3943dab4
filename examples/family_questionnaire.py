"""
Family Questionnaire Demo

Builds a small questionnaire in code and runs it in the terminal. Answers are
written to an answer log; stop with 'q' and start the script again to resume.

Usage:
    python family_questionnaire.py
    python family_questionnaire.py --autofill       # fast-forward on resume
    python family_questionnaire.py --log answers.tmp
"""

import argparse
import json
import logging

from questree import (
    BoolEntry,
    IntEntry,
    OptionEntry,
    QuestionEntry,
    Questionnaire,
    QuestionnaireRunner,
    RepeatedQuestionEntry,
    RunnerConfig,
    SubBlock,
    check_questionnaire,
)


def build_questionnaire() -> Questionnaire:
    """The questionnaire of the demo."""
    return Questionnaire.create(
        "id00",
        "Do you want to answer a few questions about your family?",
        [
            QuestionEntry(id="id01", query_text="What's your name?"),
            QuestionEntry(id="id02", query_text="How old are you?", entry_type=IntEntry(min=0, max=130)),
            SubBlock(
                id="id03",
                start_text="Do you have children?",
                end_text="Do you have another child?",
                loop_over_entries=True,
                entries=[
                    QuestionEntry(id="id03_01", query_text="What's the name of the child?"),
                    QuestionEntry(
                        id="id03_02",
                        query_text="Boy or girl?",
                        entry_type=OptionEntry(options=["Boy", "Girl", "Rather not say"]),
                    ),
                    RepeatedQuestionEntry(
                        id="id03_03",
                        query_text="What are the hobbies of the child?",
                        secondary_query_text="Another hobby? (empty input to stop)",
                        max_count=3,
                    ),
                ],
            ),
            QuestionEntry(
                id="id04",
                query_text="Do you have pets?",
                entry_type=BoolEntry(default_value=False),
            ),
        ],
        title="Family Questionnaire",
        end_text="Are you happy with your answers?",
    )


def main():
    parser = argparse.ArgumentParser(description="questree demo")
    parser.add_argument("--autofill", action="store_true", default=None, help="Fast-forward on resume")
    parser.add_argument("--log", type=str, default=None, help="Answer log file")
    args = parser.parse_args()

    logging.basicConfig(level=logging.INFO)

    questionnaire = build_questionnaire()
    problems = check_questionnaire(questionnaire)
    if problems:
        for problem in problems:
            print(problem)
        return

    config = RunnerConfig.from_env(autofill=args.autofill, persistence_file=args.log)
    result = QuestionnaireRunner(questionnaire, config=config).run()

    print()
    print(json.dumps(result.to_dict(), indent=2, ensure_ascii=False))


if __name__ == "__main__":
    main()
