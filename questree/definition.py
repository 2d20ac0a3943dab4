"""
Questionnaire Definitions

Reads and writes questionnaires as JSON documents:

    {
      "title": "Fun Questionnaire",
      "init_block": {
        "id": "id00",
        "start_text": "Do you want to proceed?",
        "entries": [
          {"kind": "question", "id": "id01", "query_text": "What's your name?",
           "entry_type": {"type": "string", "min_length": 2}}
        ]
      }
    }
"""

import json
import logging
from pathlib import Path

from .errors import DefinitionError
from .questionnaire import Questionnaire

logger = logging.getLogger(__name__)


def load_questionnaire(path: str) -> Questionnaire:
    """
    Load a questionnaire definition from a JSON file.

    Raises
    ------
    DefinitionError
        If the file can't be read or doesn't describe a questionnaire
    """
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except OSError as e:
        raise DefinitionError(f"can't read definition: {e}", path=str(path))
    except json.JSONDecodeError as e:
        raise DefinitionError(f"invalid JSON: {e}", path=str(path))

    try:
        questionnaire = Questionnaire.from_dict(data)
    except KeyError as e:
        raise DefinitionError(f"missing field {e}", path=str(path))
    except (TypeError, ValueError, AttributeError) as e:
        raise DefinitionError(str(e), path=str(path))

    logger.info(f"Loaded questionnaire '{questionnaire.title}' with {questionnaire.pos_count} positions")
    return questionnaire


def save_questionnaire(questionnaire: Questionnaire, path: str) -> str:
    """Write a questionnaire definition as JSON and return the path."""
    p = Path(path)
    p.parent.mkdir(parents=True, exist_ok=True)
    with open(p, "w", encoding="utf-8") as f:
        json.dump(questionnaire.to_dict(), f, indent=2, ensure_ascii=False)
    return str(p)
