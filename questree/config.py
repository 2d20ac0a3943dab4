"""
Configuration

Settings for the controller and for questionnaire sessions. Session settings
can be overridden through environment variables:

- QUESTREE_PERSISTENCE_FILE: path of the answer log
- QUESTREE_AUTOFILL: "1"/"true"/"yes" to fast-forward through replayed answers
- QUESTREE_LOG_LEVEL: logging level name used by the command line
"""

import os
from dataclasses import dataclass
from typing import Any, Dict, Optional

from .questionnaire import DEFAULT_TITLE

PERSISTENCE_FILE_NAME = "questree.tmp"
COMPLETION_MARKER_ID = "00000000"


def _env_bool(value: Optional[str], default: bool) -> bool:
    if value is None or not value.strip():
        return default
    return value.strip().lower() in ("1", "true", "yes", "y", "on")


@dataclass
class ControllerConfig:
    """
    Configuration for the questionnaire controller.

    Attributes
    ----------
    resume_enters_root : bool
        When replay data is loaded, offer "yes" as preferred answer for the
        start prompt of the init block.
    store_completion_marker : bool
        Persist a marker answer before the end prompt of the init block, so
        a log shows that the questionnaire was completed.
    completion_marker_id : str
        Id used for the completion marker.
    """
    resume_enters_root: bool = True
    store_completion_marker: bool = True
    completion_marker_id: str = COMPLETION_MARKER_ID

    def to_dict(self) -> Dict[str, Any]:
        return {
            "resume_enters_root": self.resume_enters_root,
            "store_completion_marker": self.store_completion_marker,
            "completion_marker_id": self.completion_marker_id,
        }

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> "ControllerConfig":
        return cls(
            resume_enters_root=d.get("resume_enters_root", True),
            store_completion_marker=d.get("store_completion_marker", True),
            completion_marker_id=d.get("completion_marker_id", COMPLETION_MARKER_ID),
        )


@dataclass
class RunnerConfig:
    """Configuration for a questionnaire session."""
    persistence_file: str = PERSISTENCE_FILE_NAME
    title: Optional[str] = None
    autofill: bool = False
    log_level: str = "WARNING"
    controller: Optional[ControllerConfig] = None

    def __post_init__(self):
        if self.controller is None:
            self.controller = ControllerConfig()

    def resolve_title(self, questionnaire_title: Optional[str]) -> str:
        return self.title or questionnaire_title or DEFAULT_TITLE

    def to_dict(self) -> Dict[str, Any]:
        return {
            "persistence_file": self.persistence_file,
            "title": self.title,
            "autofill": self.autofill,
            "log_level": self.log_level,
            "controller": self.controller.to_dict(),
        }

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> "RunnerConfig":
        return cls(
            persistence_file=d.get("persistence_file", PERSISTENCE_FILE_NAME),
            title=d.get("title"),
            autofill=d.get("autofill", False),
            log_level=d.get("log_level", "WARNING"),
            controller=ControllerConfig.from_dict(d.get("controller", {})),
        )

    @classmethod
    def from_env(cls, **overrides: Any) -> "RunnerConfig":
        """Defaults, overridden by environment variables, overridden by ``overrides``."""
        values: Dict[str, Any] = {
            "persistence_file": os.environ.get("QUESTREE_PERSISTENCE_FILE") or PERSISTENCE_FILE_NAME,
            "autofill": _env_bool(os.environ.get("QUESTREE_AUTOFILL"), False),
            "log_level": (os.environ.get("QUESTREE_LOG_LEVEL") or "WARNING").upper(),
        }
        values.update({k: v for k, v in overrides.items() if v is not None})
        return cls(**values)
