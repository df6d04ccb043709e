"""StageStore: loads the questionnaire configuration from ``v1/`` into typed models.

This is the single source of truth for stage data at runtime.  The store is
loaded once at startup, validated eagerly, and then treated as read-only.

Usage::

    store = StageStore()            # defaults to v1/ relative to repo root
    store.load()                    # parse and validate all YAML files

    stage = store.get_stage(0)
    stage, question = store.find_question("smokingStatus")
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Optional

import yaml

from health_quiz.models.question import Question, ScaleDescriptor, question_mapper
from health_quiz.models.stage import StageDescriptor

logger = logging.getLogger(__name__)

DEFAULT_STAGES_FILE = "stages.yaml"


# ---------------------------------------------------------------------------
# Utility helpers
# ---------------------------------------------------------------------------

def find_repo_root(start: Optional[Path] = None) -> Path:
    """Locate the directory that holds the bundled ``v1/`` stage configuration.

    Walks up from *start* (this module by default) to the first directory
    carrying ``pyproject.toml`` or ``.git``, else the current directory.
    """
    p = (start or Path(__file__).resolve()).parent
    for parent in [p, *p.parents]:
        if (parent / "pyproject.toml").exists() or (parent / ".git").exists():
            return parent
    return Path.cwd()


def load_yaml(path: Path | str) -> Any:
    """Parse one stage or scale YAML file.

    Raises:
        FileNotFoundError: if ``path`` does not exist.
    """
    if isinstance(path, str):
        path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Missing YAML file: {path}")
    with path.open("r", encoding="utf-8") as f:
        return yaml.safe_load(f)


# ---------------------------------------------------------------------------
# StageStore
# ---------------------------------------------------------------------------

class StageStore:
    """Loads the stage configuration and provides typed lookup.

    Attributes populated after :meth:`load`:

        stages  - list[StageDescriptor] in presentation order
        scales  - dict[name, ScaleDescriptor] from ``scales/*.yaml``

    Args:
        ruleset_dir: directory holding ``stages.yaml`` and ``scales/``.
            Defaults to ``v1/`` at the repository root.
        stages_file: stage list file name inside ``ruleset_dir``.
    """

    def __init__(
        self,
        ruleset_dir: str | Path | None = None,
        stages_file: str = DEFAULT_STAGES_FILE,
    ) -> None:
        if ruleset_dir is None:
            ruleset_dir = find_repo_root() / "v1"
        self._base = Path(ruleset_dir)
        self._stages_file = stages_file

        # Populated by load()
        self.stages: list[StageDescriptor] = []
        self.scales: dict[str, ScaleDescriptor] = {}

        # question id -> stage index
        self._question_index: dict[str, int] = {}

    # ------------------------------------------------------------------
    # Loading
    # ------------------------------------------------------------------

    def load(self) -> None:
        """Parse all YAML files under the ruleset directory into typed models.

        Call this once at startup.

        Raises:
            FileNotFoundError: if an expected YAML file is missing.
            ValueError: if the configuration is malformed (unknown question
                type, icon, component or scale reference; duplicate ids;
                required fields the stage never asks).
        """
        self._load_scales()
        self._load_stages()
        self._check_stage_order()
        logger.info(
            "StageStore loaded: %d stages, %d questions, %d scales",
            len(self.stages),
            len(self._question_index),
            len(self.scales),
        )

    def _load_scales(self) -> None:
        """Load scales/*.yaml keyed by scale name."""
        scale_dir = self._base / "scales"
        if not scale_dir.is_dir():
            return
        for path in sorted(scale_dir.glob("*.yaml")):
            scale = ScaleDescriptor(**load_yaml(path))
            key = path.stem
            if key in self.scales:
                raise ValueError(f"Duplicate scale '{key}' in {scale_dir}")
            self.scales[key] = scale

    def _load_stages(self) -> None:
        """Load the stage list, resolving question types and scale references."""
        raw_list = load_yaml(self._base / self._stages_file)
        if not isinstance(raw_list, list) or not raw_list:
            raise ValueError(f"{self._stages_file} must contain a non-empty list of stages")

        seen_stage_ids: set[str] = set()
        for index, raw in enumerate(raw_list):
            if not isinstance(raw, dict):
                raise ValueError(f"Stage #{index} in {self._stages_file} is not a mapping")
            stage_id = raw.get("id", f"#{index}")
            if stage_id in seen_stage_ids:
                raise ValueError(f"Duplicate stage id '{stage_id}'")
            seen_stage_ids.add(stage_id)

            questions = [
                self._parse_question(q_dict, stage_id)
                for q_dict in raw.get("questions") or []
            ]
            stage = StageDescriptor(**{**raw, "questions": questions})

            for q in stage.questions:
                if q.id in self._question_index:
                    other = self.stages[self._question_index[q.id]].id
                    raise ValueError(
                        f"Question id '{q.id}' in stage '{stage.id}' already "
                        f"used by stage '{other}'"
                    )
                self._question_index[q.id] = index
            self.stages.append(stage)

    def _parse_question(self, q_dict: dict, stage_id: str) -> Question:
        """Parse one question dict through ``question_mapper``.

        Scale questions may reference a scale file via ``scale_ref`` instead
        of embedding the scale inline.
        """
        qtype = q_dict.get("question_type")
        cls = question_mapper.get(qtype)
        if cls is None:
            raise ValueError(
                f"Unknown question_type '{qtype}' in stage '{stage_id}'"
            )

        q_dict = dict(q_dict)
        ref = q_dict.pop("scale_ref", None)
        if ref is not None:
            if ref not in self.scales:
                raise ValueError(
                    f"Unknown scale_ref '{ref}' in stage '{stage_id}' "
                    f"(known: {sorted(self.scales)})"
                )
            q_dict["scale"] = self.scales[ref]
        return cls(**q_dict)

    def _check_stage_order(self) -> None:
        """A results stage, if any, must be the last one."""
        for stage in self.stages[:-1]:
            if stage.is_results:
                raise ValueError(
                    f"Results stage '{stage.id}' must be the last stage"
                )

    # ------------------------------------------------------------------
    # Lookup helpers
    # ------------------------------------------------------------------

    @property
    def stage_count(self) -> int:
        return len(self.stages)

    def get_stage(self, index: int) -> StageDescriptor:
        """Return the stage at ``index``.

        Raises:
            IndexError: if ``index`` is out of range.
        """
        if not 0 <= index < len(self.stages):
            raise IndexError(f"stage index {index} out of range")
        return self.stages[index]

    def get_stage_by_id(self, stage_id: str) -> StageDescriptor:
        """Return the stage with ``stage_id``.

        Raises:
            KeyError: if no stage has that id.
        """
        return self.stages[self.index_of(stage_id)]

    def index_of(self, stage_id: str) -> int:
        for i, stage in enumerate(self.stages):
            if stage.id == stage_id:
                return i
        raise KeyError(stage_id)

    def find_question(self, qid: str) -> tuple[StageDescriptor, Question]:
        """Return ``(stage, question)`` for a question id.

        Raises:
            KeyError: if the id is not asked by any stage.
        """
        stage = self.stages[self._question_index[qid]]
        return stage, stage.get_question(qid)

    @property
    def question_ids(self) -> list[str]:
        return list(self._question_index)
