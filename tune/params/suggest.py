"""
"Did you mean?" suggestions for mistyped parameter names.

Parameter names are case-insensitive and may carry the '%' default flag, so
suggest_parameter() folds both away before scoring the typed name against
the registry's keys, then reports the names as they were defined.
"""

from typing import Iterable, List, Optional

from rapidfuzz import process, fuzz, utils

from .registry import ParamRegistry, strip_default_flag

# Minimum similarity score (0-100) to consider a match
MIN_SIMILARITY_SCORE = 60

# Maximum number of suggestions to return
MAX_SUGGESTIONS = 3


def suggest_similar(
    unknown: str,
    valid_options: Iterable[str],
    min_score: int = MIN_SIMILARITY_SCORE,
    max_suggestions: int = MAX_SUGGESTIONS,
) -> List[str]:
    """
    Options from valid_options close to 'unknown', best first. Empty when
    nothing scores at least min_score.
    """
    options = list(valid_options)
    if not unknown or not options:
        return []

    matches = process.extract(
        unknown,
        options,
        scorer=fuzz.WRatio,
        processor=utils.default_process,
        limit=max_suggestions,
        score_cutoff=min_score,
    )

    return [match[0] for match in matches]


def format_suggestion(suggestions: List[str]) -> str:
    if not suggestions:
        return ""

    if len(suggestions) == 1:
        return f"Did you mean '{suggestions[0]}'?"
    quoted = [f"'{s}'" for s in suggestions]
    return f"Did you mean one of: {', '.join(quoted)}?"


def suggest_parameter(unknown_param: str, registry: Optional[ParamRegistry] = None) -> List[str]:
    """
    Names from 'registry' (the built-in one by default) that look like
    'unknown_param'.
    """
    if registry is None:
        # definitions populate REGISTRY on package import
        from . import REGISTRY  # pylint: disable=import-outside-toplevel
        registry = REGISTRY

    name, _ = strip_default_flag(unknown_param or "")
    by_key = {param.key: param.name for param in registry}

    return [by_key[key] for key in suggest_similar(name.lower(), by_key)]
