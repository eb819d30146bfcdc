"""
Explainer - plain-language reading of validation results
--------------------------------------------------------
 - Buildability summary for a whole Dockerfile
 - Best-practice background for individual issues and suggestions,
   drawn from the instruction catalog documentation
"""

import re

from . import rules_engine
from .catalog import Instruction, find_spec_by_keyword

ESSENTIAL_INSTRUCTIONS = ("FROM", "RUN", "COPY", "CMD")

MSG_CANNOT_BUILD = ("This Dockerfile has syntax errors and cannot be built. "
                    "Fix all errors first and try again.")
MSG_SHOULD_BUILD = "This Dockerfile is syntactically correct and should build successfully."
MSG_BASICALLY_CORRECT = "This Dockerfile is basically correct, but "
MSG_MISSING_ESSENTIAL = "it is missing some common instructions: {missing}."
MSG_HAS_ESSENTIAL = "it contains the basic necessary instructions."
MSG_HAS_SUGGESTIONS = " There are optimization suggestions available."

BEST_PRACTICE_GUIDES = {
    "tag": "Pinned image tags keep builds reproducible when upstream images move.",
    "json array": "The exec form runs the process as PID 1 so it receives stop signals directly.",
    "apt-get": "Installing in the same layer as the package index update avoids stale caches.",
    "npm": "Skipping dev dependencies keeps the runtime image small.",
    "over add": "COPY is explicit; ADD also fetches URLs and unpacks archives.",
    "healthcheck": "A health check lets the orchestrator restart containers that stop responding.",
    "non-root": "Running as a non-root user limits what a compromised process can do.",
}

_KEYWORD_RE = re.compile(r"\b(" + "|".join(m.value for m in Instruction) + r")\b")


def analyze_buildability(content: str, result=None) -> str:
    """Summarize whether ``content`` is likely to build.

    ``result`` may carry an already computed ValidationResult for the same
    text; otherwise the text is validated here.
    """
    if result is None:
        result = rules_engine.validate(content)

    if not result.is_valid:
        return MSG_CANNOT_BUILD

    if not result.errors and not result.suggestions:
        return MSG_SHOULD_BUILD

    missing = [kw for kw in ESSENTIAL_INSTRUCTIONS if kw not in content]
    summary = MSG_BASICALLY_CORRECT
    if missing:
        summary += MSG_MISSING_ESSENTIAL.format(missing=", ".join(missing))
    else:
        summary += MSG_HAS_ESSENTIAL

    if result.suggestions:
        summary += MSG_HAS_SUGGESTIONS
    return summary


def get_context(message: str) -> str:
    """Background text for a validation message.

    Mentions of instruction keywords pull in their catalog documentation,
    topic words pull in a best-practice guide.
    """
    lower = (message or "").lower()
    context = []

    for keyword in dict.fromkeys(_KEYWORD_RE.findall(message or "")):
        spec = find_spec_by_keyword(keyword)
        if spec and spec.documentation:
            context.append(f"{spec.keyword.value}: {spec.documentation}")

    for topic, guide in BEST_PRACTICE_GUIDES.items():
        if topic in lower:
            context.append(guide)

    return " ".join(context)
