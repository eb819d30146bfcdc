# blueprint/rules_engine.py - Dockerfile syntax checker and advisor
# -----------------------------------------------------------------
# Features:
#  - Line-oriented syntax check against the known instruction set
#  - FROM placement and presence errors (ARG may precede FROM)
#  - Best-practice suggestions per instruction and per document
#  - Custom rule packs (JSON list of regex rules) as extra suggestions
#  - Never raises on bad input: always returns a full ValidationResult
# -----------------------------------------------------------------

import json
import logging
import re
from dataclasses import asdict, dataclass, field
from typing import Dict, Iterable, List, Optional, Tuple

from . import explainer

logger = logging.getLogger(__name__)

ERROR = "error"
WARNING = "warning"

KNOWN_INSTRUCTIONS = (
    "FROM", "RUN", "COPY", "ADD", "WORKDIR", "ENV", "EXPOSE", "CMD", "ENTRYPOINT",
    "VOLUME", "USER", "LABEL", "ARG", "HEALTHCHECK", "SHELL", "STOPSIGNAL", "ONBUILD",
)
_INSTRUCTION_RE = re.compile(r"^(" + "|".join(KNOWN_INSTRUCTIONS) + r")\s+", re.IGNORECASE)

MSG_INVALID_INSTRUCTION = "Invalid Dockerfile instruction: {line}"
MSG_FROM_NOT_FIRST = "FROM must be the first instruction in the Dockerfile (ARG excepted)"
MSG_MISSING_FROM = "Dockerfile must contain a FROM instruction."


@dataclass
class ValidationIssue:
    line: int
    message: str
    severity: str = ERROR


@dataclass
class ValidationResult:
    is_valid: bool
    issues: List[ValidationIssue] = field(default_factory=list)
    suggestions: List[str] = field(default_factory=list)

    @property
    def errors(self) -> List[ValidationIssue]:
        return [i for i in self.issues if i.severity == ERROR]

    def to_dict(self) -> Dict:
        return asdict(self)


# --- Built-in per-instruction rules ---
# "check" receives the instruction arguments; a True result adds the
# suggestion "Line <n>: <message>".
LINE_RULES = [
    {"id": "FROM-PIN-TAG", "instructions": ("FROM",),
     "check": lambda args: ":" not in args,
     "message": "pin the base image to a specific tag instead of relying on latest"},

    {"id": "EXEC-FORM", "instructions": ("CMD", "ENTRYPOINT"),
     "check": lambda args: not args.startswith("[") and "${" not in args,
     "message": 'prefer the JSON array form ({instruction} ["executable", "param1", "param2"])'},

    {"id": "APT-ASSUME-YES", "instructions": ("RUN",),
     "check": lambda args: "apt-get install" in args and "-y" not in args,
     "message": "add -y to apt-get install to avoid interactive prompts"},

    {"id": "APT-UPDATE-ALONE", "instructions": ("RUN",),
     "check": lambda args: "apt-get update" in args and "apt-get install" not in args,
     "message": "merge apt-get update and apt-get install into one RUN instruction to reduce layers"},

    {"id": "NPM-PRODUCTION", "instructions": ("RUN",),
     "check": lambda args: "npm install" in args and "--production" not in args,
     "message": "consider npm install --production to reduce the image size"},

    {"id": "ADD-FOR-COPY", "instructions": ("ADD",),
     "check": lambda args: not any(s in args for s in ("http://", "https://", ".tar")),
     "message": "prefer COPY over ADD for plain file copies"},
]

# --- Whole-document rules (checked on the raw text) ---
DOCUMENT_RULES = [
    {"id": "NO-HEALTHCHECK",
     "check": lambda text: "HEALTHCHECK" not in text,
     "message": "Consider adding a HEALTHCHECK instruction to monitor container health"},

    {"id": "NO-USER",
     "check": lambda text: "USER" not in text and "alpine" not in text.lower(),
     "message": "Consider adding a USER instruction to run the container as a non-root user"},
]


# --- Custom Rule Loader ---
def load_custom_ruleset(file_path: str) -> list:
    """Load additional rule packs (JSON list)."""
    try:
        with open(file_path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, ValueError) as e:
        logger.warning(f"Failed to load custom rule pack: {e}")
        return []
    if not isinstance(data, list):
        logger.warning("Custom rule pack %s is not a JSON list, ignoring it", file_path)
        return []
    logger.info(f"Loaded {len(data)} custom rules from {file_path}")
    return data


def _compile_rule(rule: Dict) -> Tuple[Dict, re.Pattern]:
    flags = re.IGNORECASE
    try:
        pattern = re.compile(rule["pattern"], flags)
    except re.error:
        pattern = re.compile(re.escape(rule["pattern"]), flags)
    return rule, pattern


def _compile_custom(custom_rules: Optional[Iterable[Dict]]) -> List[Tuple[Dict, re.Pattern]]:
    compiled = []
    for r in custom_rules or []:
        if (not isinstance(r, dict) or not r.get("pattern") or not isinstance(r["pattern"], str)
                or not isinstance(r.get("instruction") or "", str)):
            logger.warning("Skipping malformed custom rule: %r", r)
            continue
        compiled.append(_compile_rule(r))
    return compiled


def _is_arg_line(line: str) -> bool:
    return line.split(None, 1)[0].upper() == "ARG"


def validate(content: str, custom_rules: Optional[Iterable[Dict]] = None) -> ValidationResult:
    """Check Dockerfile text and collect errors and suggestions."""
    lines = content.split("\n")
    issues: List[ValidationIssue] = []
    suggestions: List[str] = []
    custom = _compile_custom(custom_rules)

    first_from = -1
    for index, raw in enumerate(lines):
        line = raw.strip()
        if not line or line.startswith("#"):
            continue
        lineno = index + 1

        m = _INSTRUCTION_RE.match(line)
        if not m:
            issues.append(ValidationIssue(lineno, MSG_INVALID_INSTRUCTION.format(line=line), ERROR))
            continue

        instruction = m.group(1).upper()
        args = line[m.end():].strip()
        if instruction == "FROM" and first_from < 0:
            first_from = index

        for rule in LINE_RULES:
            if instruction in rule["instructions"] and rule["check"](args):
                message = rule["message"].format(instruction=instruction)
                suggestions.append(f"Line {lineno}: {message}")

        for rule, pat in custom:
            only = (rule.get("instruction") or "").upper()
            if only and only != instruction:
                continue
            if pat.search(line):
                suggestions.append(f"Line {lineno}: {rule.get('message') or rule.get('id')}")

    if first_from > 0:
        for index in range(first_from):
            line = lines[index].strip()
            if line and not line.startswith("#") and not _is_arg_line(line):
                issues.append(ValidationIssue(index + 1, MSG_FROM_NOT_FIRST, ERROR))
                break

    if first_from < 0:
        issues.append(ValidationIssue(1, MSG_MISSING_FROM, ERROR))

    for rule in DOCUMENT_RULES:
        if rule["check"](content):
            suggestions.append(rule["message"])

    # stable: same-line issues keep detection order
    issues.sort(key=lambda i: i.line)
    is_valid = not any(i.severity == ERROR for i in issues)
    return ValidationResult(is_valid=is_valid, issues=issues, suggestions=suggestions)


def run_rules(file_path: str, content: str,
              custom_rules: Optional[Iterable[Dict]] = None) -> Dict:
    """Validate one file and return a report entry."""
    result = validate(content, custom_rules=custom_rules)
    entry = {
        "file": file_path,
        "is_valid": result.is_valid,
        "issues": [asdict(i) for i in result.issues],
        "suggestions": list(result.suggestions),
        "buildability": explainer.analyze_buildability(content, result=result),
    }
    logger.info(f"[RulesEngine] {file_path} → {len(result.errors)} error(s), "
                f"{len(result.suggestions)} suggestion(s)")
    return entry
