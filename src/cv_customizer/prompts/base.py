"""Prompt container and formatting helpers shared by all stage prompts."""

import base64
from collections import Counter
from collections.abc import Iterable, Sequence
from dataclasses import dataclass

from langchain_core.messages import BaseMessage, HumanMessage, SystemMessage

from cv_customizer.models.customization import ProjectCustomization
from cv_customizer.models.document import SourceDocument
from cv_customizer.models.language import LanguageDetection
from cv_customizer.models.requirements import CustomerRequirements
from cv_customizer.models.validation import NO_ISSUES_REASONING, ProjectValidation

NONE_MARKER = "None"


@dataclass(frozen=True)
class StagePrompt:
    """System instruction plus one user message for a single stage call.

    The user message is ``text`` followed by ``documents`` attached as
    base64 file blocks. Without documents it is sent as plain text.
    """

    system: str
    text: str
    documents: tuple[SourceDocument, ...] = ()

    def content_blocks(self) -> list[dict]:
        """Standard LangChain content blocks for the user message."""
        blocks: list[dict] = [{"type": "text", "text": self.text}]
        for document in self.documents:
            blocks.append(
                {
                    "type": "file",
                    "source_type": "base64",
                    "data": base64.b64encode(document.content).decode("ascii"),
                    "mime_type": document.mime_type,
                    "filename": document.filename,
                }
            )
        return blocks

    def to_messages(self) -> list[BaseMessage]:
        content = self.content_blocks() if self.documents else self.text
        return [SystemMessage(content=self.system), HumanMessage(content=content)]


def language_directive(language: LanguageDetection | None) -> str:
    return language.instruction() if language else ""


def render_system(template: str, language: LanguageDetection | None, **values) -> str:
    """Fill a system template and strip the indentation of the surrounding block."""
    text = template.format(language_instruction=language_directive(language), **values)
    return "\n".join(line.rstrip() for line in text.strip().splitlines())


def format_findings(items: Sequence[str]) -> str:
    """Comma-joined findings, or the literal None when there are none."""
    return ", ".join(items) if items else NONE_MARKER


def format_bullets(items: Iterable[str]) -> str:
    lines = [f"- {item}" for item in items]
    return "\n".join(lines) if lines else NONE_MARKER


def format_requirements_detailed(requirements: CustomerRequirements) -> str:
    """One line per requirement with description, must/should label and priority."""
    lines = [
        f"- {req.requirement}: {req.description} (Must-have, Priority: {req.priority.value})"
        for req in requirements.must_have_requirements
    ]
    lines += [
        f"- {req.requirement}: {req.description} (Should-have, Priority: {req.priority.value})"
        for req in requirements.should_have_requirements
    ]
    return "\n".join(lines) if lines else NONE_MARKER


def format_requirements_by_category(requirements: CustomerRequirements) -> str:
    lines = [
        f"- {req.requirement} ({req.category.value})" for req in requirements.all_requirements()
    ]
    return "\n".join(lines) if lines else NONE_MARKER


def format_parc(project: ProjectCustomization) -> str:
    parc = project.parc_analysis
    return (
        f"- Problem: {parc.problem}\n"
        f"- Accountability: {parc.accountability}\n"
        f"- Role: {parc.role}\n"
        f"- Result: {parc.result}"
    )


def no_issues_finding(project_name: str) -> ProjectValidation:
    """Synthetic finding for a project the fact check did not report on."""
    return ProjectValidation(
        project_name=project_name,
        is_factually_accurate=True,
        reasoning=NO_ISSUES_REASONING,
    )


def match_by_name(names: Sequence[str], candidates: Sequence[str]) -> list[int | None]:
    """Index of the candidate matching each name, or None.

    Names unique on both sides match by name first. An unmatched name then
    takes the candidate at its own position when no other name claimed it,
    and finally the next candidate nobody claimed.
    """
    name_counts = Counter(names)
    candidate_counts = Counter(candidates)
    candidate_index = {
        candidate: index
        for index, candidate in enumerate(candidates)
        if candidate and candidate_counts[candidate] == 1
    }

    matched: list[int | None] = [
        candidate_index.get(name) if name and name_counts[name] == 1 else None
        for name in names
    ]
    claimed = {index for index in matched if index is not None}
    positional = {
        index
        for index, match in enumerate(matched)
        if match is None and index < len(candidates) and index not in claimed
    }
    claimed |= positional
    for index in positional:
        matched[index] = index

    leftover = iter(i for i in range(len(candidates)) if i not in claimed)
    return [match if match is not None else next(leftover, None) for match in matched]


def pair_project_findings(
    projects: Sequence[ProjectCustomization],
    findings: Sequence[ProjectValidation],
) -> list[tuple[ProjectCustomization, ProjectValidation]]:
    """Pair every project with its fact-check finding.

    Findings are matched with :func:`match_by_name`, so a finding is never
    paired with two projects. A project left without one gets a synthetic
    "no issues" finding.
    """
    matches = match_by_name(
        [p.project_name for p in projects], [f.project_name for f in findings]
    )
    pairs = []
    for project, index in zip(projects, matches):
        finding = findings[index] if index is not None else None
        pairs.append((project, finding or no_issues_finding(project.project_name)))
    return pairs
