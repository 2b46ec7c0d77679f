"""Correction of content flagged by the fact check, and the combined report."""

import logging

from cv_customizer.agents.base import StageAgent
from cv_customizer.agents.errors import (
    CompetenciesCorrectionFailed,
    ProfileCorrectionFailed,
    ProjectsCorrectionFailed,
)
from cv_customizer.models.correction import (
    NO_CHANGES_NEEDED,
    CompetenciesCorrection,
    CorrectedCompetenciesSection,
    CorrectedProfileSection,
    CorrectedProject,
    CorrectedProjectSection,
    CorrectionReport,
    CorrectionSummary,
    ProfileCorrection,
    ProjectsCorrection,
)
from cv_customizer.models.customization import (
    KeyCompetencies,
    ProfileCustomization,
    ProjectCustomization,
)
from cv_customizer.models.document import SourceDocument
from cv_customizer.models.language import LanguageDetection
from cv_customizer.models.requirements import CustomerRequirements
from cv_customizer.models.validation import (
    CompetenciesValidation,
    ProfileValidation,
    ProjectValidation,
)
from cv_customizer.prompts.base import match_by_name, pair_project_findings
from cv_customizer.prompts.correction import (
    build_competencies_correction_prompt,
    build_profile_correction_prompt,
    build_projects_correction_prompt,
)

logger = logging.getLogger(__name__)


class ProfileCorrector(StageAgent):
    failure = ProfileCorrectionFailed
    creative = True

    def correct(
        self,
        cv: SourceDocument,
        profile: ProfileCustomization,
        validation: ProfileValidation,
        requirements: CustomerRequirements,
        language: LanguageDetection | None = None,
    ) -> ProfileCorrection:
        prompt = build_profile_correction_prompt(cv, profile, validation, requirements, language)
        correction = self._generate(prompt, ProfileCorrection)
        logger.info("Profile corrected: %d changes", len(correction.changes_made))
        return correction


class CompetenciesCorrector(StageAgent):
    failure = CompetenciesCorrectionFailed
    creative = True

    def correct(
        self,
        cv: SourceDocument,
        competencies: KeyCompetencies,
        validation: CompetenciesValidation,
        requirements: CustomerRequirements,
        language: LanguageDetection | None = None,
    ) -> CompetenciesCorrection:
        prompt = build_competencies_correction_prompt(
            cv, competencies, validation, requirements, language
        )
        correction = self._generate(prompt, CompetenciesCorrection)
        logger.info(
            "Competencies corrected: %d removed", len(correction.removed_competencies)
        )
        return correction


class ProjectsCorrector(StageAgent):
    """Correct flagged projects and pass the others through unchanged."""

    failure = ProjectsCorrectionFailed
    creative = True

    def correct(
        self,
        cv: SourceDocument,
        projects: list[ProjectCustomization],
        findings: list[ProjectValidation],
        requirements: CustomerRequirements,
        language: LanguageDetection | None = None,
    ) -> ProjectsCorrection:
        """Correct the customized projects.

        Args:
            cv: The CV document.
            projects: Customized projects, in result order.
            findings: Per-project fact-check findings.
            requirements: Analyzed customer requirements.
            language: Detected CV language, if any.

        Returns:
            ProjectsCorrection with one corrected project per input project,
            in input order. Projects without quoted issues keep their
            customized description and report "No changes needed".

        Raises:
            ProjectsCorrectionFailed: If the call fails or a flagged project
                has no counterpart in the model output.
        """
        prompt = build_projects_correction_prompt(cv, projects, findings, requirements, language)
        correction = self._generate(prompt, ProjectsCorrection)

        outputs = correction.corrected_projects
        matches = match_by_name(
            [p.project_name for p in projects], [p.project_name for p in outputs]
        )

        corrected: list[CorrectedProject] = []
        flagged = 0
        pairs = pair_project_findings(projects, findings)
        for (project, finding), index in zip(pairs, matches):
            if not finding.has_quoted_issues:
                corrected.append(
                    CorrectedProject(
                        project_name=project.project_name,
                        corrected_description=project.customized_description,
                        parc_analysis=project.parc_analysis,
                        changes_made=[NO_CHANGES_NEEDED],
                        reasoning=finding.reasoning,
                    )
                )
                continue

            flagged += 1
            if index is None:
                raise self._contract_violation(
                    f"no correction returned for flagged project {project.project_name!r}"
                )
            match = outputs[index]
            corrected.append(match.model_copy(update={"project_name": project.project_name}))

        summary = correction.correction_summary.model_copy(
            update={"total_projects_corrected": flagged}
        )
        logger.info("Projects corrected: %d of %d projects updated", flagged, len(projects))
        return ProjectsCorrection(corrected_projects=corrected, correction_summary=summary)


def build_correction_report(
    profile: ProfileCustomization,
    competencies: KeyCompetencies,
    projects: list[ProjectCustomization],
    profile_correction: ProfileCorrection | None,
    competencies_correction: CompetenciesCorrection | None,
    projects_correction: ProjectsCorrection | None,
) -> CorrectionReport:
    """Combine the corrections that ran into one report.

    Sections without a correction carry the customized content unchanged.
    """
    if profile_correction:
        corrected_profile = CorrectedProfileSection(
            profile=profile_correction.corrected_profile,
            changes_made=profile_correction.changes_made,
            reasoning=profile_correction.reasoning,
        )
    else:
        corrected_profile = CorrectedProfileSection(
            profile=profile.customized_profile,
            reasoning="No profile correction needed",
        )

    if competencies_correction:
        corrected_competencies = CorrectedCompetenciesSection(
            competencies=competencies_correction.corrected_competencies,
            removed_competencies=competencies_correction.removed_competencies,
            reasoning=competencies_correction.reasoning,
        )
    else:
        corrected_competencies = CorrectedCompetenciesSection(
            competencies=competencies.relevant_competencies,
            reasoning="No competencies correction needed",
        )

    if projects_correction:
        corrected_projects = [
            CorrectedProjectSection(
                project_name=p.project_name,
                corrected_description=p.corrected_description,
                parc_analysis=p.parc_analysis,
                changes_made=p.changes_made,
                reasoning=p.reasoning,
            )
            for p in projects_correction.corrected_projects
        ]
    else:
        corrected_projects = [
            CorrectedProjectSection(
                project_name=p.project_name,
                corrected_description=p.customized_description,
                parc_analysis=p.parc_analysis,
                reasoning="No project correction needed",
            )
            for p in projects
        ]

    total_issues_fixed = (
        (1 if profile_correction else 0)
        + (len(competencies_correction.removed_competencies) if competencies_correction else 0)
        + (
            projects_correction.correction_summary.total_projects_corrected
            if projects_correction
            else 0
        )
    )

    major_changes: list[str] = []
    quality_improvements: list[str] = []
    scores: list[float] = []
    if profile_correction:
        major_changes += profile_correction.changes_made
        quality_improvements += profile_correction.preserved_customizations
        scores.append(profile_correction.confidence_score)
    if competencies_correction:
        major_changes.append(
            f"Removed {len(competencies_correction.removed_competencies)} unsupported competencies"
        )
        quality_improvements += [
            f"Preserved relevant competency: {c}"
            for c in competencies_correction.preserved_competencies
        ]
        scores.append(competencies_correction.confidence_score)
    if projects_correction:
        major_changes += projects_correction.correction_summary.major_corrections
        quality_improvements += [
            f"Preserved in {p.project_name}: {element}"
            for p in projects_correction.corrected_projects
            for element in p.preserved_elements
        ]
        scores.append(projects_correction.correction_summary.confidence_score)

    return CorrectionReport(
        corrected_profile=corrected_profile,
        corrected_competencies=corrected_competencies,
        corrected_projects=corrected_projects,
        correction_summary=CorrectionSummary(
            total_issues_fixed=total_issues_fixed,
            major_changes=major_changes,
            quality_improvements=quality_improvements,
            confidence_score=min(scores, default=10),
        ),
    )


def apply_corrections(
    profile: ProfileCustomization,
    competencies: KeyCompetencies,
    projects: list[ProjectCustomization],
    report: CorrectionReport,
) -> tuple[ProfileCustomization, KeyCompetencies, list[ProjectCustomization]]:
    """Replace customized content with its corrected version, keeping other fields."""
    corrected_profile = profile.model_copy(
        update={"customized_profile": report.corrected_profile.profile}
    )
    corrected_competencies = competencies.model_copy(
        update={"relevant_competencies": report.corrected_competencies.competencies}
    )
    corrected_projects = [
        project.model_copy(
            update={
                "customized_description": section.corrected_description,
                "parc_analysis": section.parc_analysis,
            }
        )
        for project, section in zip(projects, report.corrected_projects, strict=True)
    ]
    return corrected_profile, corrected_competencies, corrected_projects
