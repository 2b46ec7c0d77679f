"""Pytest configuration and fixtures."""

from typing import Any

import pytest

from cv_customizer.config import get_settings
from cv_customizer.models.correction import (
    CompetenciesCorrection,
    CorrectedProject,
    ProfileCorrection,
    ProjectsCorrection,
    ProjectsCorrectionSummary,
)
from cv_customizer.models.customization import (
    KeyCompetencies,
    ParcAnalysis,
    ProfileCustomization,
    ProjectCustomization,
    ProjectsCustomizationResponse,
)
from cv_customizer.models.document import SourceDocument
from cv_customizer.models.evaluation import Evaluation, RequirementCoverage
from cv_customizer.models.language import LanguageDetection
from cv_customizer.models.quality import (
    AnalysisSummary,
    CompetenceVerification,
    ContentCompleteness,
    CriterionRating,
    CVAnalysis,
    ElementCheck,
    ProjectDescriptions,
    ProjectEvaluation,
    SummaryQuality,
)
from cv_customizer.models.requirements import CustomerRequirements, Requirement
from cv_customizer.models.result import CustomizationResult
from cv_customizer.models.validation import (
    CompetenciesValidation,
    ContentValidation,
    OverallValidation,
    ProfileValidation,
    ProjectValidation,
)


def make_pdf(text: str = "Jane Doe\nSenior Consultant", pages: int = 1) -> bytes:
    """Build a small PDF in memory with PyMuPDF."""
    import fitz  # PyMuPDF

    doc = fitz.open()
    for _ in range(pages):
        page = doc.new_page()
        if text:
            page.insert_text((72, 72), text)
    data = doc.tobytes()
    doc.close()
    return data


class ScriptedProvider:
    """Stand-in LLM provider answering each output schema with a fixed response.

    A response that is an exception instance is raised instead of returned.
    """

    provider_name = "scripted"

    def __init__(self, responses: dict[type, Any]):
        self.responses = dict(responses)
        self.calls: list[tuple[type, Any, bool]] = []

    def generate_structured(self, prompt, output_schema, creative=False):
        self.calls.append((output_schema, prompt, creative))
        response = self.responses[output_schema]
        if isinstance(response, Exception):
            raise response
        return response

    def schemas_called(self) -> list[type]:
        return [schema for schema, _, _ in self.calls]


@pytest.fixture(autouse=True)
def clear_settings_cache():
    """Settings are cached process-wide; start every test from the environment."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def pdf_factory():
    return make_pdf


@pytest.fixture
def pdf_bytes() -> bytes:
    return make_pdf()


@pytest.fixture
def cv_document() -> SourceDocument:
    return SourceDocument(content=b"%PDF-1.7 cv", filename="cv.pdf")


@pytest.fixture
def requirement_document() -> SourceDocument:
    return SourceDocument(content=b"%PDF-1.7 tender", filename="tender.pdf")


@pytest.fixture
def language() -> LanguageDetection:
    return LanguageDetection(language="Norwegian", language_code="no", confidence=0.95)


@pytest.fixture
def sample_requirements() -> CustomerRequirements:
    return CustomerRequirements(
        must_have_requirements=[
            Requirement(
                requirement="Python",
                description="Five years of backend development in Python",
                category="skills",
                priority="high",
            ),
            Requirement(
                requirement="Azure",
                description="Experience running workloads on Azure",
                category="experience",
                priority="medium",
            ),
        ],
        should_have_requirements=[
            Requirement(
                requirement="Norwegian",
                description="Fluent Norwegian",
                category="language",
                priority="low",
            ),
        ],
        context_summary="Public sector modernization project",
    )


@pytest.fixture
def sample_profile() -> ProfileCustomization:
    return ProfileCustomization(
        original_profile="Consultant with ten years of experience in software development.",
        customized_profile="Python consultant with ten years of cloud development on Azure.",
        reasoning="Emphasized Python and Azure",
    )


@pytest.fixture
def sample_competencies() -> KeyCompetencies:
    return KeyCompetencies(
        original_competencies=["Python", "Azure", "Scrum", "Java"],
        relevant_competencies=["Python", "Azure", "Scrum"],
        additional_suggested_competencies=["Terraform"],
        reasoning="Selected cloud and backend skills",
    )


def _project(name: str, score: float) -> ProjectCustomization:
    return ProjectCustomization(
        project_name=name,
        original_description=f"Worked on {name}.",
        customized_description=f"Led the Python backend of {name} on Azure.",
        relevance_score=score,
        parc_analysis=ParcAnalysis(
            problem=f"{name} needed a new backend",
            accountability="Backend delivery",
            role="Lead developer",
            result="Delivered on time",
        ),
        reasoning="Highlights Python and Azure",
    )


@pytest.fixture
def sample_projects() -> list[ProjectCustomization]:
    return [_project("Tax Portal", 9), _project("Health Records", 6)]


@pytest.fixture
def sample_evaluation(sample_requirements: CustomerRequirements) -> Evaluation:
    return Evaluation(
        requirement_coverage=[
            RequirementCoverage(
                requirement=req.requirement,
                covered=req.requirement != "Norwegian",
                coverage_details=f"{req.requirement} is shown in the profile",
                improvement_suggestions="Mention language skills",
            )
            for req in sample_requirements.all_requirements()
        ],
        overall_score=8,
        overall_comments="Strong technical match",
        improvement_suggestions=["Add certifications"],
    )


@pytest.fixture
def passing_validation(sample_projects: list[ProjectCustomization]) -> ContentValidation:
    return ContentValidation(
        profile_validation=ProfileValidation(is_factually_accurate=True),
        competencies_validation=CompetenciesValidation(),
        projects_validation=[
            ProjectValidation(project_name=p.project_name) for p in sample_projects
        ],
        overall_validation=OverallValidation(passes_validation=True, confidence_score=9),
    )


@pytest.fixture
def failing_validation() -> ContentValidation:
    return ContentValidation(
        profile_validation=ProfileValidation(
            is_factually_accurate=False,
            fabricated_claims=["ten years of cloud development on Azure"],
            reasoning="The CV does not mention Azure experience of that length",
        ),
        competencies_validation=CompetenciesValidation(
            unsupported_competencies=["Azure"],
            reasoning="Azure is listed but not backed by any project",
        ),
        projects_validation=[
            ProjectValidation(
                project_name="Tax Portal",
                is_factually_accurate=False,
                fabricated_details=["on Azure"],
                reasoning="The project ran on premises",
            ),
            ProjectValidation(project_name="Health Records"),
        ],
        overall_validation=OverallValidation(
            passes_validation=False,
            confidence_score=7,
            summary="Azure claims are not supported",
        ),
    )


@pytest.fixture
def sample_profile_correction() -> ProfileCorrection:
    return ProfileCorrection(
        corrected_profile="Python consultant with ten years of software development.",
        changes_made=["Removed unsupported Azure claim"],
        preserved_customizations=["Python emphasis"],
        reasoning="Azure experience is not in the CV",
        confidence_score=8,
    )


@pytest.fixture
def sample_competencies_correction() -> CompetenciesCorrection:
    return CompetenciesCorrection(
        corrected_competencies=["Python", "Scrum"],
        removed_competencies=["Azure"],
        preserved_competencies=["Python", "Scrum"],
        reasoning="Azure is unsupported",
        confidence_score=9,
    )


@pytest.fixture
def sample_projects_correction(
    sample_projects: list[ProjectCustomization],
) -> ProjectsCorrection:
    tax_portal = sample_projects[0]
    return ProjectsCorrection(
        corrected_projects=[
            CorrectedProject(
                project_name="Tax Portal",
                corrected_description="Led the Python backend of Tax Portal.",
                parc_analysis=tax_portal.parc_analysis,
                changes_made=["Removed Azure"],
                preserved_elements=["Python backend"],
                reasoning="Project ran on premises",
            ),
        ],
        correction_summary=ProjectsCorrectionSummary(
            total_projects_corrected=1,
            major_corrections=["Removed Azure from Tax Portal"],
            confidence_score=6,
        ),
    )


@pytest.fixture
def scripted_responses(
    language: LanguageDetection,
    sample_requirements: CustomerRequirements,
    sample_profile: ProfileCustomization,
    sample_competencies: KeyCompetencies,
    sample_projects: list[ProjectCustomization],
    sample_evaluation: Evaluation,
    passing_validation: ContentValidation,
) -> dict[type, Any]:
    """Responses for a full run whose fact check passes."""
    return {
        LanguageDetection: language,
        CustomerRequirements: sample_requirements,
        ProfileCustomization: sample_profile,
        KeyCompetencies: sample_competencies,
        # Returned least relevant first; the customizer sorts them
        ProjectsCustomizationResponse: ProjectsCustomizationResponse(
            projects=list(reversed(sample_projects))
        ),
        Evaluation: sample_evaluation,
        ContentValidation: passing_validation,
    }


@pytest.fixture
def scripted_provider(scripted_responses: dict[type, Any]) -> ScriptedProvider:
    return ScriptedProvider(scripted_responses)


@pytest.fixture
def correcting_provider(
    scripted_responses: dict[type, Any],
    failing_validation: ContentValidation,
    sample_profile_correction: ProfileCorrection,
    sample_competencies_correction: CompetenciesCorrection,
    sample_projects_correction: ProjectsCorrection,
) -> ScriptedProvider:
    """Provider for a full run whose fact check fails and triggers every correction."""
    responses = dict(scripted_responses)
    responses.update(
        {
            ContentValidation: failing_validation,
            ProfileCorrection: sample_profile_correction,
            CompetenciesCorrection: sample_competencies_correction,
            ProjectsCorrection: sample_projects_correction,
        }
    )
    return ScriptedProvider(responses)


@pytest.fixture
def sample_result(
    sample_requirements: CustomerRequirements,
    sample_profile: ProfileCustomization,
    sample_competencies: KeyCompetencies,
    sample_projects: list[ProjectCustomization],
    sample_evaluation: Evaluation,
    passing_validation: ContentValidation,
) -> CustomizationResult:
    return CustomizationResult(
        customer_requirements=sample_requirements,
        profile_customization=sample_profile,
        key_competencies=sample_competencies,
        customized_projects=sample_projects,
        evaluation=sample_evaluation,
        validation=passing_validation,
        language_code="no",
    )


@pytest.fixture
def quality_ratings() -> dict[type, CriterionRating]:
    """One rating per criterion, keyed by the schema its agent requests."""
    return {
        CriterionRating: CriterionRating(
            score=8.2, reasoning="Clear and professional", suggestions=["Avoid passive voice"]
        ),
        ContentCompleteness: ContentCompleteness(
            score=6.5,
            reasoning="Certifications are missing",
            element_verification=[
                ElementCheck(element="Summary", present=True),
                ElementCheck(element="Certifications", present=False, comment="Not listed"),
            ],
        ),
        SummaryQuality: SummaryQuality(
            score=4.0,
            reasoning="Written in the first person",
            original_summary="I am a Python developer.",
            improved_version="Python developer with ten years of backend experience.",
        ),
        ProjectDescriptions: ProjectDescriptions(
            score=0,
            reasoning="Descriptions are mostly solid",
            project_evaluations=[
                ProjectEvaluation(project_name="Tax Portal", score=7.0, strengths=["Clear role"]),
                ProjectEvaluation(
                    project_name="Health Records", score=8.0, weaknesses=["No results"]
                ),
            ],
        ),
        CompetenceVerification: CompetenceVerification(
            score=9.0, unverified_competencies=["Kubernetes"]
        ),
    }


@pytest.fixture
def analysis_provider(quality_ratings, language) -> ScriptedProvider:
    responses: dict[type, Any] = dict(quality_ratings)
    responses[LanguageDetection] = language
    responses[AnalysisSummary] = AnalysisSummary(summary="A solid CV with a weak summary.")
    return ScriptedProvider(responses)


@pytest.fixture
def sample_analysis(quality_ratings) -> CVAnalysis:
    return CVAnalysis(
        language_code="no",
        overall_score=7.0,
        summary="A solid CV with a weak summary.",
        key_strengths=["Strong language quality (scored 8.2/10)"],
        key_improvement_areas=["Improve summary quality (scored 4.0/10)"],
        language_quality=quality_ratings[CriterionRating],
        content_completeness=quality_ratings[ContentCompleteness],
        summary_quality=quality_ratings[SummaryQuality],
        project_descriptions=quality_ratings[ProjectDescriptions].with_score_from_projects(),
        competence_verification=quality_ratings[CompetenceVerification],
    )
