"""LangGraph node definitions for the CV customization workflow.

Every node reports a ``starting`` update, runs its stage, then reports
``completed`` with a short data payload. A failing node reports ``error``
instead and records the failure in the state; the edges then end the run.
"""

import logging
import time
from collections.abc import Callable
from typing import Any

from cv_customizer.agents.correction import (
    CompetenciesCorrector,
    ProfileCorrector,
    ProjectsCorrector,
    apply_corrections,
    build_correction_report,
)
from cv_customizer.agents.customization import (
    CompetenciesCustomizer,
    ProfileCustomizer,
    ProjectsCustomizer,
)
from cv_customizer.agents.errors import StageFailure
from cv_customizer.agents.evaluation import CVEvaluator
from cv_customizer.agents.language import LanguageDetector
from cv_customizer.agents.requirements import RequirementsAnalyzer
from cv_customizer.agents.validation import ContentValidator
from cv_customizer.documents import InputError, load_document
from cv_customizer.graph.stages import STAGES, StageDescriptor
from cv_customizer.llm.base import LLMProvider
from cv_customizer.llm.catalog import model_choice_errors
from cv_customizer.models.progress import ProgressStatus, ProgressUpdate, StepId
from cv_customizer.models.result import CustomizationResult
from cv_customizer.models.state import CustomizationState, StepTiming
from cv_customizer.progress import ProgressChannel

logger = logging.getLogger(__name__)

# Failure kind recorded for bad uploads and run parameters
INPUT_FAILURE = "input"
INTERNAL_FAILURE = "internal"

STARTING_MESSAGES: dict[StepId, str] = {
    StepId.VALIDATION: "Validating input parameters...",
    StepId.FILE_PROCESSING: "Processing CV and customer files...",
    StepId.LANGUAGE_DETECTION: "Detecting document language...",
    StepId.REQUIREMENTS_ANALYSIS: "Analyzing customer requirements...",
    StepId.PROFILE_CUSTOMIZATION: "Customizing CV profile...",
    StepId.COMPETENCIES_CUSTOMIZATION: "Identifying relevant competencies...",
    StepId.PROJECTS_CUSTOMIZATION: "Customizing project descriptions...",
    StepId.EVALUATION: "Evaluating customized CV against requirements...",
    StepId.CONTENT_VALIDATION: "Validating content for factual accuracy...",
    StepId.PROFILE_CORRECTION: "Correcting profile validation issues...",
    StepId.COMPETENCIES_CORRECTION: "Correcting competencies validation issues...",
    StepId.PROJECTS_CORRECTION: "Correcting projects validation issues...",
    StepId.CORRECTION_CHECK: "Checking corrections...",
}

# What a stage returns: state updates, completion message, progress data
StageOutcome = tuple[dict, str, Any]
NodeFunction = Callable[[CustomizationState], dict]


def emit_progress(
    progress: ProgressChannel | None,
    step: StepId,
    status: ProgressStatus,
    message: str,
    value: float,
    data: Any = None,
) -> None:
    """Send one update to the progress channel, if there is one."""
    if progress is None:
        return
    update = ProgressUpdate(step=step, status=status, message=message, data=data, progress=value)
    try:
        progress(update)
    except Exception:
        # A broken display must not break the pipeline
        logger.exception("Progress channel failed on %s/%s", step.value, status)


def check_run_parameters(
    state: CustomizationState,
    api_key: str | None,
) -> list[str]:
    """Return the problems with the uploads and provider/model choice."""
    errors = []
    if not state.get("cv_upload"):
        errors.append("CV file is missing")
    if not state.get("requirement_uploads"):
        errors.append("At least one customer requirements file is required")

    errors += model_choice_errors(state.get("provider", ""), state.get("model", ""), api_key)
    return errors


def correction_needed(step: StepId, state: CustomizationState) -> bool:
    """Whether a correction stage has anything to correct."""
    validation = state.get("validation")
    if validation is None or validation.overall_validation.passes_validation:
        return False
    if step == StepId.PROFILE_CORRECTION:
        return validation.profile_validation.has_issues
    if step == StepId.COMPETENCIES_CORRECTION:
        return validation.competencies_validation.has_issues
    if step == StepId.PROJECTS_CORRECTION:
        return validation.projects_need_correction
    return True


def create_nodes(
    llm_provider: LLMProvider | None,
    progress: ProgressChannel | None = None,
    api_key: str | None = None,
    max_document_bytes: int | None = None,
) -> dict[StepId, NodeFunction]:
    """Create all workflow nodes with the given LLM provider.

    Args:
        llm_provider: Provider for the generation stages. May be None when
            the provider name is invalid; the validation node then stops the run.
        progress: Channel receiving progress updates.
        api_key: API key the provider was built with, checked by validation.
        max_document_bytes: Upload size limit for file processing.

    Returns:
        Node function per pipeline step, in stage order.
    """
    language_detector = LanguageDetector(llm_provider)
    requirements_analyzer = RequirementsAnalyzer(llm_provider)
    profile_customizer = ProfileCustomizer(llm_provider)
    competencies_customizer = CompetenciesCustomizer(llm_provider)
    projects_customizer = ProjectsCustomizer(llm_provider)
    evaluator = CVEvaluator(llm_provider)
    content_validator = ContentValidator(llm_provider)
    profile_corrector = ProfileCorrector(llm_provider)
    competencies_corrector = CompetenciesCorrector(llm_provider)
    projects_corrector = ProjectsCorrector(llm_provider)

    def validation(state: CustomizationState) -> StageOutcome:
        errors = check_run_parameters(state, api_key)
        if errors:
            raise InputError("; ".join(errors))
        return {}, "Input validation completed successfully", None

    def file_processing(state: CustomizationState) -> StageOutcome:
        content, filename = state["cv_upload"]
        cv_document = load_document(content, filename, max_bytes=max_document_bytes)
        requirement_documents = [
            load_document(req_content, req_name, max_bytes=max_document_bytes)
            for req_content, req_name in state["requirement_uploads"]
        ]
        message = f"Successfully processed {len(requirement_documents)} customer files and CV"
        updates = {"cv_document": cv_document, "requirement_documents": requirement_documents}
        return updates, message, {"customer_files": len(requirement_documents)}

    def language_detection(state: CustomizationState) -> StageOutcome:
        language = language_detector.detect(state["cv_document"])
        message = (
            f"Detected language: {language.language} "
            f"({language.confidence * 100:.0f}% confidence)"
        )
        data = {
            "language": language.language,
            "language_code": language.language_code,
            "confidence": language.confidence,
        }
        return {"language": language}, message, data

    def requirements_analysis(state: CustomizationState) -> StageOutcome:
        requirements = requirements_analyzer.analyze(
            state["requirement_documents"], state["language"]
        )
        must = len(requirements.must_have_requirements)
        should = len(requirements.should_have_requirements)
        message = f"Found {must} must-have and {should} should-have requirements"
        data = {"must_have_count": must, "should_have_count": should}
        return {"customer_requirements": requirements}, message, data

    def profile_customization(state: CustomizationState) -> StageOutcome:
        profile = profile_customizer.customize(
            state["cv_document"], state["customer_requirements"], state["language"]
        )
        return {"profile_customization": profile}, "CV profile customization completed", None

    def competencies_customization(state: CustomizationState) -> StageOutcome:
        competencies = competencies_customizer.customize(
            state["cv_document"], state["customer_requirements"], state["language"]
        )
        count = len(competencies.relevant_competencies)
        return (
            {"key_competencies": competencies},
            f"Identified {count} relevant competencies",
            {"relevant_count": count},
        )

    def projects_customization(state: CustomizationState) -> StageOutcome:
        projects = projects_customizer.customize(
            state["cv_document"], state["customer_requirements"], state["language"]
        )
        return (
            {"customized_projects": projects},
            f"Customized {len(projects)} project descriptions",
            {"projects_count": len(projects)},
        )

    def evaluation(state: CustomizationState) -> StageOutcome:
        result = evaluator.evaluate(
            state["customer_requirements"],
            state["profile_customization"],
            state["key_competencies"],
            state["customized_projects"],
            state["language"],
        )
        return (
            {"evaluation": result},
            f"Evaluation completed with overall score: {result.overall_score:g}/10",
            {"overall_score": result.overall_score},
        )

    def content_validation(state: CustomizationState) -> StageOutcome:
        result = content_validator.validate(
            state["cv_document"],
            state["profile_customization"],
            state["key_competencies"],
            state["customized_projects"],
            state["language"],
        )
        overall = result.overall_validation
        verdict = "passed" if overall.passes_validation else "failed"
        return (
            {"validation": result},
            f"Content validation {verdict} (confidence: {overall.confidence_score:g}/10)",
            {"passes": overall.passes_validation, "confidence": overall.confidence_score},
        )

    def profile_correction(state: CustomizationState) -> StageOutcome:
        correction = profile_corrector.correct(
            state["cv_document"],
            state["profile_customization"],
            state["validation"].profile_validation,
            state["customer_requirements"],
            state["language"],
        )
        return (
            {"profile_correction": correction},
            f"Profile corrected - {len(correction.changes_made)} changes made",
            {
                "changes_made": len(correction.changes_made),
                "confidence": correction.confidence_score,
            },
        )

    def competencies_correction(state: CustomizationState) -> StageOutcome:
        correction = competencies_corrector.correct(
            state["cv_document"],
            state["key_competencies"],
            state["validation"].competencies_validation,
            state["customer_requirements"],
            state["language"],
        )
        removed = len(correction.removed_competencies)
        return (
            {"competencies_correction": correction},
            f"Competencies corrected - {removed} unsupported items removed",
            {"removed_count": removed, "confidence": correction.confidence_score},
        )

    def projects_correction(state: CustomizationState) -> StageOutcome:
        correction = projects_corrector.correct(
            state["cv_document"],
            state["customized_projects"],
            state["validation"].projects_validation,
            state["customer_requirements"],
            state["language"],
        )
        summary = correction.correction_summary
        return (
            {"projects_correction": correction},
            f"Projects corrected - {summary.total_projects_corrected} projects updated",
            {
                "projects_corrected": summary.total_projects_corrected,
                "confidence": summary.confidence_score,
            },
        )

    def correction_check(state: CustomizationState) -> StageOutcome:
        profile = state["profile_customization"]
        competencies = state["key_competencies"]
        projects = state["customized_projects"]
        validation_result = state["validation"]
        report = None

        if validation_result.overall_validation.passes_validation:
            message = "No correction needed - validation passed"
            data = None
        else:
            report = build_correction_report(
                profile,
                competencies,
                projects,
                state.get("profile_correction"),
                state.get("competencies_correction"),
                state.get("projects_correction"),
            )
            profile, competencies, projects = apply_corrections(
                profile, competencies, projects, report
            )
            summary = report.correction_summary
            message = f"Content correction completed - {summary.total_issues_fixed} issues fixed"
            data = {
                "issues_fixed": summary.total_issues_fixed,
                "confidence": summary.confidence_score,
            }

        result = CustomizationResult(
            customer_requirements=state["customer_requirements"],
            profile_customization=profile,
            key_competencies=competencies,
            customized_projects=projects,
            evaluation=state["evaluation"],
            validation=validation_result,
            language_code=state["language"].language_code,
            correction=report,
        )
        return {"correction": report, "result": result}, message, data

    stage_functions: dict[StepId, Callable[[CustomizationState], StageOutcome]] = {
        StepId.VALIDATION: validation,
        StepId.FILE_PROCESSING: file_processing,
        StepId.LANGUAGE_DETECTION: language_detection,
        StepId.REQUIREMENTS_ANALYSIS: requirements_analysis,
        StepId.PROFILE_CUSTOMIZATION: profile_customization,
        StepId.COMPETENCIES_CUSTOMIZATION: competencies_customization,
        StepId.PROJECTS_CUSTOMIZATION: projects_customization,
        StepId.EVALUATION: evaluation,
        StepId.CONTENT_VALIDATION: content_validation,
        StepId.PROFILE_CORRECTION: profile_correction,
        StepId.COMPETENCIES_CORRECTION: competencies_correction,
        StepId.PROJECTS_CORRECTION: projects_correction,
        StepId.CORRECTION_CHECK: correction_check,
    }

    optional_steps = {
        StepId.PROFILE_CORRECTION,
        StepId.COMPETENCIES_CORRECTION,
        StepId.PROJECTS_CORRECTION,
    }

    return {
        stage.step: _wrap_stage(
            stage,
            stage_functions[stage.step],
            progress,
            skippable=stage.step in optional_steps,
        )
        for stage in STAGES
    }


def _wrap_stage(
    stage: StageDescriptor,
    run: Callable[[CustomizationState], StageOutcome],
    progress: ProgressChannel | None,
    skippable: bool = False,
) -> NodeFunction:
    """Turn a stage function into a node that reports progress and failures."""
    step = stage.step

    def node(state: CustomizationState) -> dict:
        try:
            return run_stage(state)
        except Exception as e:
            logger.exception("%s failed unexpectedly", step.value)
            return _fail(state, stage, progress, f"Unexpected error: {e}", INTERNAL_FAILURE)

    def run_stage(state: CustomizationState) -> dict:
        if skippable and not correction_needed(step, state):
            logger.info("Skipping %s: nothing to correct", step.value)
            return {"current_step": step.value}

        start_time = time.time()
        emit_progress(progress, step, "starting", STARTING_MESSAGES[step], stage.start_progress)

        try:
            updates, message, data = run(state)
        except InputError as e:
            logger.error("%s failed: %s", step.value, e)
            return _fail(state, stage, progress, str(e), INPUT_FAILURE)
        except StageFailure as e:
            cause = str(e.__cause__) if e.__cause__ else None
            return _fail(state, stage, progress, e.message, e.kind.value, cause)

        emit_progress(progress, step, "completed", message, stage.done_progress, data)

        end_time = time.time()
        timing = StepTiming(
            step_name=step.value,
            start_time=start_time,
            end_time=end_time,
            duration_seconds=end_time - start_time,
        )
        updates.update(
            current_step=step.value,
            last_progress=stage.done_progress,
            step_timings=state.get("step_timings", []) + [timing],
        )
        return updates

    node.__name__ = step.value
    return node


def _fail(
    state: CustomizationState,
    stage: StageDescriptor,
    progress: ProgressChannel | None,
    message: str,
    kind: str,
    cause: str | None = None,
) -> dict:
    # The starting update already moved progress to start_progress
    emit_progress(progress, stage.step, "error", message, stage.start_progress)
    return {
        "current_step": stage.step.value,
        "last_progress": stage.start_progress,
        "errors": state.get("errors", []) + [message],
        "failed_step": stage.step.value,
        "failure_kind": kind,
        "failure_cause": cause,
    }
