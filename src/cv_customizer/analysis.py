"""Quality analysis of a consultant CV.

The CV language is detected first. The five criterion agents then rate the
CV in parallel, and their ratings are combined into one ``CVAnalysis`` with
an overall score, strengths, improvement areas and a written summary.
"""

import logging
import time
from concurrent.futures import ThreadPoolExecutor

from cv_customizer.agents.language import LanguageDetector
from cv_customizer.agents.quality import (
    CRITERION_AGENTS,
    AnalysisSummarizer,
    key_improvement_areas,
    key_strengths,
    overall_score,
)
from cv_customizer.config import get_settings
from cv_customizer.documents import InputError, load_document
from cv_customizer.llm.base import LLMProvider, get_llm_provider
from cv_customizer.llm.catalog import default_model, model_choice_errors
from cv_customizer.models.document import SourceDocument
from cv_customizer.models.quality import CVAnalysis, Criterion, CriterionRating
from cv_customizer.prompts.checklists import (
    ASSIGNMENTS_CHECKLISTS,
    DEFAULT_CHECKLIST,
    SUMMARY_CHECKLISTS,
)

logger = logging.getLogger(__name__)

Upload = tuple[bytes, str]


def analyze_cv(
    llm_provider: LLMProvider,
    cv: SourceDocument,
    summary_checklist: str,
    assignments_checklist: str,
) -> CVAnalysis:
    """Rate a loaded CV on every criterion and combine the ratings.

    Args:
        llm_provider: Provider for every generation call.
        cv: The CV document.
        summary_checklist: Guidelines for the summary criterion.
        assignments_checklist: Guidelines for the project descriptions criterion.

    Returns:
        CVAnalysis with one rating per criterion.

    Raises:
        CriterionFailed: If any criterion could not be rated.
    """
    language = LanguageDetector(llm_provider).detect(cv)
    checklists = {
        Criterion.SUMMARY_QUALITY: summary_checklist,
        Criterion.PROJECT_DESCRIPTIONS: assignments_checklist,
    }

    def rate(criterion: Criterion) -> CriterionRating:
        agent = CRITERION_AGENTS[criterion](llm_provider)
        return agent.rate(cv, language, checklists.get(criterion, ""))

    # The criteria are independent; run the calls concurrently
    criteria = list(Criterion)
    with ThreadPoolExecutor(max_workers=len(criteria)) as executor:
        ratings = list(zip(criteria, executor.map(rate, criteria)))

    score = overall_score(ratings)
    summary = AnalysisSummarizer(llm_provider).summarize(ratings, score, language)

    return CVAnalysis(
        language_code=language.language_code,
        overall_score=score,
        summary=summary,
        key_strengths=key_strengths(ratings),
        key_improvement_areas=key_improvement_areas(ratings),
        **{criterion.value: rating for criterion, rating in ratings},
    )


def run_cv_analysis(
    cv: Upload | None,
    provider: str | None = None,
    model: str | None = None,
    api_key: str | None = None,
    summary_checklist: str | None = None,
    assignments_checklist: str | None = None,
) -> CVAnalysis:
    """Analyze the quality of a CV.

    Args:
        cv: CV file content and filename.
        provider: LLM provider name. Defaults to the configured provider.
        model: Model name. Defaults like ``run_cv_customization``.
        api_key: API key for the provider. Defaults to the configured key.
        summary_checklist: Summary guidelines text. Defaults to the default checklist.
        assignments_checklist: Project description guidelines text. Defaults to the
            default checklist.

    Returns:
        The completed CVAnalysis.

    Raises:
        InputError: If the upload or the provider/model choice is invalid.
        CriterionFailed: If any criterion could not be rated.
    """
    settings = get_settings()
    provider = provider or settings.provider
    if model is None:
        if provider == settings.provider:
            model = settings.model
        else:
            model = default_model(provider, pdf_only=False).model
    api_key = api_key or settings.api_key_for(provider)

    errors = [] if cv else ["CV file is missing"]
    errors += model_choice_errors(provider, model, api_key)
    if errors:
        raise InputError("; ".join(errors))

    content, filename = cv
    document = load_document(content, filename, settings.max_document_bytes)
    llm_provider = get_llm_provider(provider, model, api_key, timeout=settings.request_timeout)

    start_time = time.time()
    analysis = analyze_cv(
        llm_provider,
        document,
        summary_checklist or SUMMARY_CHECKLISTS[DEFAULT_CHECKLIST].content,
        assignments_checklist or ASSIGNMENTS_CHECKLISTS[DEFAULT_CHECKLIST].content,
    )
    logger.info(
        "CV analysis completed in %.1fs (score %.1f/10)",
        time.time() - start_time,
        analysis.overall_score,
    )
    return analysis
