"""
Attempt grading engine.

Runs every question of an attempt through

    display mapping -> answer translation -> type evaluator

and aggregates the results. Failures are contained per question:

- UngradedQuestionError / invalid question data -> status "ungraded",
  excluded from the denominator
- MappingError / InvalidInputError in the submission -> status "error",
  incorrect with zero points
- missing answer -> status "unanswered", incorrect with zero points

Only a structurally invalid attempt (AttemptStructureError) aborts the call.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from typing import Any

from loguru import logger

from config import Settings, get_settings

from ..exceptions import (
    AttemptStructureError,
    InsufficientDataError,
    InvalidInputError,
    MappingError,
    QuizEngineError,
    UngradedQuestionError,
)
from ..models import Attempt, Question, QuestionType
from ..randomization.randomizer import display_mapping
from ..scoring.aggregator import ScoreReport, aggregate
from . import get_evaluator
from .base import EvaluationResult, ResultStatus
from .translator import to_canonical


@dataclass
class AttemptGrade:
    """Per-question results and the score report for one attempt."""
    attempt_id: str
    results: list[EvaluationResult] = field(default_factory=list)
    report: ScoreReport | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "attempt_id": self.attempt_id,
            "results": [r.to_dict() for r in self.results],
            "report": self.report.to_dict() if self.report else None,
        }


def _record_id(record: Any) -> str:
    if isinstance(record, Question):
        return record.id
    if isinstance(record, Mapping):
        return str(record.get("id", "?"))
    return "?"


def _record_type(record: Any) -> QuestionType | None:
    raw = record.get("type", record.get("question_type")) if isinstance(record, Mapping) else None
    try:
        return QuestionType(raw)
    except ValueError:
        return None


class GradingEngine:
    """
    Grades submitted attempts.

    Stateless apart from its settings: one engine may grade many attempts,
    concurrently if desired.
    """

    def __init__(self, settings: Settings | None = None):
        self.settings = settings or get_settings()

    # =========================================================================
    # Single question
    # =========================================================================

    def evaluate_question(
        self,
        question: Question | Mapping[str, Any],
        raw_answer: Any,
        attempt_id: str,
    ) -> EvaluationResult:
        """
        Evaluate one question of an attempt.

        Args:
            question: Question model or raw record
            raw_answer: Display-space answer, None if unanswered
            attempt_id: Attempt identifier (seeds the display mapping)

        Returns:
            EvaluationResult (never raises for per-question problems)
        """
        try:
            question = Question.from_record(question)
        except InvalidInputError as e:
            logger.warning(f"Question {_record_id(question)} skipped: {e}")
            return EvaluationResult(
                question_id=_record_id(question),
                question_type=_record_type(question),
                is_correct=False,
                points_awarded=0,
                points_possible=0,
                status=ResultStatus.UNGRADED,
                answered_display=raw_answer,
                error=str(e),
            )

        evaluator = get_evaluator(question.type)
        settings = self.settings
        result = EvaluationResult(
            question_id=question.id,
            question_type=question.type,
            is_correct=False,
            points_awarded=0,
            points_possible=question.points,
            answered_display=raw_answer,
        )

        try:
            result.correct_answer_display = evaluator.describe(question, settings)
        except QuizEngineError as e:
            logger.warning(f"Question {question.id}: correct answer cannot be described: {e}")

        try:
            evaluator.answer_key(question, settings)
        except UngradedQuestionError as e:
            logger.info(str(e))
            result.status = ResultStatus.UNGRADED
            result.error = e.reason
            result.feedback = "Awaiting manual grading"
            return result

        if raw_answer is None:
            result.status = ResultStatus.UNANSWERED
            result.feedback = "Not answered"
            return result

        try:
            mapping = display_mapping(question, attempt_id)
            options = question.items if question.type is QuestionType.ORDERING else None
            canonical = to_canonical(raw_answer, mapping, question.type, options=options)
            result.answered_canonical = canonical
            evaluation = evaluator.evaluate(question, canonical, settings)
        except InsufficientDataError as e:
            logger.info(f"Question {question.id} cannot be displayed: {e}")
            result.status = ResultStatus.UNGRADED
            result.error = str(e)
            return result
        except UngradedQuestionError as e:
            logger.info(str(e))
            result.status = ResultStatus.UNGRADED
            result.error = e.reason
            return result
        except MappingError as e:
            logger.warning(f"Attempt {attempt_id}, question {question.id}: stale or corrupt answer: {e}")
            result.status = ResultStatus.ERROR
            result.error = str(e)
            result.feedback = "Answer could not be matched to the displayed items"
            return result
        except InvalidInputError as e:
            logger.warning(f"Attempt {attempt_id}, question {question.id}: malformed answer: {e}")
            result.status = ResultStatus.ERROR
            result.error = str(e)
            result.feedback = "Answer has the wrong shape for this question"
            return result

        result.is_correct = evaluation.is_correct
        result.points_awarded = max(0, min(question.points, evaluation.points_awarded))
        result.feedback = evaluation.feedback
        result.details = evaluation.details
        return result

    # =========================================================================
    # Whole attempt
    # =========================================================================

    def grade_attempt(
        self,
        questions: Sequence[Question | Mapping[str, Any]],
        attempt: Attempt | Mapping[str, Any],
        passing_score: int | None = None,
    ) -> AttemptGrade:
        """
        Grade every question of an attempt and aggregate the score.

        Questions absent from the attempt's answers are graded as
        unanswered. Results keep the order of ``questions``.
        ``passing_score`` is the quiz's pass mark as a percentage.

        Raises:
            AttemptStructureError: The attempt or question list is unusable
        """
        if isinstance(questions, (str, bytes)) or not isinstance(questions, Sequence):
            raise AttemptStructureError("Questions must be a list of question records")
        attempt = Attempt.from_record(attempt)
        answers = attempt.answers

        known = {_record_id(q) for q in questions}
        stray = [qid for qid in answers if qid not in known]
        if stray:
            logger.debug(f"Attempt {attempt.attempt_id}: ignoring answers for unknown questions {stray}")

        def run(question: Question | Mapping[str, Any]) -> EvaluationResult:
            return self.evaluate_question(question, answers.get(_record_id(question)), attempt.attempt_id)

        workers = self.settings.grading_max_workers
        if workers > 1 and len(questions) > 1:
            with ThreadPoolExecutor(max_workers=workers) as pool:
                results = list(pool.map(run, questions))
        else:
            results = [run(q) for q in questions]

        report = aggregate(
            results,
            {r.question_id: r.points_possible for r in results if r.is_gradeable},
            passing_score=passing_score,
        )
        logger.info(
            f"Attempt {attempt.attempt_id}: {report.points_earned}/{report.points_possible} pts "
            f"({report.percentage}%), {report.ungraded_count} ungraded"
        )
        return AttemptGrade(attempt_id=attempt.attempt_id, results=results, report=report)


def grade_attempt(
    questions: Sequence[Question | Mapping[str, Any]],
    attempt: Attempt | Mapping[str, Any],
    settings: Settings | None = None,
    passing_score: int | None = None,
) -> AttemptGrade:
    """Grade an attempt with a one-off engine."""
    return GradingEngine(settings).grade_attempt(questions, attempt, passing_score)
