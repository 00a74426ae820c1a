"""
Coaching response composition.

An entry and its owner's history are reduced to a `CoachingContext` value
object. The same object is rendered either into a prompt for the text
generator or, when generation fails, into a templated fallback, so both paths
always describe the same situation and severity.
"""

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Sequence

from journal_coach.analysis.context import EntryContext, classify
from journal_coach.analysis.patterns import (
    EFFECTIVE_STRATEGY_THRESHOLD,
    PersonalPatterns,
    analyze_personal_patterns,
)
from journal_coach.analysis.scoring import (
    CapabilityAssessment,
    assess_capability,
    success_rate,
)
from journal_coach.analysis.similarity import SimilarityResult, find_similar_entries
from journal_coach.analysis.strategies import (
    FEELING_BETTER_KEY,
    WHAT_HELPED_KEY,
    StrategyStat,
    analyze_coping_strategies,
    follow_up_answer,
    rank_strategies,
)
from journal_coach.core.errors import ExternalServiceUnavailable
import journal_coach.coaching.prompts.coaching_prompt_templates as prompts
import journal_coach.coaching.prompts.fallback_templates as fallbacks

logger = logging.getLogger(__name__)

MAX_PROMPT_STRATEGIES = 5
MAX_PROMPT_SIMILAR = 3
MAX_FALLBACK_STRATEGIES = 3


class CoachingKind(str, Enum):
    COACHING = "coaching"
    FOLLOW_UP = "followup"
    PERSONALIZED = "personalized"
    CAPABILITY = "capability"


@dataclass(frozen=True)
class CoachingContext:
    content: str
    mood: Optional[str]
    tags: List[str]
    entry_context: EntryContext
    similar: List[SimilarityResult] = field(default_factory=list)
    strategies: List[StrategyStat] = field(default_factory=list)
    patterns: PersonalPatterns = field(default_factory=PersonalPatterns)
    capability: Optional[CapabilityAssessment] = None
    insight: Optional[str] = None

    @property
    def situation(self) -> str:
        return self.entry_context.situation

    @property
    def severity(self) -> str:
        return self.entry_context.severity

    @property
    def similar_count(self) -> int:
        return len(self.similar)


@dataclass(frozen=True)
class ComposedResponse:
    text: str
    source: str  # "generated" or "fallback"


def build_coaching_context(entry, history: Sequence) -> CoachingContext:
    """
    Runs the journal heuristics for one entry against its owner's history.

    Args:
        entry: Entry being coached on.
        history (Sequence): All of the owner's entries; the entry itself is skipped.

    Returns:
        CoachingContext: Everything the prompt and fallback renderers need.
    """
    entry_context = classify(entry)
    similar = find_similar_entries(entry, history)
    similar_entries = [r.entry for r in similar]
    stats = analyze_coping_strategies(similar_entries)
    return CoachingContext(
        content=entry.content or "",
        mood=entry.mood,
        tags=list(entry.tags or []),
        entry_context=entry_context,
        similar=similar,
        strategies=rank_strategies(stats),
        patterns=analyze_personal_patterns(similar_entries, stats),
        capability=assess_capability(entry_context, similar),
        insight=entry.ai_insight,
    )


# Shared fragments
def render_context_summary(ctx: CoachingContext) -> str:
    return prompts.CONTEXT_SUMMARY_TEMPLATE.format(
        severity=ctx.severity,
        situation=ctx.situation,
        emotional_intensity=ctx.entry_context.emotional_intensity,
        key_concerns=ctx.entry_context.concerns_text,
    )


def render_similar_summary(ctx: CoachingContext) -> str:
    if not ctx.similar:
        return prompts.NO_SIMILAR_SUMMARY
    top = ctx.similar[0].context
    return prompts.SIMILAR_SUMMARY_TEMPLATE.format(
        count=ctx.similar_count,
        situation=top.situation,
        emotional_intensity=top.emotional_intensity,
    )


def _entry_block(ctx: CoachingContext) -> str:
    return prompts.ENTRY_BLOCK_TEMPLATE.format(
        content=ctx.content,
        mood=ctx.mood or prompts.NONE_TEXT,
        tags=", ".join(ctx.tags) or prompts.NONE_TEXT,
    )


def _strategy_lines(ctx: CoachingContext) -> str:
    effective = [s for s in ctx.strategies if s.effectiveness >= EFFECTIVE_STRATEGY_THRESHOLD]
    lines = [
        prompts.STRATEGY_LINE_TEMPLATE.format(
            name=s.name, effectiveness=s.effectiveness, attempts=s.attempts
        )
        for s in effective[:MAX_PROMPT_STRATEGIES]
    ]
    return "\n".join(lines) or prompts.NONE_TEXT


def _similar_lines(ctx: CoachingContext) -> str:
    lines = []
    for result in ctx.similar[:MAX_PROMPT_SIMILAR]:
        entry = result.entry
        what_helped = follow_up_answer(entry, WHAT_HELPED_KEY)
        feeling_better = follow_up_answer(entry, FEELING_BETTER_KEY)
        lines.append(
            prompts.SIMILAR_LINE_TEMPLATE.format(
                content=entry.content,
                mood=entry.mood or prompts.NONE_TEXT,
                what_helped=what_helped or prompts.NOT_SPECIFIED,
                feeling_better=prompts.UNKNOWN if feeling_better is None else feeling_better,
            )
        )
    return "\n".join(lines) or prompts.NONE_TEXT


def top_strategy_names(ctx: CoachingContext, limit: int = MAX_FALLBACK_STRATEGIES) -> List[str]:
    return [s.name for s in ctx.strategies if s.successes > 0][:limit]


def _success_rate_text(ctx: CoachingContext) -> str:
    rate = success_rate(ctx.similar)
    return prompts.NOT_AVAILABLE if rate is None else f"{rate * 100:.1f}%"


def _capability(ctx: CoachingContext) -> CapabilityAssessment:
    return ctx.capability or assess_capability(ctx.entry_context, ctx.similar)


# Prompt path
def render_prompt(kind: CoachingKind, ctx: CoachingContext, question: Optional[str] = None) -> str:
    """Renders the generation prompt for a coaching request."""
    context_summary = render_context_summary(ctx)

    if kind == CoachingKind.COACHING:
        return prompts.COACHING_PROMPT_TEMPLATE.format(
            entry_block=_entry_block(ctx), context_summary=context_summary
        )

    if kind == CoachingKind.FOLLOW_UP:
        return prompts.FOLLOW_UP_PROMPT_TEMPLATE.format(
            content=ctx.content,
            insight=ctx.insight or prompts.NONE_TEXT,
            context_summary=context_summary,
            question=question or "",
        )

    if kind == CoachingKind.PERSONALIZED:
        patterns = ctx.patterns
        return prompts.PERSONALIZED_PROMPT_TEMPLATE.format(
            entry_block=_entry_block(ctx),
            context_summary=context_summary,
            similar_summary=render_similar_summary(ctx),
            similar_count=ctx.similar_count,
            effective_strategies=", ".join(patterns.effective_strategies) or prompts.NONE_TEXT,
            common_triggers=", ".join(patterns.top_triggers()) or prompts.NONE_TEXT,
            growth_indicators=", ".join(patterns.growth_indicators) or prompts.NONE_TEXT,
            strategy_lines=_strategy_lines(ctx),
            similar_lines=_similar_lines(ctx),
        )

    capability = _capability(ctx)
    return prompts.CAPABILITY_PROMPT_TEMPLATE.format(
        entry_block=_entry_block(ctx),
        context_summary=context_summary,
        similar_summary=render_similar_summary(ctx),
        capability_score=capability.score,
        difficulty_score=capability.factors.get("difficultyScore", prompts.NOT_AVAILABLE),
        success_rate=_success_rate_text(ctx),
        top_strategies=", ".join(s.name for s in ctx.strategies[:3]) or prompts.NONE_TEXT,
    )


# Fallback path
def render_fallback(kind: CoachingKind, ctx: CoachingContext, question: Optional[str] = None) -> str:
    """Renders the deterministic response used when generation is unavailable."""
    strategies = ", ".join(top_strategy_names(ctx))
    strategy_step = (
        fallbacks.STRATEGY_STEP_WITH_HISTORY.format(strategies=strategies)
        if strategies else fallbacks.STRATEGY_STEP_DEFAULT
    )
    strategy_advice = (
        fallbacks.STRATEGY_ADVICE_WITH_HISTORY.format(strategies=strategies)
        if strategies else fallbacks.STRATEGY_ADVICE_DEFAULT
    )
    common = {"severity": ctx.severity, "situation": ctx.situation}

    if kind == CoachingKind.COACHING:
        return fallbacks.COACHING_FALLBACK_TEMPLATE.format(
            **common,
            situation_title=ctx.situation.capitalize(),
            key_concerns=ctx.entry_context.concerns_text,
            strategy_step=strategy_step,
        )

    if kind == CoachingKind.FOLLOW_UP:
        return fallbacks.FOLLOW_UP_FALLBACK_TEMPLATE.format(**common, strategy_advice=strategy_advice)

    if kind == CoachingKind.PERSONALIZED:
        if ctx.similar:
            return fallbacks.PERSONALIZED_FALLBACK_WITH_HISTORY.format(
                **common, similar_count=ctx.similar_count, strategy_advice=strategy_advice
            )
        return fallbacks.PERSONALIZED_FALLBACK_NEW.format(**common)

    capability = _capability(ctx)
    evidence = (
        fallbacks.CAPABILITY_EVIDENCE_WITH_HISTORY.format(similar_count=ctx.similar_count)
        if ctx.similar else fallbacks.CAPABILITY_EVIDENCE_NEW
    )
    return fallbacks.CAPABILITY_FALLBACK_TEMPLATE.format(
        **common,
        capability_score=capability.score,
        evidence=evidence,
        strategy_step=strategy_step,
    )


def compose(
    kind: CoachingKind,
    ctx: CoachingContext,
    generator,
    question: Optional[str] = None,
) -> ComposedResponse:
    """
    Produces coaching text, falling back to the template when generation fails.

    Args:
        kind (CoachingKind): Which coaching response to produce.
        ctx (CoachingContext): Derived signals for the entry.
        generator: Object with `generate(prompt) -> str` raising ExternalServiceUnavailable.
        question (Optional[str]): Follow-up question, for CoachingKind.FOLLOW_UP.

    Returns:
        ComposedResponse: Generated text verbatim, or the rendered fallback.
    """
    prompt = render_prompt(kind, ctx, question)
    try:
        return ComposedResponse(text=generator.generate(prompt), source="generated")
    except ExternalServiceUnavailable as e:
        logger.warning(f"Generation unavailable for {kind.value}, using fallback: {e}")
        return ComposedResponse(text=render_fallback(kind, ctx, question), source="fallback")
