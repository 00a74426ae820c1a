SYSTEM_PROMPT: str = (
    "You are a compassionate, professional life coach responding to journal entries. "
    "Be specific to what the person wrote, mature and practical. Avoid generic advice."
)

# 🧾 Shared fragments
CONTEXT_SUMMARY_TEMPLATE = (
    "This person is dealing with a {severity} {situation} situation.\n"
    "The emotional intensity level is {emotional_intensity}/5.\n"
    "Key concerns mentioned: {key_concerns}"
)

ENTRY_BLOCK_TEMPLATE = '"{content}"\nMood: {mood}\nTags: {tags}'

SIMILAR_SUMMARY_TEMPLATE = (
    "Found {count} similar situations in your journal history.\n"
    "Most similar: {situation} situation with {emotional_intensity}/5 emotional intensity."
)
NO_SIMILAR_SUMMARY = "This appears to be a new type of challenge for you."

STRATEGY_LINE_TEMPLATE = '- "{name}" ({effectiveness:.1f}/10 effectiveness, used {attempts} times)'
SIMILAR_LINE_TEMPLATE = (
    '- "{content}" ({mood}) - What helped: "{what_helped}" - Felt better: {feeling_better}'
)

# 💬 Coaching
COACHING_PROMPT_TEMPLATE = """The person has shared this journal entry:

{entry_block}

IMPORTANT CONTEXT FROM THEIR JOURNAL HISTORY:
{context_summary}

Please provide thoughtful, professional advice that acknowledges the seriousness of their situation. This is NOT a casual conversation - this person is dealing with real life challenges.

Structure your response with:
**Understanding** - Acknowledge the gravity of their situation
**Professional Perspective** - Provide mature, adult-level insight
**Practical Steps** - Give 2-3 specific, actionable steps
**Supportive Message** - End with genuine encouragement

Keep it professional, mature, and genuinely helpful."""

# 🔁 Follow-up question
FOLLOW_UP_PROMPT_TEMPLATE = """You are having a conversation with someone who just shared this journal entry:

Original Journal Entry: "{content}"
Original Insight: "{insight}"

Situation: {context_summary}

The person is now asking this follow-up question: "{question}"

Please provide a thoughtful, encouraging response that builds on the previous insight. Keep it warm, practical, and supportive. Keep your response concise (2-3 sentences maximum) and easy to read."""

# 🧭 Personalized coaching
PERSONALIZED_PROMPT_TEMPLATE = """The person has shared this journal entry:

{entry_block}

REAL ANALYSIS OF THEIR SITUATION:
{context_summary}

SIMILAR SITUATIONS FROM THEIR HISTORY:
{similar_summary}

PERSONAL PATTERN ANALYSIS:
- Similar past experiences: {similar_count}
- Most effective coping strategies: {effective_strategies}
- Common triggers: {common_triggers}
- Growth indicators: {growth_indicators}

PAST SUCCESSFUL STRATEGIES (ranked by effectiveness):
{strategy_lines}

SIMILAR PAST EXPERIENCES:
{similar_lines}

Based on their actual journal content and history, provide personalized advice that:
1. Acknowledges the specific nature of their current challenge
2. References their real past experiences if relevant
3. Recommends strategies that have worked for them before
4. Gives practical, adult-level guidance

Structure with:
**Personal Recognition** - Show you understand their specific situation
**Historical Context** - Reference their real past experiences if relevant
**Tailored Advice** - Give advice specific to their situation
**Encouragement** - Support based on their real patterns"""

# 📊 Capability assessment
CAPABILITY_PROMPT_TEMPLATE = """You are assessing someone's capability to handle a challenging situation.

JOURNAL ENTRY: {entry_block}

REAL SITUATION ANALYSIS:
{context_summary}

SIMILAR SITUATIONS FROM THEIR HISTORY:
{similar_summary}

CAPABILITY SCORE: {capability_score}/10
PERSONAL DIFFICULTY SCORE: {difficulty_score}/10
SUCCESS RATE WITH SIMILAR ISSUES: {success_rate}
PROVEN COPING STRATEGIES: {top_strategies}

Based on their actual journal content and history, provide a professional capability assessment that:
1. Acknowledges the real gravity of their situation
2. References their actual past experiences if relevant
3. Gives an honest, realistic assessment of their capability
4. Provides specific, actionable guidance

Structure with:
**Situation Assessment** - Professional evaluation of the challenge
**Capability Analysis** - Honest assessment based on their real history
**Evidence-Based Insights** - What their journal actually shows about their capabilities
**Professional Recommendations** - Specific, actionable advice"""

NONE_TEXT = "None"
NOT_SPECIFIED = "Not specified"
UNKNOWN = "Unknown"
NOT_AVAILABLE = "N/A"
