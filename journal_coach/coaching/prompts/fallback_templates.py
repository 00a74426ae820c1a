# 🪂 Templated responses used when text generation is unavailable

COACHING_FALLBACK_TEMPLATE = """**Understanding:**
I can see you're dealing with a {severity} {situation} situation. This is a real, significant challenge that deserves serious attention.

**Professional Perspective:**
Based on what you've shared, this isn't a minor issue that can be solved with simple advice. {situation_title} challenges require thoughtful, strategic approaches. Key concerns: {key_concerns}.

**Practical Steps:**
1. Take time to process your emotions - this is a legitimate stressor
2. {strategy_step}
3. Focus on one small step at a time rather than trying to solve everything at once

**Supportive Message:**
Your feelings are valid, and it's okay to need support during difficult times. You're taking the right step by journaling about this."""

PERSONALIZED_FALLBACK_WITH_HISTORY = """**Personal Recognition:**
I can see this is a {severity} {situation} challenge. Based on your journal history, you've faced similar situations before.

**Historical Context:**
You've navigated {similar_count} similar challenges in the past. This shows you have experience with this type of situation.

**Tailored Advice:**
Since this isn't your first time dealing with {situation} challenges, draw on what you've learned from previous experiences. {strategy_advice}

**Encouragement:**
Your past experiences prove you have the capability to handle this. You're not starting from zero - you have a foundation of resilience."""

PERSONALIZED_FALLBACK_NEW = """**Personal Recognition:**
This appears to be a new type of challenge for you: a {severity} {situation} situation. It's completely normal to feel uncertain when facing unfamiliar situations.

**Historical Context:**
While this specific situation is new, you've shown resilience in other areas of your life through your journaling.

**Tailored Advice:**
Approach this as a learning experience. Start small, be patient with yourself, and don't hesitate to seek support.

**Encouragement:**
Facing new challenges shows courage and growth. You're building new capabilities with each step you take."""

CAPABILITY_FALLBACK_TEMPLATE = """**Situation Assessment:**
You're dealing with a {severity} {situation} challenge. This is a legitimate, significant life situation that requires serious attention.

**Capability Analysis:**
Your capability score is {capability_score}/10. This assessment is based on your actual journal content and history, not generic assumptions.

**Evidence-Based Insights:**
{evidence}

**Professional Recommendations:**
1. Acknowledge the real gravity of your situation - this isn't a minor issue
2. {strategy_step}
3. Consider seeking professional support if this continues to impact your daily life
4. Focus on one small step at a time rather than trying to solve everything at once

**Realistic Assessment:**
Your capability score of {capability_score}/10 reflects that while this is a challenging situation, you have tools and resources to work through it. The key is to approach it systematically and not underestimate the difficulty."""

CAPABILITY_EVIDENCE_WITH_HISTORY = (
    "Based on your journal history, you've faced {similar_count} similar challenges before. "
    "This shows you have experience with this type of situation.\n\n"
    "Your past experiences demonstrate that you have the capability to navigate difficult circumstances."
)
CAPABILITY_EVIDENCE_NEW = (
    "This appears to be a new type of challenge for you. While this specific situation is unfamiliar, "
    "your journaling shows you have general coping skills and self-awareness."
)

FOLLOW_UP_FALLBACK_TEMPLATE = (
    "That's a thoughtful question about your {severity} {situation} situation.\n\n"
    "{strategy_advice}\n\n"
    "Take it one step at a time, and keep writing down what you notice."
)

# Strategy sentences
STRATEGY_STEP_WITH_HISTORY = "Lean on what has worked for you before: {strategies}"
STRATEGY_STEP_DEFAULT = "Consider seeking professional support if this continues to impact your daily life"
STRATEGY_ADVICE_WITH_HISTORY = "Strategies that have helped you before: {strategies}."
STRATEGY_ADVICE_DEFAULT = "What strategies worked for you before?"
