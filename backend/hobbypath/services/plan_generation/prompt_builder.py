"""Prompt construction for learning-plan generation."""
from __future__ import annotations

from typing import Dict, Tuple

TECHNIQUE_COUNT_RANGE: Tuple[int, int] = (6, 7)

LEVEL_TIME_RANGES: Dict[str, Tuple[int, int]] = {
    "Beginner": (15, 45),
    "Intermediate": (30, 60),
    "Advanced": (45, 90),
}

LEVEL_FOCUS = {
    "Beginner": "Focus on the absolute fundamentals needed to start practicing {hobby}.",
    "Intermediate": "Bridge basic knowledge to intermediate {hobby} concepts.",
    "Advanced": "Focus on advanced {hobby} techniques that lead to mastery.",
}


def build_prompt(hobby: str, level: str) -> str:
    """Return the single instruction string sent to the model for ``hobby`` at ``level``."""
    low, high = TECHNIQUE_COUNT_RANGE
    min_minutes, max_minutes = LEVEL_TIME_RANGES.get(level, LEVEL_TIME_RANGES["Intermediate"])
    focus = LEVEL_FOCUS.get(level, LEVEL_FOCUS["Intermediate"]).format(hobby=hobby)

    return (
        f"You are a world-class {hobby} instructor creating an efficient learning curriculum "
        f"for a {level} level student.\n\n"
        "### CRITICAL REQUIREMENTS\n"
        f"1. Provide EXACTLY {low}-{high} core techniques/skills (no more, no less).\n"
        "2. Each technique must be:\n"
        f"   - Fundamental and high-impact for {level} level {hobby}\n"
        "   - Logically sequenced: each technique may build on the ones before it, never on later ones\n"
        "   - Practical, with a clear learning outcome\n"
        f"   - Given a realistic time estimate between {min_minutes} and {max_minutes} minutes, "
        "written as \"<number> mins\"\n"
        f"3. For {level} {hobby}: {focus}\n"
        "4. For each technique, suggest 2-3 specific search keywords that would find good tutorial videos.\n\n"
        "### RESPONSE FORMAT\n"
        "Respond with ONLY a valid JSON array. No markdown, no explanations, no text before or after the array.\n\n"
        "[\n"
        "  {\n"
        '    "title": "Specific technique name",\n'
        f'    "description": "Clear description of what to learn and practice. Be specific about the {hobby} skill being developed.",\n'
        f'    "estimatedTime": "{min_minutes} mins",\n'
        '    "difficulty": "Easy|Medium|Hard",\n'
        '    "prerequisites": "What the student should know before attempting this",\n'
        f'    "practiceHints": "2-3 specific practice tips for mastering this {hobby} technique",\n'
        '    "searchKeywords": ["search term 1", "search term 2", "search term 3"]\n'
        "  }\n"
        "]\n\n"
        f"Create the optimized learning plan for {level} {hobby}:"
    )
