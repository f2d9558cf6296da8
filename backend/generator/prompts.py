"""
Tool Generation Prompts

Prompt builders for the idea, generate and update handlers.
"""

import json
from typing import Any, Dict, Optional

# ============================================
# Ideas
# ============================================

IDEAS_PROMPT = """You are an expert at creating interactive web tools for blog content.

Given the blog post below, suggest exactly 5 highly relevant and engaging interactive tool ideas \
(such as calculators, quizzes, checklists, or comparison charts) that would add value for readers.

Respond with a numbered list of 5 short, clear tool ideas, one per line.
Do not include explanations, headings, or markdown formatting.

Blog post:
{content}"""


def build_ideas_prompt(content: str) -> str:
    return IDEAS_PROMPT.format(content=content)


# ============================================
# Generate
# ============================================

GENERATE_PROMPT = """You are an expert at generating interactive tools that are embedded inside blog posts.

Build the following tool for the blog post below. It must provide real value to readers \
and be directly related to the post's subject.

## Output Rules
- Return an embeddable snippet, NOT a full document: no <!DOCTYPE>, <html>, <head> or <body> tags.
- Order: one <style> block first, then the HTML markup, then one <script> block last.
- Never nest <style> or <script> tags inside other elements or inside each other.
- Scope every CSS rule under a single wrapper class so the widget does not restyle the host page.
- Use plain JavaScript with no external libraries.
- Do not include markdown, triple backticks, or explanations. Return only the raw code.
{style_section}{requirements_section}
## Tool Idea
{idea}

## Blog Post
{content}"""

STYLE_SECTION = """
## Site Style
Match the host site's look. These are computed CSS values sampled from the page \
(empty values were not found):
{style_json}
"""

REQUIREMENTS_SECTION = """
## Additional Requirements
{requirements}
"""


def format_style_summary(style_summary: Optional[Dict[str, Any]]) -> str:
    """Style section of the generate prompt, empty when no style is known"""
    if not style_summary:
        return ""
    return STYLE_SECTION.format(style_json=json.dumps(style_summary, indent=2, ensure_ascii=False))


def build_generate_prompt(
    content: str,
    idea: str,
    style_summary: Optional[Dict[str, Any]] = None,
    user_requirements: Optional[str] = None,
) -> str:
    requirements_section = ""
    if user_requirements and user_requirements.strip():
        requirements_section = REQUIREMENTS_SECTION.format(requirements=user_requirements.strip())

    return GENERATE_PROMPT.format(
        style_section=format_style_summary(style_summary),
        requirements_section=requirements_section,
        idea=idea,
        content=content,
    )


# ============================================
# Update
# ============================================

UPDATE_PROMPT = """You are an expert at updating interactive tools for blog content.

Here is the original blog post:
{content}

Here is the current tool code:
{current_tool}

The user wants the following changes:
{feedback}

Update the tool accordingly. Keep it an embeddable snippet (one <style> block, markup, one <script> block; \
no <html>, <head> or <body> tags). Return only the updated, complete code, with no explanations or markdown."""


def build_update_prompt(content: str, current_tool: str, feedback: str) -> str:
    return UPDATE_PROMPT.format(
        content=content,
        current_tool=current_tool,
        feedback=feedback,
    )
