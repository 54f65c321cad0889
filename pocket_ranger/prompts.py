"""Handlebars prompt rendering for the hint provider."""

from collections.abc import Callable, Iterable
from typing import Any

import pybars

from pocket_ranger.models import AdventureRecord
from pocket_ranger.resolver import PriorityRule


_compiler = pybars.Compiler()
_cache: dict[str, Callable] = {}


class PromptError(Exception):
    """Raised when a Handlebars template fails to compile or render."""


HINT_SYSTEM_PROMPT = """\
You are a helpful outdoor adventure planning assistant for Pocket Ranger. \
Your job is to understand user requests for outdoor activities and determine \
which adventure location best matches their request.

Available adventure locations:
{{#each adventures}}
{{number}}. {{{file}}} - {{{name}}}, {{{city}}} ({{activity}}{{#if keywords}}: {{{keywords}}}{{/if}})
{{/each}}
{{#if rules}}

CRITICAL RULES:
{{#each rules}}
- If the user mentions "{{{triggers}}}" anywhere, you MUST recommend "{{{file}}}"
{{/each}}
{{/if}}

Analyze the user's request and determine which adventure file best matches \
their interests. Your response should include the exact filename and explain \
why this location matches their request."""


def render_prompt(template_str: str, context: dict[str, Any]) -> str:
    """Compile and render a Handlebars template with the given context.

    Templates are cached by source string to avoid recompilation.
    """
    try:
        compiled = _cache.get(template_str)
        if compiled is None:
            compiled = _compiler.compile(template_str)
            _cache[template_str] = compiled
        return str(compiled(context))
    except Exception as e:
        raise PromptError(f"Template error: {e}") from e


def build_hint_context(
    records: Iterable[AdventureRecord],
    rules: Iterable[PriorityRule] = (),
) -> dict[str, Any]:
    """Template variables for HINT_SYSTEM_PROMPT.

    Each adventure becomes {number, file, name, city, activity, keywords};
    each priority rule becomes {triggers, file}.
    """
    adventures = [
        {
            "number": number,
            "file": f"{r.key}.json",
            "name": r.name,
            "city": r.city,
            "activity": r.activity,
            "keywords": ", ".join(r.keywords),
        }
        for number, r in enumerate(records, start=1)
    ]
    return {
        "adventures": adventures,
        "rules": [
            {"triggers": '" or "'.join(rule.triggers), "file": f"{rule.key}.json"}
            for rule in rules
        ],
    }


def render_hint_system_prompt(
    records: Iterable[AdventureRecord],
    rules: Iterable[PriorityRule] = (),
) -> str:
    return render_prompt(HINT_SYSTEM_PROMPT, build_hint_context(records, rules))
