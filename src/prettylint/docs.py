from __future__ import annotations

import logging
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from typing import Any

from prettylint.engine.types import RulesMeta

logger = logging.getLogger(__name__)


class RuleDocsNotFoundError(LookupError):
    """Raised when no documentation is known for a rule id."""


@dataclass(frozen=True, slots=True)
class RuleDocs:
    rule_id: str
    url: str

    def __getitem__(self, key: str) -> str:
        # Lookups are consumed as mappings with a `url` key.
        if key == "url":
            return self.url
        raise KeyError(key)


RuleDocsLookup = Callable[[str], Mapping[str, Any] | RuleDocs]

CORE_PREFIX = ""

# Plugin prefix (as it appears before the last `/` of a rule id) to URL
# template. `{rule}` is the rule name without the prefix.
BUILTIN_RULE_DOCS: Mapping[str, str] = {
    CORE_PREFIX: "https://eslint.org/docs/latest/rules/{rule}",
    "@typescript-eslint": "https://typescript-eslint.io/rules/{rule}",
    "@stylistic": "https://eslint.style/rules/default/{rule}",
    "@next/next": "https://nextjs.org/docs/messages/{rule}",
    "react": "https://github.com/jsx-eslint/eslint-plugin-react/blob/master/docs/rules/{rule}.md",
    "react-hooks": "https://react.dev/reference/rules/rules-of-hooks",
    "jsx-a11y": "https://github.com/jsx-eslint/eslint-plugin-jsx-a11y/blob/main/docs/rules/{rule}.md",
    "import": "https://github.com/import-js/eslint-plugin-import/blob/main/docs/rules/{rule}.md",
    "unicorn": "https://github.com/sindresorhus/eslint-plugin-unicorn/blob/main/docs/rules/{rule}.md",
    "n": "https://github.com/eslint-community/eslint-plugin-n/blob/master/docs/rules/{rule}.md",
    "node": "https://github.com/mysticatea/eslint-plugin-node/blob/master/docs/rules/{rule}.md",
    "promise": "https://github.com/eslint-community/eslint-plugin-promise/blob/main/docs/rules/{rule}.md",
    "jest": "https://github.com/jest-community/eslint-plugin-jest/blob/main/docs/rules/{rule}.md",
    "vue": "https://eslint.vuejs.org/rules/{rule}.html",
    "prettier": "https://github.com/prettier/eslint-plugin-prettier#options",
    "ava": "https://github.com/avajs/eslint-plugin-ava/blob/main/docs/rules/{rule}.md",
    "mocha": "https://github.com/lo1tuma/eslint-plugin-mocha/blob/main/docs/rules/{rule}.md",
    "security": "https://github.com/eslint-community/eslint-plugin-security/blob/main/docs/rules/{rule}.md",
}


def split_rule_id(rule_id: str) -> tuple[str, str]:
    """
    Split `rule_id` into (plugin prefix, rule name).

    >>> split_rule_id("no-console")
    ('', 'no-console')
    >>> split_rule_id("@typescript-eslint/no-unused-vars")
    ('@typescript-eslint', 'no-unused-vars')
    """

    prefix, sep, name = rule_id.rpartition("/")
    if not sep:
        return CORE_PREFIX, rule_id
    return prefix, name


def lookup_rule_docs(rule_id: str, *, extra: Mapping[str, str] | None = None) -> RuleDocs:
    """
    Resolve documentation for `rule_id` from the built-in table.

    `extra` templates take precedence over the built-in ones.
    """

    if not rule_id:
        raise RuleDocsNotFoundError("empty rule id")

    prefix, name = split_rule_id(rule_id)
    template = None
    if extra is not None:
        template = extra.get(prefix)
    if template is None:
        template = BUILTIN_RULE_DOCS.get(prefix)
    if template is None:
        raise RuleDocsNotFoundError(f"no documentation known for plugin {prefix!r} (rule {rule_id!r})")
    return RuleDocs(rule_id=rule_id, url=template.replace("{rule}", name))


def make_rule_docs_lookup(extra: Mapping[str, str] | None = None) -> RuleDocsLookup:
    def _lookup(rule_id: str) -> RuleDocs:
        return lookup_rule_docs(rule_id, extra=extra)

    return _lookup


def _url_from_meta(rule_id: str, rules_meta: RulesMeta | None) -> str | None:
    if rules_meta is None:
        return None
    try:
        url = rules_meta[rule_id]["docs"]["url"]
    except (KeyError, TypeError, IndexError):
        return None
    return url if isinstance(url, str) and url else None


def resolve_doc_url(
    rule_id: str,
    rules_meta: RulesMeta | None = None,
    *,
    lookup: RuleDocsLookup | None = lookup_rule_docs,
) -> str | None:
    """
    Return a documentation URL for `rule_id`, or None.

    `rules_meta` (as reported by the linter) wins over `lookup`. Lookup
    failures of any kind mean "no URL".
    """

    url = _url_from_meta(rule_id, rules_meta)
    if url is not None:
        return url
    if lookup is None or not rule_id:
        return None

    try:
        url = lookup(rule_id)["url"]
    except Exception as exc:  # best-effort: external lookups may fail arbitrarily
        logger.debug("no documentation for %s: %s", rule_id, exc)
        return None
    return url if isinstance(url, str) and url else None
