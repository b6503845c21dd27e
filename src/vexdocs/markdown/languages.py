"""Per-language token patterns for the syntax highlighter.

Each pattern set maps a token category to one compiled regex. Categories are
the CSS class suffixes emitted by the highlighter (``syntax-{category}``).
Declaration order inside a set breaks ties between equal-priority matches
that start at the same offset and have the same length.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Mapping


def _words(*words: str) -> str:
    return r"\b(?:" + "|".join(words) + r")\b"


@dataclass(frozen=True)
class LanguagePatterns:
    """An immutable category -> regex table for one language."""

    name: str
    patterns: Mapping[str, re.Pattern[str]] = field(default_factory=dict)

    @classmethod
    def build(cls, name: str, sources: dict[str, str], flags: int = 0) -> LanguagePatterns:
        compiled = {category: re.compile(src, flags) for category, src in sources.items()}
        return cls(name=name, patterns=MappingProxyType(compiled))


_C_COMMENT = r"//[^\n]*|/\*.*?\*/"
_DQ_STRING = r'"(?:\\.|[^"\\\n])*"'
_SQ_STRING = r"'(?:\\.|[^'\\\n])*'"
_CALL = r"(?<![\w$])[A-Za-z_$][\w$]*(?=\s*\()"

_JS_KEYWORDS = (
    "async", "await", "break", "case", "catch", "class", "const", "continue",
    "debugger", "default", "delete", "do", "else", "export", "extends", "false",
    "finally", "for", "from", "function", "if", "import", "in", "instanceof",
    "let", "new", "null", "of", "return", "static", "super", "switch", "this",
    "throw", "true", "try", "typeof", "undefined", "var", "void", "while",
    "with", "yield",
)  # fmt: skip

_JS_TYPES = (
    "Array", "Boolean", "Date", "Error", "Function", "JSON", "Map", "Math",
    "Number", "Object", "Promise", "RegExp", "Set", "String", "Symbol",
    "console", "document", "window",
)  # fmt: skip

# No number/operator categories: those tokens stay plain text.
JAVASCRIPT = LanguagePatterns.build(
    "javascript",
    {
        "comment": _C_COMMENT,
        "string": f"{_DQ_STRING}|{_SQ_STRING}",
        "template-literal": r"`(?:\\.|[^`\\])*`",
        "keyword": _words(*_JS_KEYWORDS),
        "type": _words(*_JS_TYPES),
        "decorator": r"@[A-Za-z_$][\w$.]*",
        "function": _CALL,
    },
    re.DOTALL,
)

TYPESCRIPT = LanguagePatterns.build(
    "typescript",
    {
        "comment": _C_COMMENT,
        "string": f"{_DQ_STRING}|{_SQ_STRING}",
        "template-literal": r"`(?:\\.|[^`\\])*`",
        "keyword": _words(
            *_JS_KEYWORDS,
            "abstract", "as", "declare", "enum", "implements", "interface",
            "keyof", "namespace", "private", "protected", "public", "readonly",
            "type",
        ),
        "type": _words(
            *_JS_TYPES, "any", "boolean", "never", "number", "string", "unknown"
        ),
        "decorator": r"@[A-Za-z_$][\w$.]*",
        "function": _CALL,
    },
    re.DOTALL,
)

PYTHON = LanguagePatterns.build(
    "python",
    {
        "comment": r"#[^\n]*",
        "string": r"(?<!\w)(?:[rRbBuUfF]{1,2})?"
        r"(?:\"\"\".*?\"\"\"|'''.*?'''|" + _DQ_STRING + "|" + _SQ_STRING + ")",
        "number": r"\b0[xX][0-9a-fA-F_]+|\b0[bBoO][0-7_]+|\b\d[\d_]*(?:\.\d[\d_]*)?(?:[eE][+-]?\d+)?j?",
        "keyword": _words(
            "False", "None", "True", "and", "as", "assert", "async", "await",
            "break", "case", "class", "continue", "def", "del", "elif", "else",
            "except", "finally", "for", "from", "global", "if", "import", "in",
            "is", "lambda", "match", "nonlocal", "not", "or", "pass", "raise",
            "return", "self", "try", "while", "with", "yield",
        ),
        "type": _words(
            "bool", "bytes", "dict", "float", "frozenset", "int", "list",
            "object", "set", "str", "tuple", "type",
        )
        + r"|\b[A-Z][a-z0-9]\w*\b",
        "decorator": r"(?<![\w)\]])@[A-Za-z_][\w.]*",
        "function": r"\b[A-Za-z_]\w*(?=\s*\()",
        "operator": r"->|:=|\*\*|//|[-+*/%=<>!&|^~]=?",
        "punctuation": r"[()\[\]{}:;,.]",
    },
    re.DOTALL,
)

_CSS_ELEMENTS = (
    "a", "article", "aside", "blockquote", "body", "button", "code", "div",
    "em", "footer", "form", "h[1-6]", "header", "hr", "html", "img", "input",
    "label", "li", "main", "nav", "ol", "p", "pre", "section", "select",
    "span", "strong", "table", "tbody", "td", "textarea", "th", "thead", "tr",
    "ul",
)  # fmt: skip

# "followed by an opening brace before any ; { }" marks selector context.
_IN_SELECTOR = r"(?=[^{};]*\{)"

CSS = LanguagePatterns.build(
    "css",
    {
        "comment": r"/\*.*?\*/",
        "string": f"{_DQ_STRING}|{_SQ_STRING}",
        "keyword": r"@[A-Za-z-]+|!important",
        "selector": r"(?<![\w-])[.#][A-Za-z_-][\w-]*" + _IN_SELECTOR
        + "|" + _words(*_CSS_ELEMENTS) + _IN_SELECTOR,
        "pseudo-element": r"::[A-Za-z-]+",
        "pseudo-class": r"(?<!:):[A-Za-z-]+" + _IN_SELECTOR,
        "attribute": r"(?<![\w-])-?[A-Za-z][\w-]*(?=\s*:)(?![^{};]*\{)",
        "number": r"#[0-9a-fA-F]{3,8}\b(?![^{};]*\{)"
        r"|(?<![\w-])\d*\.?\d+(?:px|em|rem|%|vh|vw|vmin|vmax|ch|pt|s|ms|deg|fr)?",
        "function": r"(?<![\w-])[A-Za-z-]+(?=\()",
        "variable": r"--[\w-]+",
        "punctuation": r"[{}();:,]",
    },
    re.DOTALL,
)

HTML = LanguagePatterns.build(
    "html",
    {
        "comment": r"<!--.*?-->",
        "doctype": r"<!DOCTYPE[^>]*>",
        "string": r"(?<==)\"[^\"]*\"|(?<==)'[^']*'",
        "tag": r"</?[A-Za-z][\w:-]*|/?>",
        "attribute": r"(?<=\s)[A-Za-z_:@][\w:.-]*(?=\s*=)",
    },
    re.DOTALL | re.IGNORECASE,
)

JSON = LanguagePatterns.build(
    "json",
    {
        "string": r'"(?:\\.|[^"\\])*"(?!\s*:)',
        "number": r"-?\b\d+(?:\.\d+)?(?:[eE][+-]?\d+)?\b",
        "keyword": _words("true", "false", "null"),
        "attribute": r'"(?:\\.|[^"\\])*"(?=\s*:)',
        "punctuation": r"[{}\[\]:,]",
    },
)

BASH = LanguagePatterns.build(
    "bash",
    {
        "comment": r"(?<![\w$])#[^\n]*",
        "string": r'"(?:\\.|[^"\\])*"' + "|'[^']*'",
        "number": r"(?<![\w$.-])\d+\b",
        "keyword": _words(
            "break", "case", "continue", "do", "done", "elif", "else", "esac",
            "export", "fi", "for", "function", "if", "in", "local", "readonly",
            "return", "select", "shift", "then", "until", "unset", "while",
        ),
        "function": r"\b[A-Za-z_][\w-]*(?=\s*\(\))",
        "variable": r"\$\{[^}\n]*\}|\$[A-Za-z_]\w*|\$[0-9@#?$!*-]",
        "operator": r"&&|\|\||>>|<<|[|<>]",
    },
)

JAVA = LanguagePatterns.build(
    "java",
    {
        "comment": _C_COMMENT,
        "string": f"{_DQ_STRING}|{_SQ_STRING}",
        "number": r"\b0[xX][0-9a-fA-F_]+[lL]?|\b\d[\d_]*(?:\.\d+)?[fFdDlL]?",
        "keyword": _words(
            "abstract", "break", "case", "catch", "class", "continue", "default",
            "do", "else", "enum", "extends", "false", "final", "finally", "for",
            "if", "implements", "import", "instanceof", "interface", "new",
            "null", "package", "private", "protected", "public", "return",
            "static", "super", "switch", "this", "throw", "throws", "true",
            "try", "var", "void", "while",
        ),
        "type": _words("boolean", "byte", "char", "double", "float", "int", "long", "short")
        + r"|\b[A-Z]\w*\b",
        "annotation": r"@[A-Za-z_]\w*(?:\.\w+)*",
        "function": r"\b[A-Za-z_]\w*(?=\s*\()",
        "operator": r"(?:(?!//|/\*)[-+*/%=<>!&|^~?])+",
        "punctuation": r"[()\[\]{};,.]",
    },
    re.DOTALL,
)

DEFAULT_LANGUAGE = JAVASCRIPT

LANGUAGES: Mapping[str, LanguagePatterns] = MappingProxyType(
    {
        "javascript": JAVASCRIPT,
        "js": JAVASCRIPT,
        "jsx": JAVASCRIPT,
        "mjs": JAVASCRIPT,
        "node": JAVASCRIPT,
        "typescript": TYPESCRIPT,
        "ts": TYPESCRIPT,
        "tsx": TYPESCRIPT,
        "python": PYTHON,
        "py": PYTHON,
        "css": CSS,
        "scss": CSS,
        "html": HTML,
        "xml": HTML,
        "svg": HTML,
        "vue": HTML,
        "json": JSON,
        "bash": BASH,
        "sh": BASH,
        "shell": BASH,
        "zsh": BASH,
        "console": BASH,
        "java": JAVA,
    }
)


def get_patterns(language: str | None) -> LanguagePatterns:
    """Return the pattern set for a language tag, or the JavaScript default."""
    if not language:
        return DEFAULT_LANGUAGE
    return LANGUAGES.get(language.strip().lower(), DEFAULT_LANGUAGE)


def is_known_language(language: str | None) -> bool:
    return language is not None and language.strip().lower() in LANGUAGES
