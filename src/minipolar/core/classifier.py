# src/minipolar/core/classifier.py
import re

from minipolar.models import ClassificationFlags

CODE_EXAMPLE_MARKERS = ("code:", "`", "language-")
FRAMEWORK_MARKERS = ("React", "jsx", "styled", "component")

# No DOTALL: `.` stops at line breaks.
_CLASS_EXTENDS_REACT = re.compile(r"class.*extends React")


def has_code_examples(text: str) -> bool:
    return any(marker in text for marker in CODE_EXAMPLE_MARKERS)


def has_framework_content(text: str) -> bool:
    if any(marker in text for marker in FRAMEWORK_MARKERS):
        return True
    return _CLASS_EXTENDS_REACT.search(text) is not None


def classify_js(text: str) -> ClassificationFlags:
    """
    Guesses, from raw text, whether a script embeds code samples or defines
    UI components. Plain substring tests: a marker inside a comment or a
    string literal counts as well.
    """
    return ClassificationFlags(
        has_code_examples=has_code_examples(text),
        has_framework_content=has_framework_content(text),
    )
