from .contains_regex import check_contains_regex, check_only_contains_regex
from .contains_substring import check_contains_substring
from .html_root_url import check_html_root_url
from .markdown_deps import check_markdown_deps

__all__ = [
    "check_contains_regex",
    "check_contains_substring",
    "check_html_root_url",
    "check_markdown_deps",
    "check_only_contains_regex",
]
