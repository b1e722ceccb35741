"""URL helpers for command and navigation links."""

from typing import Callable
from urllib.parse import quote

# Characters encodeURIComponent leaves alone besides letters, digits and "-_.~"
_URI_COMPONENT_SAFE = "!~*'()"

LinkBuilder = Callable[[str], str]


def encode_uri_component(value: str) -> str:
    """Percent-encode a value the same way JavaScript's encodeURIComponent does.

    Raises:
        UnicodeEncodeError: If value holds code points UTF-8 cannot encode (lone surrogates)
    """
    return quote(value, safe=_URI_COMPONENT_SAFE)


def build_navigation_url(scheme: str, vault_name: str, file_path: str) -> str:
    """Build a link that opens a file in the vault, e.g. obsidian://open?vault=..&file=.."""
    vault = encode_uri_component(vault_name)
    file = encode_uri_component(file_path)
    return f"{scheme}://open?vault={vault}&file={file}"


def make_link_builder(scheme: str, vault_name: str) -> LinkBuilder:
    """Return a function turning a wiki link target into a navigation URL.

    Targets name notes without their extension, so ".md" is added unless present.
    """

    def build(target: str) -> str:
        file_path = target if target.lower().endswith(".md") else f"{target}.md"
        return build_navigation_url(scheme, vault_name, file_path)

    return build
