"""Loading and filling of the bundled GraphQL query templates."""

import logging
import re
from pathlib import Path
from typing import Mapping, Optional

from query_client.errors import TemplateNotFound

BUNDLED_QUERIES = Path(__file__).parent / "queries"
PLACEHOLDER_PATTERN = re.compile(r"\{(\w+)\}")


def placeholders(text: str) -> list[str]:
    """Return the names of the ``{name}`` tokens present in ``text``."""
    return PLACEHOLDER_PATTERN.findall(text)


def substitute(text: str, values: Mapping[str, str]) -> str:
    """
    Replace every ``{key}`` in ``text`` with ``values[key]`` in a single pass.

    Keys are tried longest first so a name that prefixes another never
    clips it. Substituted values are not scanned again, and tokens with no
    matching key are left as they are.
    """
    if not values:
        return text
    keys = sorted(values, key=len, reverse=True)
    pattern = re.compile("|".join(re.escape("{" + key + "}") for key in keys))
    return pattern.sub(lambda match: str(values[match.group(0)[1:-1]]), text)


class TemplateResolver:
    """Resolves an operation's query template into a literal request body."""

    def __init__(self, template_dir: Optional[str] = None, comment_marker: str = "#"):
        self.template_dir = template_dir
        self.comment_marker = comment_marker
        self.logger = logging.getLogger(__name__)

    def _locate(self, template_name: str) -> Path:
        if self.template_dir is not None:
            return Path(self.template_dir) / template_name
        return BUNDLED_QUERIES / template_name

    def load(self, template_name: str, operation_name: Optional[str] = None) -> str:
        """Read a template and drop its comment lines."""
        location = self._locate(template_name)
        try:
            raw = location.read_text(encoding="utf-8")
        except OSError:
            raise TemplateNotFound(
                operation_name or template_name, str(location)
            ) from None

        lines = [
            line
            for line in raw.splitlines()
            if not line.startswith(self.comment_marker)
        ]
        return "\n".join(lines)

    def resolve(
        self,
        template_name: str,
        values: Mapping[str, str],
        operation_name: Optional[str] = None,
    ) -> str:
        """Load ``template_name`` and substitute ``values`` into it."""
        template = self.load(template_name, operation_name)
        body = substitute(template, values)

        leftover = [name for name in placeholders(body) if name not in values]
        if leftover:
            # Passed through unchanged; the backend rejects the query instead.
            self.logger.debug(f"Unresolved placeholders in {template_name}: {leftover}")
        return body
