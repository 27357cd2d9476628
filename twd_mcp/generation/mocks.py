"""
Mock handler synthesis from captured network traffic.

Each exchange becomes a ``twd.mockRequest()`` call. Repeats of the same
endpoint (method + path) reuse one alias so the later mock replaces the
earlier one when the statements run in order.
"""

import logging
import re
from typing import Dict, List, Optional, Tuple
from urllib.parse import quote, urlsplit

from .literals import render_literal
from .models import MockOutcome, NetworkExchange

logger = logging.getLogger(__name__)

MOCK_HEADER = "// Generated mock handlers"
MAX_ALIAS_LENGTH = 20

_NON_ALPHANUMERIC = re.compile(r"[^a-zA-Z0-9]")
# Characters a browser leaves unencoded in URL.pathname.
_PATH_SAFE = "/%:@!$&'()*+,;=-._~"

_SINGLE_DOT = {".", "%2e"}
_DOUBLE_DOT = {"..", ".%2e", "%2e.", "%2e%2e"}


def remove_dot_segments(path: str) -> str:
    """Resolve ``.`` and ``..`` segments the way a browser URL parser does.

    A trailing dot segment leaves a trailing slash, so ``/a/b/..`` becomes
    ``/a/``. Empty segments are kept.
    """
    segments = path.split("/")[1:]
    resolved: List[str] = []
    for position, segment in enumerate(segments, start=1):
        last = position == len(segments)
        lowered = segment.lower()
        if lowered in _DOUBLE_DOT:
            if resolved:
                resolved.pop()
            if last:
                resolved.append("")
        elif lowered in _SINGLE_DOT:
            if last:
                resolved.append("")
        else:
            resolved.append(segment)
    return "/" + "/".join(resolved)


def parse_path(url: str) -> Optional[str]:
    """Path component of an absolute URL, or None if the URL is malformed."""
    try:
        parts = urlsplit(url.strip())
        # Accessing port validates it.
        parts.port
    except ValueError:
        return None

    if not parts.scheme or not parts.netloc or not parts.hostname:
        return None

    return quote(remove_dot_segments(parts.path), safe=_PATH_SAFE)


def derive_alias(path: str, position: int) -> str:
    """Alias built from the path segments, e.g. ``/api/user-list`` -> ``ApiUserlist``.

    Falls back to ``request<position>`` when the path yields nothing.
    """
    segments = [segment for segment in path.split("/") if segment]
    alias = "".join(
        segment[0].upper() + _NON_ALPHANUMERIC.sub("", segment[1:])
        for segment in segments
    )
    return alias[:MAX_ALIAS_LENGTH] or f"request{position}"


def endpoint_key(method: str, path: str) -> str:
    return f"{method.upper()}:{path}"


class MockSynthesizer:
    """Generates mock handler statements for captured exchanges."""

    def __init__(self, indent: int = 2):
        self.indent = indent

    def outcomes(self, exchanges: List[NetworkExchange]) -> List[MockOutcome]:
        """Synthesize one outcome per exchange, in input order.

        Exchanges with malformed URLs yield skipped outcomes instead of
        aborting the whole run.
        """
        aliases: Dict[str, str] = {}
        results = []

        for index, exchange in enumerate(exchanges):
            path = parse_path(exchange.url)
            if path is None:
                logger.warning(
                    f"Skipping request with invalid URL: {exchange.url!r}",
                    extra={"metadata": {"index": index, "url": exchange.url}},
                )
                results.append(
                    MockOutcome(
                        index=index,
                        url=exchange.url,
                        skip_reason=f"Invalid URL: {exchange.url}",
                    )
                )
                continue

            alias, reused = self._alias_for(aliases, exchange.method, path, index + 1)
            if reused:
                logger.debug(
                    f"Reusing alias {alias} for {exchange.method.upper()} {path}",
                    extra={"metadata": {"index": index, "alias": alias}},
                )

            results.append(
                MockOutcome(
                    index=index,
                    url=exchange.url,
                    alias=alias,
                    statement=self._statement(alias, exchange, path),
                )
            )

        return results

    def synthesize(self, exchanges: List[NetworkExchange]) -> str:
        """Generate the mock handler block for a list of exchanges.

        Args:
            exchanges: Captured request/response pairs in recording order

        Returns:
            Statement block, or an empty string when there are no exchanges
        """
        if not exchanges:
            return ""

        statements = [
            outcome.statement
            for outcome in self.outcomes(exchanges)
            if not outcome.skipped
        ]

        lines = [MOCK_HEADER]
        if statements:
            lines.append("\n\n".join(statements))
        return "\n".join(lines)

    def _alias_for(
        self, aliases: Dict[str, str], method: str, path: str, position: int
    ) -> Tuple[str, bool]:
        key = endpoint_key(method, path)
        if key in aliases:
            return aliases[key], True

        alias = derive_alias(path, position)
        aliases[key] = alias
        return alias, False

    def _statement(self, alias: str, exchange: NetworkExchange, path: str) -> str:
        pad = " " * self.indent
        body = render_literal(exchange.response.body, self.indent).replace(
            "\n", "\n" + pad
        )
        return "\n".join(
            [
                f'twd.mockRequest("{alias}", {{',
                f'{pad}method: "{exchange.method.upper()}",',
                f'{pad}url: "{path}",',
                f"{pad}response: {body},",
                f"{pad}status: {exchange.response.effective_status}",
                "});",
            ]
        )


def generate_mocks(exchanges: List[NetworkExchange]) -> str:
    """Generate mock handlers with a default synthesizer."""
    return MockSynthesizer().synthesize(exchanges)
