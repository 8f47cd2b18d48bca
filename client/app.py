"""
Acronym Lookup - command-line client
"""

import logging
import sys
from typing import TextIO

from icecream import ic

from client.api import LookupClient
from client.services import AcronymService
from core.abstract import App
from core.config import Settings
from core.constants import CLIENT_PROMPT, INDENT
from core.errors import AcronymError, LookupFailedError
from core.models.long_form import Acronym, LongForm

logger = logging.getLogger(__name__)

QUIT_COMMANDS = {"quit", "exit"}


def render_long_form(long_form: LongForm, depth: int = 0) -> list[str]:
    lines = [f"{INDENT * depth}{long_form}"]
    for variation in long_form.variations:
        lines.extend(render_long_form(variation, depth + 1))
    return lines


def render_acronym(acronym: Acronym) -> list[str]:
    lines = [acronym.short_form]
    for long_form in acronym.long_forms:
        lines.extend(render_long_form(long_form, 1))
    return lines


class ClientApp(App):
    """Looks up one term, or keeps prompting for terms, and prints the definitions."""

    lookup_client: LookupClient
    acronym_service: AcronymService

    def __init__(
        self,
        settings: Settings,
        term: str | None = None,
        lookup_client: LookupClient | None = None,
        stdin: TextIO | None = None,
        stdout: TextIO | None = None,
        stderr: TextIO | None = None,
    ) -> None:
        super().__init__(settings)
        self.term = term
        self.stdin = stdin or sys.stdin
        self.stdout = stdout or sys.stdout
        self.stderr = stderr or sys.stderr
        self.failed = False

        self.lookup_client = lookup_client or LookupClient(settings)
        self.acronym_service = AcronymService(self)
        self.acronym_service.register_result_callback(self._on_result)
        self.acronym_service.register_error_callback(self._on_error)

    def run(self) -> int:
        if self.term is not None:
            return self.search(self.term)
        return self.prompt()

    def close(self) -> None:
        self.lookup_client.close()

    def search(self, term: str) -> int:
        """Look up a term, wait for the answer and print it. Returns the exit status."""
        self.failed = False
        if self.acronym_service.lookup(term) is None:
            return 1

        try:
            finished = self.lookup_client.wait(timeout=self.settings.lookup_timeout)
        except KeyboardInterrupt:
            self.acronym_service.cancel()
            print("Lookup cancelled.", file=self.stderr)
            return 1

        if not finished:
            self.acronym_service.cancel()
            self._on_error(
                LookupFailedError(TimeoutError(f"No answer after {self.settings.lookup_timeout}s"))
            )

        return 1 if self.failed else 0

    def prompt(self) -> int:
        print(self.settings.client_title, file=self.stdout)
        status = 0

        while True:
            self.stdout.write(CLIENT_PROMPT)
            self.stdout.flush()

            line = self.stdin.readline()
            if not line or line.strip().lower() in QUIT_COMMANDS:
                return status

            status = self.search(line)

    def _on_result(self, acronym: Acronym) -> None:
        ic(acronym.short_form, len(acronym.long_forms))
        if not acronym.long_forms:
            print(f"{acronym.short_form}: no definitions", file=self.stdout)
            return
        for line in render_acronym(acronym):
            print(line, file=self.stdout)

    def _on_error(self, error: AcronymError) -> None:
        self.failed = True
        logger.debug(f"Lookup error: {error!r}")
        print(f"{error.title}: {error.message}", file=self.stderr)
