"""Generator agent: writes a solution file for a challenge."""

from __future__ import annotations

import sys
from pathlib import Path

from aocgen.agents.base import BaseAgent, extract_code_block
from aocgen.challenges import write_input_file
from aocgen.models import Challenge
from aocgen.prompts import GENERATOR_SYSTEM, TEST_MODEL_RESPONSE, generator_user_prompt
from aocgen.runtimes import solution_filename

TEST_MODEL = "test"


class GeneratorAgent(BaseAgent):
    def generate(self, challenge: Challenge, language: str) -> str:
        """Return solution code for *challenge* in *language*."""
        if self.config.model == TEST_MODEL:
            raw = TEST_MODEL_RESPONSE.format(language=language)
        else:
            raw = self._call_llm(
                system=GENERATOR_SYSTEM,
                user=generator_user_prompt(challenge, language),
            )
        return extract_code_block(raw)

    def write_solution(
        self,
        challenge: Challenge,
        language: str,
        directory: str | Path = ".",
    ) -> Path:
        """Generate code and write ``<name>.<ext>`` plus ``input.txt``.

        The language is resolved first so an unsupported one fails before
        anything is written or any model is called.
        """
        path = Path(directory) / solution_filename(challenge.name, language)
        self._log(f"Generating {language} solution for {challenge.name} with {self.config.model}")
        code = self.generate(challenge, language)
        write_input_file(challenge, directory)
        path.write_text(code + "\n", encoding="utf-8")
        self._log(f"Wrote {len(code)} chars of code to {path}")
        return path

    def _log(self, message: str) -> None:
        if self.config.verbose:
            print(message, file=sys.stderr)
