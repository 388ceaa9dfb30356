"""Interactive read-eval-print loop for Crisp."""

import logging
from typing import Callable, List, TextIO
import sys

from crisp.crisp import Crisp
from crisp.crisp_error import CrispError


class CrispRepl:
    """
    Line-oriented front end over one long-lived Crisp context.

    Each line is parsed and its top-level expressions are evaluated in order.
    An error in one expression is reported and the next expression still runs.
    """

    PROMPT = ">> "

    def __init__(
        self,
        crisp: Crisp,
        input_func: Callable[[str], str] = input,
        output: TextIO | None = None
    ) -> None:
        """
        Initialize the REPL.

        Args:
            crisp: Context to evaluate against
            input_func: Function used to read a line given a prompt
            output: Stream results and errors are written to (stdout if omitted)
        """
        self.crisp = crisp
        self._input_func = input_func
        self._output = output if output is not None else sys.stdout
        self._logger = logging.getLogger("CrispRepl")

    def run_source(self, source: str) -> List[CrispError]:
        """
        Evaluate every top-level expression in a piece of source text.

        Args:
            source: Crisp source text

        Returns:
            The errors reported, in order (empty if everything succeeded)
        """
        errors: List[CrispError] = []

        try:
            exprs = self.crisp.parse(source)

        except CrispError as e:
            self._report_error(e)
            errors.append(e)
            return errors

        for expr in exprs:
            try:
                result = self.crisp.evaluate_expr(expr)

            except CrispError as e:
                self._report_error(e)
                errors.append(e)
                continue

            self._write(self.crisp.format(result))

        return errors

    def run(self) -> None:
        """Read and evaluate lines until end of input or interrupt."""
        try:
            import readline  # pylint: disable=unused-import,import-outside-toplevel

        except ImportError:
            pass

        self._logger.info("REPL started")
        while True:
            try:
                line = self._input_func(self.PROMPT)

            except (EOFError, KeyboardInterrupt):
                self._write("")
                break

            if not line.strip():
                continue

            try:
                self.run_source(line)

            except KeyboardInterrupt:
                # Bindings made before the interrupt are kept.
                self._logger.warning("Evaluation interrupted")
                self._write("Interrupted")

        self._logger.info("REPL finished")

    def _report_error(self, error: CrispError) -> None:
        self._logger.warning("Crisp error: %s", error.message)
        self._write(f"Error occurred: {error.message}")

    def _write(self, text: str) -> None:
        self._output.write(text + "\n")
        self._output.flush()
