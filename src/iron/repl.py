"""Interactive REPL for Iron language.

Provides a read-eval-print loop for interactive development and experimentation.
"""

import sys

import iron

_INCOMPLETE = "unexpected end of input"


class ReplContext:
    """Context for REPL session.

    Maintains state across multiple evaluations:
    - Interpreter whose globals keep every definition
    - Last result, bound as _
    - Pending source while an expression spans several lines
    """

    def __init__(self, interp=None):
        self.interp = interp or iron.Interp()
        self.interp.set_file("<repl>")
        self.last_result = None
        self.pending = []

    def eval_line(self, line: str):
        """Evaluate a single line of input.

        Lines are collected until the brackets balance, then the whole
        input is evaluated and the last value is returned.

        Returns:
            (tuple[bool, object]) False and None while more input is needed,
                otherwise True and the result value

        Raises:
            IronError: Parse or evaluation failure, the pending input is dropped
        """
        self.pending.append(line)
        source = "\n".join(self.pending)
        if not source.strip():
            self.pending.clear()
            return True, None
        self.interp.define("_", self.last_result)
        try:
            result = self.interp.run(source, "<repl>")
        except iron.ParseError as e:
            if e.message.startswith(_INCOMPLETE):
                return False, None
            self.pending.clear()
            raise
        except iron.IronError:
            self.pending.clear()
            raise
        self.pending.clear()
        self.last_result = result
        return True, result


def format_value(value) -> str:
    """Format a value for display in the REPL."""
    return iron.format_value(value)


def repl():
    """Run the interactive REPL."""
    print(f"Iron REPL v{iron.__version__}")
    print("Type expressions to evaluate them, definitions stay for the session.")
    print("Last result is available as _")
    print("Type 'exit' or Ctrl-D to quit.\n")

    context = ReplContext()

    while True:
        try:
            try:
                line = input("... " if context.pending else "iron> ")
            except EOFError:
                print("\nGoodbye!")
                break

            if not context.pending and line.strip().lower() in ("exit", "quit", ":q"):
                print("Goodbye!")
                break

            # Skip empty lines
            if not context.pending and not line.strip():
                continue

            done, result = context.eval_line(line)
            if done:
                print(format_value(result))

        except iron.IronError as e:
            print(f"error: {e}")
        except KeyboardInterrupt:
            context.pending.clear()
            print("\nKeyboardInterrupt")
            print("Type 'exit' to quit.")
            continue


def main():
    """Main entry point for REPL."""
    try:
        repl()
    except KeyboardInterrupt:
        print("\n\nGoodbye!")
        sys.exit(0)


if __name__ == "__main__":
    main()
